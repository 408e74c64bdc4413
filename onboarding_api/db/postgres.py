import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from onboarding_api.core.config import Settings
from onboarding_api.db.tables import metadata

logger = logging.getLogger(__name__)


class Database:
    """
    Database client handed to every route through get_database().

    Owns the engine (and its connection pool) and the session factory.
    Built once per application by create_app() instead of living at
    module level, so tests can point it at SQLite.
    """

    def __init__(self, url: str, echo: bool = False, pool_size: int = 5, max_overflow: int = 10):
        engine_kwargs = {"echo": echo}
        if not url.startswith("sqlite"):
            # pool_size=5: maintain 5 connections ready
            # max_overflow=10: allow 10 extra connections under load
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow, pool_pre_ping=True)
        self.engine: Engine = create_engine(url, **engine_kwargs)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Transaction scope: commits on normal exit, rolls back on any
        exception and always returns the connection to the pool.

        Usage:
            with database.session() as db:
                db.execute(text("SELECT * FROM employees"))
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def execute_raw_sql(self, sql: str, params: Optional[dict] = None) -> list:
        """
        Execute raw SQL and return results as list of dicts.
        """
        with self.session() as db:
            result = db.execute(text(sql), params or {})
            columns = list(result.keys())
            return [dict(zip(columns, row)) for row in result.fetchall()]

    def create_tables(self) -> None:
        """Create any missing onboarding tables."""
        metadata.create_all(self.engine)

    def ping(self) -> bool:
        """
        Test if the database is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            with self.session() as db:
                return db.execute(text("SELECT 1")).scalar() == 1
        except SQLAlchemyError as e:
            logger.warning("Database connection failed: %s", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/employees")
        def list_employees(database: Database = Depends(get_database)):
            ...
    """
    return request.app.state.database
