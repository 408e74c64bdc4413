"""
Employee Onboarding API - Main Application

FastAPI backend with:
- PostgreSQL for the onboarding tables (employees + 7 dependents)
- Local upload directory for ID proofs, signatures and documents
- Review endpoints: list, status update, bulk delete, download

Run: uvicorn onboarding_api.main:create_app --factory --reload
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from onboarding_api import __version__
from onboarding_api.api.routes import api_router
from onboarding_api.core.config import Settings, get_settings
from onboarding_api.core.exceptions import register_exception_handlers
from onboarding_api.core.logging_config import configure_logging
from onboarding_api.db.postgres import Database
from onboarding_api.services.file_storage import ensure_upload_dirs
from onboarding_api.utils.file_upload import UploadRules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    if settings.create_tables_on_startup:
        try:
            database.create_tables()
            logger.info("Onboarding tables ready")
        except SQLAlchemyError as e:
            logger.error("Table creation failed: %s", e)
    yield
    database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    The Database is created here (or passed in) and handed to routes via
    the get_database dependency; nothing is module-level state.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    ensure_upload_dirs(settings.upload_dir, settings.staging_dir)

    app = FastAPI(
        title="Employee Onboarding API",
        description="""
        Backend for the employee onboarding form.

        ## Features
        - **Submission**: multipart form with personal data, government IDs,
          address, bank details, education / employment history and files
        - **Review**: list submissions, update review status
        - **Admin**: clear every record, download uploaded files
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.upload_rules = UploadRules.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    if settings.serve_uploads:
        app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.get("/health", tags=["Health"])
    def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "database": "connected" if app.state.database.ping() else "disconnected",
            "uploads": "writable" if os.access(settings.upload_dir, os.W_OK) else "not writable",
        }

    return app
