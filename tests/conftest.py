from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from onboarding_api.core.config import Settings
from onboarding_api.db.postgres import Database
from onboarding_api.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'onboarding.db'}",
        upload_dir=str(tmp_path / "uploads"),
        staging_dir=str(tmp_path / "staging"),
    )


@pytest.fixture
def database(settings):
    db = Database.from_settings(settings)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def client(settings, database):
    with TestClient(create_app(settings, database)) as c:
        yield c


@pytest.fixture
def make_client(database):
    """Build a client for a variant of the settings, sharing the test database."""
    clients = []

    def _make(settings: Settings, **client_kwargs) -> TestClient:
        c = TestClient(create_app(settings, database), **client_kwargs)
        c.__enter__()
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.__exit__(None, None, None)
