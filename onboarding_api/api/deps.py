"""
Shared FastAPI dependencies. Everything here reads what create_app()
put on app.state, so tests can build an app with their own settings.
"""

from fastapi import Request

from onboarding_api.core.config import Settings
from onboarding_api.db.postgres import get_database
from onboarding_api.schemas.converters import UrlBuilder, file_url_builder
from onboarding_api.utils.file_upload import UploadRules

__all__ = ["get_app_settings", "get_database", "get_file_url_builder", "get_upload_rules"]

DOWNLOAD_URL_PREFIX = "/api/download"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upload_rules(request: Request) -> UploadRules:
    return request.app.state.upload_rules


def get_file_url_builder(request: Request) -> UrlBuilder:
    """Static /uploads URLs when the directory is mounted, download URLs otherwise."""
    settings: Settings = request.app.state.settings
    prefix = settings.upload_url_prefix if settings.serve_uploads else DOWNLOAD_URL_PREFIX
    return file_url_builder(prefix)
