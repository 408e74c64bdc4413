"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = "root"
    postgres_db: str = "employee_onboarding"

    # Full SQLAlchemy URL, wins over the postgres_* parts when set
    database_url: Optional[str] = None
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Uploads
    upload_dir: str = "uploads"
    staging_dir: str = "uploads_staging"
    upload_url_prefix: str = "/uploads"
    serve_uploads: bool = True
    enforce_upload_rules: bool = True
    allowed_extensions: List[str] = [".pdf", ".jpg", ".jpeg", ".png"]
    allowed_mime_types: List[str] = ["application/pdf", "image/jpeg", "image/png"]
    max_upload_size_mb: Optional[int] = 5
    max_multi_file_count: int = 10

    # App
    cors_origins: List[str] = ["*"]
    create_tables_on_startup: bool = True
    debug: bool = False
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL handed to create_engine."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def max_upload_size_bytes(self) -> Optional[int]:
        if self.max_upload_size_mb is None:
            return None
        return self.max_upload_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
