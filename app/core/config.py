"""Application configuration using Pydantic BaseSettings."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

from app.utils.hash import check_password_length

logger = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load .env with fallback encodings to avoid Unicode errors."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            load_dotenv(dotenv_path=env_path, encoding=encoding, override=False)
            return
        except UnicodeDecodeError:
            continue
    logger.warning("Failed to decode .env; using process env vars only.")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "Storefront Catalog Service"
    app_version: str = "1.0.0"
    app_env: str = "dev"  # Environment: dev, test, prod

    # Database settings
    database_url: str = "sqlite:///./storefront.db"
    database_echo: bool = False

    # Token settings (lifetimes in minutes)
    auth_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires: int = 60
    refresh_token_time: int = 10080

    # Google federated login
    google_client_id: str | None = None
    google_tokeninfo_url: str = "https://oauth2.googleapis.com/tokeninfo"

    # Cloudinary media host
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    upload_folder: str = "storefront"
    upload_timeout_seconds: float = 60.0

    # First SUPER_ADMIN, created at startup when set
    bootstrap_admin_email: str | None = None
    bootstrap_admin_password: str | None = None
    bootstrap_admin_username: str = "superadmin"

    @field_validator("bootstrap_admin_password")
    @classmethod
    def _bootstrap_password_fits_bcrypt(cls, value: str | None) -> str | None:
        return check_password_length(value) if value else value

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Logging settings
    log_level: str = "info"  # debug, info, warning, error
    log_dir: str = "logs"
    log_backup_count: int = 14
    log_to_file: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from .env


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


# Load .env file on module import
_load_env_file()
