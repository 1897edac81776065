"""
Application configuration using Pydantic Settings.

Configuration values can be set via environment variables or .env file.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "RF Link Budget"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    DEV_MODE: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8500

    # Session storage
    SESSION_DIR: Path = Path("/tmp/sessions")
    SESSION_EXPIRY_SECONDS: int = Field(default=3600, gt=0)
    SESSION_COOKIE_NAME: str = "session_id"

    # Calculation log (one line per calculation or error)
    LOG_FILE: Path = Path("link_budget.log")


# Global settings instance
settings = Settings()
