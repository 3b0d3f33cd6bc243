"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_DOCUMENT_EXTENSIONS = [".pdf", ".png", ".jpg", ".jpeg", ".mp4"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Database
    database_url: str = Field(default="sqlite:///./profiles.db", description="SQLAlchemy database URL")
    database_echo: bool = Field(default=False, description="Log emitted SQL")

    # Document storage
    document_storage_bucket: str = Field(default="profile-documents")
    document_storage_path: str = Field(default=str(BASE_DIR / "storage"), description="Local storage root")
    document_base_url: str = Field(default="/documents", description="Public URL prefix for stored documents")
    max_document_size_mb: int = Field(default=10)
    allowed_document_extensions: str | List[str] = Field(
        default=",".join(DEFAULT_DOCUMENT_EXTENSIONS)
    )

    # Events
    event_log_enabled: bool = Field(default=True, description="Keep dispatched events in memory")

    @field_validator("allowed_document_extensions", mode="before")
    @classmethod
    def parse_document_extensions(cls, v):
        """Parse document extensions from comma-separated string or list."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return list(DEFAULT_DOCUMENT_EXTENSIONS)
        if isinstance(v, str):
            v = v.split(",")
        extensions = []
        for ext in v:
            ext = ext.strip().lower()
            if ext:
                extensions.append(ext if ext.startswith(".") else f".{ext}")
        return extensions

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).strip().upper() if v else "INFO"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"

    @property
    def max_document_size_bytes(self) -> int:
        """Get max document size in bytes."""
        return self.max_document_size_mb * 1024 * 1024

    def validate_environment(self) -> None:
        """Validate settings that must not keep their development defaults."""
        if self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL must point to a server database in production")
        if self.debug:
            raise ValueError("DEBUG must be disabled in production")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings


# Create a global settings instance
settings = get_settings()
