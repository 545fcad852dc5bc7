"""Configuration management with Pydantic settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dirarchiver.app.ports.archive import ArchiveFormat

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """dirarchiver configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRARCHIVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_format: ArchiveFormat = Field(
        default="zip",
        description="Archive format used by the CLI when --format is not given",
    )

    copy_chunk_size: int = Field(
        default=65536,
        ge=1,
        description="Buffer size (bytes) used when streaming file contents into an entry",
    )

    compute_digest: bool = Field(
        default=True,
        description="Include the SHA-256 of the finished archive in the build summary",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level applied by the CLI",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
