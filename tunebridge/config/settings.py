"""Configuration management using Pydantic Settings.

This module provides type-safe configuration with automatic environment
variable and `.env` loading.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- MigrationConfig: Rhythmbox data location, file names and library quirks
"""

import os
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    # File logging is off unless a path is configured
    log_file: Path | None = None
    real_time_debug: bool = True


class MigrationConfig(BaseModel):
    """Library locations and format quirks for a migration run."""

    rhythmbox_path: Path | None = None
    database_filename: str = "rhythmdb.xml"
    playlists_filename: str = "playlists.xml"
    backup_suffix: str = ".bak"

    # iTunes keeps videos in the same Tracks dictionary
    include_movies: bool = False

    # Placeholder artist names Rhythmbox writes for untagged files
    unknown_artist_aliases: list[str] = ["未知"]

    @field_validator("backup_suffix")
    @classmethod
    def _suffix_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("backup_suffix must not be empty")
        return value


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Nested values use a double underscore, e.g. ``MIGRATION__RHYTHMBOX_PATH``
    or ``LOGGING__CONSOLE_LEVEL``. The .env file is loaded for convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    migration: MigrationConfig = MigrationConfig()


def default_rhythmbox_path() -> Path:
    """Return Rhythmbox's data directory under the XDG data home."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "rhythmbox"


def resolve_rhythmbox_path(override: Path | None = None) -> Path:
    """Pick the Rhythmbox directory: explicit override, then settings, then default."""
    if override is not None:
        return override.expanduser()
    if settings.migration.rhythmbox_path is not None:
        return settings.migration.rhythmbox_path.expanduser()
    return default_rhythmbox_path()


# Singleton instance for application use
settings = Settings()
