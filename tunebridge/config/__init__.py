"""Configuration module for tunebridge.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

resolve_rhythmbox_path(override: Path | None = None) -> Path
    Locate the Rhythmbox data directory

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False, quiet: bool = False) -> None
    Configure Loguru logger for the application

log_startup_info() -> None
    Log the effective configuration
"""

from .logging import get_logger, log_startup_info, setup_loguru_logger
from .settings import (
    LoggingConfig,
    MigrationConfig,
    Settings,
    default_rhythmbox_path,
    resolve_rhythmbox_path,
    settings,
)

__all__ = [
    "LoggingConfig",
    "MigrationConfig",
    "Settings",
    "default_rhythmbox_path",
    "get_logger",
    "log_startup_info",
    "resolve_rhythmbox_path",
    "settings",
    "setup_loguru_logger",
]
