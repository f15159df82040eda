"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for tunebridge.

Public API:
----------
setup_loguru_logger(verbose: bool = False, quiet: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log the effective configuration at debug level

Quick Start:
-----------
```python
from tunebridge.config import get_logger
logger = get_logger(__name__)
logger.info("Reading library", path=str(path))
```
"""

from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False, quiet: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable debug level and detailed tracebacks on the console
        quiet: Only show errors on the console

    Note:
        - Console output goes to stderr so reports on stdout stay clean
        - A serialized file sink is added only when ``logging.log_file`` is set
    """
    logger.remove()
    logger.configure(extra={"service": "tunebridge", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    if quiet:
        console_level = "ERROR"
    elif verbose:
        console_level = "DEBUG"
    else:
        console_level = settings.logging.console_level

    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    log_file = settings.logging.log_file
    if log_file is None:
        return

    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        sink=str(log_file),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=not settings.logging.real_time_debug,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context
    """
    return logger.bind(
        module=name,
        service="tunebridge",
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log the effective configuration at debug level."""
    local_logger = get_logger(__name__)

    local_logger.debug("Configuration:")
    for section_name, section_values in settings.model_dump().items():
        local_logger.debug("  {}:", section_name.upper())
        for key, value in section_values.items():
            if isinstance(value, Path):
                value = str(value)
            local_logger.debug("    {}: {}", key.upper(), value)
