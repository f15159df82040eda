"""Shared utilities and helper functions for domain entities.

Pure utility functions with zero external dependencies.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def from_unix_seconds(value: int | str) -> datetime:
    """Convert a Unix timestamp in seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(int(value), UTC)


def to_unix_seconds(dt: datetime) -> int:
    """Convert a datetime to whole Unix seconds, treating naive values as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
