"""Core domain entities representing library records."""

from .diagnostics import (
    CATEGORY_ORDER,
    CATEGORY_TITLES,
    DiagnosticCategory,
    DiagnosticEntry,
    DiagnosticReport,
    Severity,
)
from .playlist import PlaylistKind, PlaylistRecord
from .shared import ensure_utc, from_unix_seconds, to_unix_seconds
from .track import MIGRATABLE_FIELDS, TrackRecord

__all__ = [
    # Track entities
    "MIGRATABLE_FIELDS",
    "TrackRecord",
    # Playlist entities
    "PlaylistKind",
    "PlaylistRecord",
    # Diagnostics
    "CATEGORY_ORDER",
    "CATEGORY_TITLES",
    "DiagnosticCategory",
    "DiagnosticEntry",
    "DiagnosticReport",
    "Severity",
    # Shared utilities
    "ensure_utc",
    "from_unix_seconds",
    "to_unix_seconds",
]
