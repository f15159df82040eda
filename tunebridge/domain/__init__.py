"""tunebridge domain layer - pure migration logic with no I/O."""

# Export all domain components
from . import entities, matching, workflows

# Re-export key types for convenience
from .entities import (
    DiagnosticCategory,
    DiagnosticEntry,
    DiagnosticReport,
    PlaylistKind,
    PlaylistRecord,
    Severity,
    TrackRecord,
)
from .exceptions import (
    BackupExistsError,
    InvalidRecordError,
    LibraryFormatError,
    MigrationError,
    PreconditionError,
)
from .matching import Ambiguous, Matched, MatchKey, ResolutionMap, Unmatched, extract_key, resolve
from .workflows import apply, rebuild

__all__ = [
    # Modules
    "entities",
    "matching",
    "workflows",
    # Records
    "PlaylistKind",
    "PlaylistRecord",
    "TrackRecord",
    # Diagnostics
    "DiagnosticCategory",
    "DiagnosticEntry",
    "DiagnosticReport",
    "Severity",
    # Matching
    "Ambiguous",
    "MatchKey",
    "Matched",
    "ResolutionMap",
    "Unmatched",
    "extract_key",
    "resolve",
    # Workflows
    "apply",
    "rebuild",
    # Errors
    "BackupExistsError",
    "InvalidRecordError",
    "LibraryFormatError",
    "MigrationError",
    "PreconditionError",
]
