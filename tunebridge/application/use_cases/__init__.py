"""Application use cases - orchestrate business operations."""

from .migrate_library import (
    BackupPrecondition,
    MigrateLibraryCommand,
    MigrateLibraryResult,
    MigrateLibraryUseCase,
    MigrationOutcome,
    validate_playlists,
    validate_tracks,
)

__all__ = [
    "BackupPrecondition",
    "MigrateLibraryCommand",
    "MigrateLibraryResult",
    "MigrateLibraryUseCase",
    "MigrationOutcome",
    "validate_playlists",
    "validate_tracks",
]
