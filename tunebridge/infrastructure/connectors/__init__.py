"""Connectors for the library files on both sides of a migration."""

from tunebridge.infrastructure.connectors.backup import backup_library_files, backup_path
from tunebridge.infrastructure.connectors.itunes import (
    ItunesLibrary,
    load_itunes_library,
    parse_itunes_library,
)
from tunebridge.infrastructure.connectors.rhythmbox import (
    RhythmboxDatabase,
    RhythmboxPlaylists,
)

__all__ = [
    "ItunesLibrary",
    "RhythmboxDatabase",
    "RhythmboxPlaylists",
    "backup_library_files",
    "backup_path",
    "load_itunes_library",
    "parse_itunes_library",
]
