"""Pure domain workflows: reconciliation and playlist rebuilding."""

from .playlist_operations import RebuildResult, rebuild, rebuild_playlist
from .reconciliation import (
    RHYTHMBOX_FIELDS,
    ReconciliationResult,
    apply,
    copy_fields,
    is_defined,
)

__all__ = [
    "RHYTHMBOX_FIELDS",
    "RebuildResult",
    "ReconciliationResult",
    "apply",
    "copy_fields",
    "is_defined",
    "rebuild",
    "rebuild_playlist",
]
