"""Match key extraction.

Both libraries pass through the same normalization before comparison:

- Unicode is composed to NFC (macOS exports decomposed names, Linux
  scanners usually store composed ones)
- leading and trailing whitespace is trimmed
- title, artist and album are case-folded
- a track or disc number of ``0`` is the same as an unset one

The record itself keeps its original spelling; only the key is normalized.
"""

import unicodedata

from tunebridge.domain.entities.track import TrackRecord

from .types import MatchKey


def normalize_text(value: str | None) -> str:
    """Normalize a text key field. Absent values become ``""``."""
    if not value:
        return ""
    return unicodedata.normalize("NFC", value.strip().casefold())


def normalize_number(value: int | None) -> int:
    """Normalize a numeric key field. Absent and zero both become ``0``."""
    if not value or value < 0:
        return 0
    return value


def extract_key(track: TrackRecord) -> MatchKey:
    """Derive the matching key for a track. Never fails."""
    return MatchKey(
        title=normalize_text(track.title),
        artist=normalize_text(track.artist),
        album=normalize_text(track.album),
        track_number=normalize_number(track.track_number),
        disc_number=normalize_number(track.disc_number),
    )
