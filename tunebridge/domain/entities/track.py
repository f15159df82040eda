"""Track-related domain entities.

Format-independent track representation shared by the source and
destination libraries.
"""

from datetime import datetime

from attrs import define, field, validators

from .shared import ensure_utc

# Play statistics a migration may carry from source to destination.
# Rating is never migrated.
MIGRATABLE_FIELDS: tuple[str, ...] = (
    "date_added",
    "last_played",
    "play_count",
    "skip_count",
    "last_skipped",
)


def _optional_int(value: int | str | None) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


@define(slots=True)
class TrackRecord:
    """One song in either library.

    The identifier is opaque and only unique within its own library: an
    iTunes ``Track ID`` on the source side, a file location URI on the
    Rhythmbox side. Destination records are mutated in place during
    reconciliation.
    """

    id: str = field(validator=validators.instance_of(str))
    title: str = field(default="", converter=lambda v: "" if v is None else str(v))
    artist: str | None = field(default=None)
    album: str | None = field(default=None)
    track_number: int | None = field(default=None, converter=_optional_int)
    disc_number: int | None = field(default=None, converter=_optional_int)
    location: str | None = field(default=None)

    # Descriptive tags, carried for reporting only
    genre: str | None = field(default=None)
    year: int | None = field(default=None, converter=_optional_int)

    # Play statistics
    date_added: datetime | None = field(default=None, converter=ensure_utc)
    last_played: datetime | None = field(default=None, converter=ensure_utc)
    play_count: int | None = field(default=None, converter=_optional_int)
    skip_count: int | None = field(default=None, converter=_optional_int)
    last_skipped: datetime | None = field(default=None, converter=ensure_utc)
    rating: int | None = field(default=None, converter=_optional_int)

    def describe(self) -> str:
        """Human-readable label used in diagnostics."""
        label = f'"{self.title}"'
        if self.artist:
            label += f" by {self.artist}"
        if self.album:
            label += f" on {self.album}"
        return label
