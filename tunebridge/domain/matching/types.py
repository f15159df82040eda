"""Pure domain types for track matching.

The resolution of a source track is a tagged variant: it is either
unmatched, matched to exactly one destination track, or ambiguous between
several. Ambiguity is never collapsed into a guess.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from attrs import define, field

from tunebridge.domain.entities.track import TrackRecord


@define(frozen=True, slots=True)
class MatchKey:
    """Normalized (title, artist, album, track#, disc#) tuple.

    Absent text fields are ``""`` and absent numbers are ``0`` so keys are
    always comparable and hashable.
    """

    title: str
    artist: str
    album: str
    track_number: int = 0
    disc_number: int = 0

    def __str__(self) -> str:
        return f"{self.title} / {self.artist} / {self.album}"


@define(frozen=True, slots=True)
class Unmatched:
    """No destination track shares the source track's key."""


@define(frozen=True, slots=True)
class Matched:
    """Exactly one destination track shares the key."""

    destination_id: str


@define(frozen=True, slots=True)
class Ambiguous:
    """Two or more destination tracks share the key, in destination order."""

    destination_ids: tuple[str, ...] = field(converter=tuple)


ResolutionEntry = Unmatched | Matched | Ambiguous


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@define(frozen=True, slots=True)
class ResolutionMap(Mapping[str, ResolutionEntry]):
    """Read-only mapping of source id to resolution, in source order.

    Also keeps the source records so downstream stages can describe a
    source track in diagnostics without another lookup table.
    """

    entries: Mapping[str, ResolutionEntry] = field(factory=dict, converter=_freeze)
    sources: Mapping[str, TrackRecord] = field(factory=dict, converter=_freeze)

    def __getitem__(self, source_id: str) -> ResolutionEntry:
        return self.entries[source_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def describe(self, source_id: str) -> str:
        """Label a source track for diagnostics."""
        source = self.sources.get(source_id)
        if source is None:
            return f"source track {source_id}"
        return source.describe()

    def matched(self) -> dict[str, str]:
        """Source id to destination id for every Matched entry."""
        return {
            source_id: entry.destination_id
            for source_id, entry in self.entries.items()
            if isinstance(entry, Matched)
        }

    def count(self, variant: type) -> int:
        return sum(1 for entry in self.entries.values() if isinstance(entry, variant))
