"""Diagnostic entries and the append-only report that collects them.

Every non-fatal problem found during a run ends up here. The report's
ordering depends only on category and insertion order, so identical inputs
always render to identical text.
"""

from collections import Counter
from collections.abc import Iterable, Iterator
from enum import StrEnum

from attrs import define, field


class Severity(StrEnum):
    """How much operator attention a diagnostic needs."""

    INFO = "info"
    WARNING = "warning"


class DiagnosticCategory(StrEnum):
    """What went wrong, in report order."""

    UNMATCHED_TRACK = "unmatched-track"
    AMBIGUOUS_TRACK = "ambiguous-track"
    DROPPED_PLAYLIST_ENTRY = "dropped-playlist-entry"
    SKIPPED_SMART_PLAYLIST = "skipped-smart-playlist"
    DUPLICATE_TARGET = "duplicate-target"
    SKIPPED_PLAYLIST = "skipped-playlist"
    UNCLAIMED_DESTINATION = "unclaimed-destination"
    OVERWRITTEN_FIELD = "overwritten-field"
    PLAYLIST_NAME_COLLISION = "playlist-name-collision"

    @property
    def heading(self) -> str:
        return CATEGORY_TITLES[self]


CATEGORY_ORDER: tuple[DiagnosticCategory, ...] = tuple(DiagnosticCategory)

CATEGORY_TITLES: dict[DiagnosticCategory, str] = {
    DiagnosticCategory.UNMATCHED_TRACK: "Unmatched tracks",
    DiagnosticCategory.AMBIGUOUS_TRACK: "Ambiguous tracks",
    DiagnosticCategory.DROPPED_PLAYLIST_ENTRY: "Dropped playlist entries",
    DiagnosticCategory.SKIPPED_SMART_PLAYLIST: "Skipped smart playlists",
    DiagnosticCategory.DUPLICATE_TARGET: "Destination tracks written more than once",
    DiagnosticCategory.SKIPPED_PLAYLIST: "Skipped folders and system playlists",
    DiagnosticCategory.UNCLAIMED_DESTINATION: "Destination tracks without a source",
    DiagnosticCategory.OVERWRITTEN_FIELD: "Overwritten destination values",
    DiagnosticCategory.PLAYLIST_NAME_COLLISION: "Playlists sharing a name with an existing one",
}


@define(frozen=True, slots=True)
class DiagnosticEntry:
    """A single (severity, category, context) record."""

    severity: Severity
    category: DiagnosticCategory
    message: str
    # Identifier of the record the entry is about, when there is one
    subject: str | None = None

    @classmethod
    def warning(
        cls, category: DiagnosticCategory, message: str, subject: str | None = None
    ) -> "DiagnosticEntry":
        return cls(Severity.WARNING, category, message, subject)

    @classmethod
    def info(
        cls, category: DiagnosticCategory, message: str, subject: str | None = None
    ) -> "DiagnosticEntry":
        return cls(Severity.INFO, category, message, subject)

    def render(self) -> str:
        return f"{self.severity.upper()} [{self.category}] {self.message}"


@define(slots=True)
class DiagnosticReport:
    """Append-only collector with a stable, category-grouped ordering."""

    _entries: list[DiagnosticEntry] = field(factory=list)

    def add(self, entry: DiagnosticEntry) -> None:
        self._entries.append(entry)

    def extend(self, entries: Iterable[DiagnosticEntry]) -> None:
        self._entries.extend(entries)

    @property
    def entries(self) -> list[DiagnosticEntry]:
        """All entries grouped by category, insertion order within a group."""
        # sorted() is stable, which keeps insertion order inside a category
        return sorted(self._entries, key=lambda e: CATEGORY_ORDER.index(e.category))

    def by_category(self) -> dict[DiagnosticCategory, list[DiagnosticEntry]]:
        grouped: dict[DiagnosticCategory, list[DiagnosticEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.category, []).append(entry)
        return grouped

    def counts(self) -> dict[DiagnosticCategory, int]:
        counter = Counter(entry.category for entry in self._entries)
        return {category: counter[category] for category in CATEGORY_ORDER if counter[category]}

    @property
    def warning_count(self) -> int:
        return sum(1 for entry in self._entries if entry.severity is Severity.WARNING)

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def render(self) -> str:
        """Render the whole report as deterministic plain text."""
        lines = [entry.render() for entry in self.entries]
        summary = ", ".join(f"{category}={count}" for category, count in self.counts().items())
        lines.append(f"summary: {summary or 'no diagnostics'}")
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DiagnosticEntry]:
        return iter(self.entries)
