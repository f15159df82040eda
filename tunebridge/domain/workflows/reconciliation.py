"""Pure domain logic for merging source play statistics into destination tracks.

Only Matched resolutions cause writes. Unmatched and Ambiguous resolutions
are turned into diagnostics and leave the destination untouched.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from attrs import define, field

from tunebridge.domain.entities import (
    MIGRATABLE_FIELDS,
    DiagnosticCategory,
    DiagnosticEntry,
    TrackRecord,
)
from tunebridge.domain.matching import Ambiguous, Matched, ResolutionMap, Unmatched

# What a Rhythmbox database can store. Skip statistics have no home there.
RHYTHMBOX_FIELDS: frozenset[str] = frozenset({"date_added", "last_played", "play_count"})

# Always differs between libraries: the destination's value is just the
# scan date, so replacing it is expected and not worth reporting.
_SILENT_OVERWRITE_FIELDS: frozenset[str] = frozenset({"date_added"})


@define(slots=True)
class ReconciliationResult:
    """Outcome of applying a resolution map to destination tracks."""

    tracks: list[TrackRecord]
    diagnostics: list[DiagnosticEntry] = field(factory=list)
    # Destination ids that received at least one new value
    updated_ids: set[str] = field(factory=set)
    # Destination id to the source ids that wrote to it, in write order
    writers: dict[str, list[str]] = field(factory=dict)


def is_defined(value: Any) -> bool:
    """Whether a source value is worth migrating.

    Counters of zero are the format default and carry no information.
    """
    if value is None:
        return False
    if isinstance(value, int) and not isinstance(value, bool):
        return value > 0
    return True


def _format_value(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def copy_fields(
    source: TrackRecord,
    destination: TrackRecord,
    fields: Iterable[str],
) -> tuple[list[str], list[DiagnosticEntry]]:
    """Copy defined source values onto the destination record.

    Returns:
        Tuple of (changed field names, overwrite diagnostics)
    """
    changed: list[str] = []
    diagnostics: list[DiagnosticEntry] = []

    for name in fields:
        value = getattr(source, name)
        if not is_defined(value):
            continue
        current = getattr(destination, name)
        if current == value:
            continue
        if current is not None and name not in _SILENT_OVERWRITE_FIELDS:
            diagnostics.append(
                DiagnosticEntry.info(
                    DiagnosticCategory.OVERWRITTEN_FIELD,
                    f"{name} of {destination.describe()} changed from "
                    f"{_format_value(current)} to {_format_value(value)}",
                    subject=destination.id,
                )
            )
        setattr(destination, name, value)
        changed.append(name)

    return changed, diagnostics


def apply(
    resolution: ResolutionMap,
    source_tracks: Sequence[TrackRecord],
    destination_tracks: Sequence[TrackRecord],
    supported_fields: frozenset[str] = RHYTHMBOX_FIELDS,
) -> ReconciliationResult:
    """Apply a resolution map to destination tracks in place.

    Fields outside ``supported_fields`` are dropped silently: that is a
    destination format limitation, not a matching failure. A destination
    track matched by several source tracks takes the last writer's values
    and every extra write is reported.

    Args:
        resolution: Output of the matcher
        source_tracks: Source records, in source order
        destination_tracks: Destination records, mutated in place
        supported_fields: Migratable fields the destination can store

    Returns:
        ReconciliationResult with the same destination list and diagnostics
    """
    fields = [name for name in MIGRATABLE_FIELDS if name in supported_fields]
    destinations = {track.id: track for track in destination_tracks}
    result = ReconciliationResult(tracks=list(destination_tracks))

    for source in source_tracks:
        entry = resolution.get(source.id, Unmatched())

        match entry:
            case Unmatched():
                result.diagnostics.append(
                    DiagnosticEntry.warning(
                        DiagnosticCategory.UNMATCHED_TRACK,
                        f"{source.describe()} (source id {source.id}) has no destination track",
                        subject=source.id,
                    )
                )
            case Ambiguous(destination_ids=candidates):
                result.diagnostics.append(
                    DiagnosticEntry.warning(
                        DiagnosticCategory.AMBIGUOUS_TRACK,
                        f"{source.describe()} (source id {source.id}) matches "
                        f"{len(candidates)} destination tracks: {', '.join(candidates)}",
                        subject=source.id,
                    )
                )
            case Matched(destination_id=destination_id):
                destination = destinations[destination_id]
                previous = result.writers.setdefault(destination_id, [])
                if previous:
                    result.diagnostics.append(
                        DiagnosticEntry.warning(
                            DiagnosticCategory.DUPLICATE_TARGET,
                            f"{destination.describe()} ({destination_id}) already received "
                            f"values from source id {previous[-1]}; source id {source.id} "
                            "overwrites them",
                            subject=destination_id,
                        )
                    )
                previous.append(source.id)

                changed, overwrites = copy_fields(source, destination, fields)
                result.diagnostics.extend(overwrites)
                if changed:
                    result.updated_ids.add(destination_id)

    for track in destination_tracks:
        if track.id not in result.writers:
            result.diagnostics.append(
                DiagnosticEntry.info(
                    DiagnosticCategory.UNCLAIMED_DESTINATION,
                    f"{track.describe()} ({track.id}) has no source track",
                    subject=track.id,
                )
            )

    return result
