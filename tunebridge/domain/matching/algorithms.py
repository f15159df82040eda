"""Pure algorithms for resolving source tracks against destination tracks.

Matching is exact equality of normalized keys. There is no scoring and no
fallback heuristic: every outcome other than Matched is explained either by
"the key does not exist in the destination" or "the key collides there".
"""

from collections.abc import Iterable, Sequence

from tunebridge.domain.entities.track import TrackRecord

from .keys import extract_key
from .types import Ambiguous, Matched, MatchKey, ResolutionEntry, ResolutionMap, Unmatched

DestinationIndex = dict[MatchKey, list[str]]


def build_index(destination_tracks: Iterable[TrackRecord]) -> DestinationIndex:
    """Index destination ids by key in a single pass.

    Ids under one key keep destination order, so ambiguity reports list
    colliding tracks the same way on every run.
    """
    index: DestinationIndex = {}
    for track in destination_tracks:
        index.setdefault(extract_key(track), []).append(track.id)
    return index


def classify(candidates: Sequence[str]) -> ResolutionEntry:
    """Turn a candidate list into a resolution entry."""
    if not candidates:
        return Unmatched()
    if len(candidates) == 1:
        return Matched(candidates[0])
    return Ambiguous(tuple(candidates))


def resolve(
    source_tracks: Sequence[TrackRecord],
    destination_tracks: Sequence[TrackRecord],
) -> ResolutionMap:
    """Resolve every source track to exactly one ResolutionEntry.

    Two source tracks may resolve to the same destination id (duplicated
    source data). That is left for the reconciler to report.

    Args:
        source_tracks: Records from the source export
        destination_tracks: Records from the destination database

    Returns:
        ResolutionMap keyed by source id, in source order
    """
    index = build_index(destination_tracks)
    entries: dict[str, ResolutionEntry] = {}
    sources: dict[str, TrackRecord] = {}

    for track in source_tracks:
        entries[track.id] = classify(index.get(extract_key(track), ()))
        sources[track.id] = track

    return ResolutionMap(entries=entries, sources=sources)
