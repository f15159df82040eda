"""Pure domain logic for rebuilding playlists in the destination library.

Source playlists reference source track ids. Rebuilt playlists reference
destination ids, keep the source order, and omit (and report) every entry
that has no unique destination track.
"""

from collections.abc import Sequence, Set as AbstractSet

from attrs import define, field

from tunebridge.domain.entities import (
    DiagnosticCategory,
    DiagnosticEntry,
    PlaylistKind,
    PlaylistRecord,
)
from tunebridge.domain.matching import Ambiguous, Matched, ResolutionMap


@define(slots=True)
class RebuildResult:
    """Rebuilt destination playlists and the diagnostics produced on the way."""

    playlists: list[PlaylistRecord] = field(factory=list)
    diagnostics: list[DiagnosticEntry] = field(factory=list)
    # Playlist name to number of dropped entries, for summaries
    dropped_counts: dict[str, int] = field(factory=dict)


def _drop_reason(
    resolution: ResolutionMap, source_id: str, movie_ids: AbstractSet[str]
) -> str:
    entry = resolution.get(source_id)
    if entry is None and source_id in movie_ids:
        return "movie, not migrated"
    if entry is None:
        return "not in source library"
    if isinstance(entry, Ambiguous):
        return f"ambiguous between {len(entry.destination_ids)} destination tracks"
    return "no destination track"


def rebuild_playlist(
    playlist: PlaylistRecord,
    resolution: ResolutionMap,
    movie_ids: AbstractSet[str] = frozenset(),
) -> tuple[PlaylistRecord, list[DiagnosticEntry]]:
    """Rebuild one static playlist.

    Entries are never renumbered or reordered: a dropped entry simply does
    not appear, and the rest keep their relative order. Entries naming a
    stripped movie in ``movie_ids`` get their own reason but are still
    reported.
    """
    track_ids: list[str] = []
    diagnostics: list[DiagnosticEntry] = []

    for position, source_id in enumerate(playlist.track_ids, start=1):
        entry = resolution.get(source_id)
        if isinstance(entry, Matched):
            track_ids.append(entry.destination_id)
            continue
        reason = _drop_reason(resolution, source_id, movie_ids)
        diagnostics.append(
            DiagnosticEntry.warning(
                DiagnosticCategory.DROPPED_PLAYLIST_ENTRY,
                f'playlist "{playlist.name}" #{position}: dropped '
                f"{resolution.describe(source_id)} ({reason})",
                subject=source_id,
            )
        )

    return PlaylistRecord(name=playlist.name, track_ids=track_ids), diagnostics


def rebuild(
    source_playlists: Sequence[PlaylistRecord],
    resolution: ResolutionMap,
    movie_ids: AbstractSet[str] = frozenset(),
) -> RebuildResult:
    """Translate source playlists into destination playlists.

    Smart playlists are skipped with their own diagnostic category; folders
    and library/system playlists are skipped as informational. A static
    playlist whose every entry was dropped is still returned, empty.

    Args:
        source_playlists: Playlists from the source export, in order
        resolution: Output of the matcher
        movie_ids: Source ids of video tracks stripped before matching

    Returns:
        RebuildResult with one destination playlist per static source playlist
    """
    result = RebuildResult()

    for playlist in source_playlists:
        match playlist.kind:
            case PlaylistKind.SMART:
                result.diagnostics.append(
                    DiagnosticEntry.warning(
                        DiagnosticCategory.SKIPPED_SMART_PLAYLIST,
                        f'playlist "{playlist.name}" is a smart playlist and was skipped',
                        subject=playlist.id,
                    )
                )
            case PlaylistKind.FOLDER | PlaylistKind.LIBRARY:
                result.diagnostics.append(
                    DiagnosticEntry.info(
                        DiagnosticCategory.SKIPPED_PLAYLIST,
                        f'playlist "{playlist.name}" is a {playlist.kind} playlist and was skipped',
                        subject=playlist.id,
                    )
                )
            case _:
                rebuilt, diagnostics = rebuild_playlist(playlist, resolution, movie_ids)
                result.playlists.append(rebuilt)
                result.diagnostics.extend(diagnostics)
                if diagnostics:
                    result.dropped_counts[playlist.name] = (
                        result.dropped_counts.get(playlist.name, 0) + len(diagnostics)
                    )

    return result
