"""MigrateLibrary use case: the whole match, reconcile and rebuild pipeline.

The use case is pure orchestration over in-memory records. Reading and
writing library files happens around it, in the infrastructure layer, so a
fatal error raised here leaves every destination file untouched.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path

from attrs import define, field

from tunebridge.config import get_logger
from tunebridge.domain.entities import DiagnosticReport, PlaylistRecord, TrackRecord
from tunebridge.domain.exceptions import InvalidRecordError, PreconditionError
from tunebridge.domain.matching import Ambiguous, Matched, ResolutionMap, Unmatched, resolve
from tunebridge.domain.workflows import RHYTHMBOX_FIELDS, apply, rebuild

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class BackupPrecondition:
    """Proof that the destination can be restored if the run goes wrong.

    A dry run never writes, so it needs no backup.
    """

    backup_paths: tuple[Path, ...] = field(factory=tuple, converter=tuple)
    dry_run: bool = False

    @property
    def satisfied(self) -> bool:
        if self.dry_run:
            return True
        return bool(self.backup_paths) and all(path.exists() for path in self.backup_paths)


class MigrationOutcome(StrEnum):
    """How a completed run went. Fatal runs raise instead."""

    CLEAN = "clean"
    WITH_DIAGNOSTICS = "with-diagnostics"


@define(frozen=True, slots=True)
class MigrateLibraryCommand:
    """Everything one migration run needs, already loaded into memory."""

    source_tracks: Sequence[TrackRecord]
    destination_tracks: Sequence[TrackRecord]
    precondition: BackupPrecondition
    source_playlists: Sequence[PlaylistRecord] = field(factory=list)
    supported_fields: frozenset[str] = RHYTHMBOX_FIELDS
    # Source ids stripped as movies; playlist entries naming them are still reported
    movie_ids: frozenset[str] = field(factory=frozenset, converter=frozenset)


@define(frozen=True, slots=True)
class MigrateLibraryResult:
    """Updated destination state plus everything needed to explain it."""

    destination_tracks: list[TrackRecord]
    destination_playlists: list[PlaylistRecord]
    resolution: ResolutionMap
    report: DiagnosticReport
    updated_ids: frozenset[str] = field(factory=frozenset, converter=frozenset)
    outcome: MigrationOutcome = MigrationOutcome.CLEAN
    execution_time_ms: int = 0

    @property
    def matched_count(self) -> int:
        return self.resolution.count(Matched)

    @property
    def unmatched_count(self) -> int:
        return self.resolution.count(Unmatched)

    @property
    def ambiguous_count(self) -> int:
        return self.resolution.count(Ambiguous)


def validate_tracks(tracks: Sequence[TrackRecord], library: str) -> None:
    """Reject empty or repeated identifiers within one library."""
    for position, track in enumerate(tracks, start=1):
        if not track.id:
            raise InvalidRecordError(
                f"{library} track #{position} ({track.describe()}) has no identifier"
            )

    duplicates = [
        track_id for track_id, count in Counter(t.id for t in tracks).items() if count > 1
    ]
    if duplicates:
        raise InvalidRecordError(
            f"{library} library has duplicate track identifiers: {', '.join(duplicates)}"
        )


def validate_playlists(playlists: Sequence[PlaylistRecord]) -> None:
    for position, playlist in enumerate(playlists, start=1):
        if not playlist.name:
            raise InvalidRecordError(f"source playlist #{position} has no name")


class MigrateLibraryUseCase:
    """Runs resolve, apply and rebuild over a validated pair of libraries.

    Match and playlist problems never stop the run: they are collected in a
    single DiagnosticReport. Only an unmet backup precondition or invalid
    records abort, and they abort before any record is mutated.
    """

    def execute(self, command: MigrateLibraryCommand) -> MigrateLibraryResult:
        """Execute the migration.

        Args:
            command: Loaded libraries and the backup precondition

        Returns:
            Result with updated destination tracks, rebuilt playlists and the report

        Raises:
            PreconditionError: No usable backup and not a dry run
            InvalidRecordError: Missing or duplicate identifiers, unnamed playlists
        """
        start_time = datetime.now(UTC)

        with logger.contextualize(operation="migrate_library"):
            if not command.precondition.satisfied:
                raise PreconditionError(
                    "Refusing to modify the destination library without a backup"
                )

            validate_tracks(command.source_tracks, "source")
            validate_tracks(command.destination_tracks, "destination")
            validate_playlists(command.source_playlists)

            logger.info(
                "Starting migration",
                source_tracks=len(command.source_tracks),
                destination_tracks=len(command.destination_tracks),
                source_playlists=len(command.source_playlists),
                dry_run=command.precondition.dry_run,
            )

            report = DiagnosticReport()

            # Step 1: Resolve source tracks against destination keys
            resolution = resolve(command.source_tracks, command.destination_tracks)
            logger.info(
                "Resolved source tracks",
                matched=resolution.count(Matched),
                unmatched=resolution.count(Unmatched),
                ambiguous=resolution.count(Ambiguous),
            )

            # Step 2: Copy play statistics onto matched destination tracks
            reconciliation = apply(
                resolution,
                command.source_tracks,
                command.destination_tracks,
                supported_fields=command.supported_fields,
            )
            report.extend(reconciliation.diagnostics)
            logger.info(
                "Reconciled destination tracks", updated=len(reconciliation.updated_ids)
            )

            # Step 3: Rebuild static playlists with destination ids
            rebuilt = rebuild(
                command.source_playlists, resolution, movie_ids=command.movie_ids
            )
            report.extend(rebuilt.diagnostics)
            for name, dropped in rebuilt.dropped_counts.items():
                logger.debug(f"Playlist '{name}': dropped {dropped} entries")
            logger.info("Rebuilt playlists", playlists=len(rebuilt.playlists))

            outcome = (
                MigrationOutcome.WITH_DIAGNOSTICS
                if report.has_warnings
                else MigrationOutcome.CLEAN
            )
            execution_time = int((datetime.now(UTC) - start_time).total_seconds() * 1000)

            logger.info(
                "Migration completed",
                outcome=str(outcome),
                warnings=report.warning_count,
                diagnostics=len(report),
                execution_time_ms=execution_time,
            )

            return MigrateLibraryResult(
                destination_tracks=reconciliation.tracks,
                destination_playlists=rebuilt.playlists,
                resolution=resolution,
                report=report,
                updated_ids=reconciliation.updated_ids,
                outcome=outcome,
                execution_time_ms=execution_time,
            )
