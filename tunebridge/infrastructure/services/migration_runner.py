"""Runs a migration end to end: read files, back up, migrate, write files.

All destination writes happen after the use case returns, so any fatal
error leaves ``rhythmdb.xml`` and ``playlists.xml`` as they were. Format
and record errors are raised before the backup is taken.
"""

from pathlib import Path

from attrs import define

from tunebridge.application.use_cases import (
    BackupPrecondition,
    MigrateLibraryCommand,
    MigrateLibraryResult,
    MigrateLibraryUseCase,
    validate_playlists,
    validate_tracks,
)
from tunebridge.config import get_logger, resolve_rhythmbox_path, settings
from tunebridge.infrastructure.connectors import (
    RhythmboxDatabase,
    RhythmboxPlaylists,
    backup_library_files,
    load_itunes_library,
)

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class MigrationRun:
    """What a run did to the filesystem, alongside the use case result."""

    result: MigrateLibraryResult
    rhythmbox_path: Path
    precondition: BackupPrecondition
    entries_written: int = 0
    playlists_appended: int = 0

    @property
    def dry_run(self) -> bool:
        return self.precondition.dry_run


def run_migration(
    itunes_library_path: Path,
    rhythmbox_path: Path | None = None,
    dry_run: bool = False,
    include_movies: bool | None = None,
) -> MigrationRun:
    """Migrate an iTunes export into a Rhythmbox data directory.

    Args:
        itunes_library_path: ``iTunes Library.xml`` export
        rhythmbox_path: Rhythmbox data directory, defaults from settings
        dry_run: Run everything but the backup and the writes
        include_movies: Override ``migration.include_movies``

    Returns:
        MigrationRun with the use case result and write counts
    """
    migration = settings.migration
    rhythmbox_dir = resolve_rhythmbox_path(rhythmbox_path)
    logger.info(f"Rhythmbox path: {rhythmbox_dir}")

    if include_movies is None:
        include_movies = migration.include_movies
    itunes = load_itunes_library(itunes_library_path, include_movies=include_movies)

    # Files and records are checked before the backup so a rejected run leaves no .bak behind
    database = RhythmboxDatabase.load(rhythmbox_dir / migration.database_filename)
    playlists = RhythmboxPlaylists.load(rhythmbox_dir / migration.playlists_filename)
    destination_tracks = database.tracks()
    validate_tracks(itunes.tracks, "source")
    validate_tracks(destination_tracks, "destination")
    validate_playlists(itunes.playlists)

    if dry_run:
        logger.info("Dry run: no backup taken and no files written")
        precondition = BackupPrecondition(dry_run=True)
    else:
        precondition = backup_library_files(rhythmbox_dir)

    result = MigrateLibraryUseCase().execute(
        MigrateLibraryCommand(
            source_tracks=itunes.tracks,
            destination_tracks=destination_tracks,
            source_playlists=itunes.playlists,
            precondition=precondition,
            movie_ids=itunes.movie_ids,
        )
    )
    result.report.extend(playlists.name_collisions(result.destination_playlists))

    if dry_run:
        return MigrationRun(result=result, rhythmbox_path=rhythmbox_dir, precondition=precondition)

    entries_written = database.write_tracks(result.destination_tracks)
    database.save()
    playlists_appended = playlists.append(result.destination_playlists)
    playlists.save()

    return MigrationRun(
        result=result,
        rhythmbox_path=rhythmbox_dir,
        precondition=precondition,
        entries_written=entries_written,
        playlists_appended=playlists_appended,
    )
