"""Backups of the Rhythmbox files a migration is about to rewrite."""

from pathlib import Path
import shutil

from tunebridge.application.use_cases import BackupPrecondition
from tunebridge.config import get_logger, settings
from tunebridge.domain.exceptions import BackupExistsError, PreconditionError

logger = get_logger(__name__)


def backup_path(path: Path, suffix: str | None = None) -> Path:
    """``rhythmdb.xml`` -> ``rhythmdb.xml.bak``."""
    suffix = suffix if suffix is not None else settings.migration.backup_suffix
    return path.with_name(path.name + suffix)


def backup_library_files(
    rhythmbox_dir: Path,
    database_filename: str | None = None,
    playlists_filename: str | None = None,
    suffix: str | None = None,
) -> BackupPrecondition:
    """Copy the database and playlists files next to themselves.

    Every backup target is checked before anything is copied, so a refused
    run leaves the directory exactly as it was.

    Raises:
        BackupExistsError: A backup from an earlier run is still present
        PreconditionError: A file to back up does not exist
    """
    migration = settings.migration
    sources = [
        rhythmbox_dir / (database_filename or migration.database_filename),
        rhythmbox_dir / (playlists_filename or migration.playlists_filename),
    ]
    targets = [backup_path(source, suffix) for source in sources]

    for source, target in zip(sources, targets, strict=True):
        if target.exists():
            raise BackupExistsError(f"backup already exists: {target}")
        if not source.is_file():
            raise PreconditionError(f"nothing to back up, {source} does not exist")

    logger.info("Backing up existing Rhythmbox files")
    for source, target in zip(sources, targets, strict=True):
        shutil.copy2(source, target)
        logger.debug(f"Copied {source} -> {target}")

    return BackupPrecondition(backup_paths=targets)
