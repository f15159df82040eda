"""Tests for MigrateLibraryUseCase."""

import attrs
import pytest

from tunebridge.application.use_cases import (
    BackupPrecondition,
    MigrateLibraryCommand,
    MigrateLibraryUseCase,
    MigrationOutcome,
)
from tunebridge.domain.entities import DiagnosticCategory, PlaylistRecord
from tunebridge.domain.exceptions import InvalidRecordError, PreconditionError
from tunebridge.domain.matching import Matched, Unmatched

DRY_RUN = BackupPrecondition(dry_run=True)


@pytest.fixture
def use_case():
    return MigrateLibraryUseCase()


class TestBackupPrecondition:
    """Test when the backup precondition counts as satisfied."""

    def test_dry_run_needs_no_backup(self):
        assert DRY_RUN.satisfied

    def test_no_backup_not_satisfied(self):
        assert not BackupPrecondition().satisfied

    def test_existing_backups_satisfy(self, tmp_path):
        paths = [tmp_path / "rhythmdb.xml.bak", tmp_path / "playlists.xml.bak"]
        for path in paths:
            path.write_text("")

        assert BackupPrecondition(backup_paths=paths).satisfied

    def test_missing_backup_file_not_satisfied(self, tmp_path):
        assert not BackupPrecondition(backup_paths=[tmp_path / "gone.bak"]).satisfied


class TestMigrateLibraryCommand:
    """Test the command value passed to the use case."""

    def test_carries_only_run_inputs(self):
        assert [f.name for f in attrs.fields(MigrateLibraryCommand)] == [
            "source_tracks",
            "destination_tracks",
            "precondition",
            "source_playlists",
            "supported_fields",
            "movie_ids",
        ]


class TestMigrateLibraryUseCase:
    """Test the full pipeline over in-memory records."""

    def test_refuses_without_backup(self, use_case, make_track):
        destination = make_track("d1", "Hello")
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "Hello", play_count=3)],
            destination_tracks=[destination],
            precondition=BackupPrecondition(),
        )

        with pytest.raises(PreconditionError):
            use_case.execute(command)
        assert destination.play_count is None

    def test_duplicate_source_ids_rejected(self, use_case, make_track):
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "A"), make_track("s1", "B")],
            destination_tracks=[],
            precondition=DRY_RUN,
        )

        with pytest.raises(InvalidRecordError, match="duplicate"):
            use_case.execute(command)

    def test_empty_destination_id_rejected_before_mutation(self, use_case, make_track):
        good = make_track("d1", "Hello")
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "Hello", play_count=3)],
            destination_tracks=[good, make_track("", "Broken")],
            precondition=DRY_RUN,
        )

        with pytest.raises(InvalidRecordError, match="no identifier"):
            use_case.execute(command)
        assert good.play_count is None

    def test_unnamed_playlist_rejected(self, use_case):
        command = MigrateLibraryCommand(
            source_tracks=[],
            destination_tracks=[],
            source_playlists=[PlaylistRecord(name="")],
            precondition=DRY_RUN,
        )

        with pytest.raises(InvalidRecordError):
            use_case.execute(command)

    def test_clean_run(self, use_case, make_track, make_playlist):
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "Hello", play_count=3)],
            destination_tracks=[make_track("d1", "Hello")],
            source_playlists=[make_playlist("Mix", ["s1"])],
            precondition=DRY_RUN,
        )

        result = use_case.execute(command)

        assert result.outcome is MigrationOutcome.CLEAN
        assert result.resolution["s1"] == Matched("d1")
        assert result.destination_tracks[0].play_count == 3
        assert result.updated_ids == frozenset({"d1"})
        assert [p.track_ids for p in result.destination_playlists] == [["d1"]]
        assert result.matched_count == 1
        assert len(result.report) == 0

    def test_run_with_diagnostics(self, use_case, make_track, make_playlist):
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "Hello"), make_track("s2", "Missing")],
            destination_tracks=[make_track("d1", "Hello")],
            source_playlists=[make_playlist("Favorites", ["s1", "s2"])],
            precondition=DRY_RUN,
        )

        result = use_case.execute(command)

        assert result.outcome is MigrationOutcome.WITH_DIAGNOSTICS
        assert result.resolution["s2"] == Unmatched()
        assert result.unmatched_count == 1
        assert list(result.report.counts()) == [
            DiagnosticCategory.UNMATCHED_TRACK,
            DiagnosticCategory.DROPPED_PLAYLIST_ENTRY,
        ]

    def test_movie_entries_reported_as_dropped(self, use_case, make_track, make_playlist):
        command = MigrateLibraryCommand(
            source_tracks=[make_track("s1", "Hello")],
            destination_tracks=[make_track("d1", "Hello")],
            source_playlists=[make_playlist("Favorites", ["s1", "m1"])],
            precondition=DRY_RUN,
            movie_ids=["m1"],
        )

        result = use_case.execute(command)

        assert command.movie_ids == frozenset({"m1"})
        assert result.destination_playlists[0].track_ids == ["d1"]
        assert result.outcome is MigrationOutcome.WITH_DIAGNOSTICS
        (entry,) = result.report.by_category()[DiagnosticCategory.DROPPED_PLAYLIST_ENTRY]
        assert "movie" in entry.message

    def test_info_only_diagnostics_are_clean(self, use_case, make_track):
        command = MigrateLibraryCommand(
            source_tracks=[],
            destination_tracks=[make_track("d1", "Lonely")],
            precondition=DRY_RUN,
        )

        result = use_case.execute(command)

        assert result.outcome is MigrationOutcome.CLEAN
        assert len(result.report) == 1

    def test_deterministic_report(self, use_case, make_track, make_playlist):
        def run() -> str:
            command = MigrateLibraryCommand(
                source_tracks=[
                    make_track("s1", "Twice"),
                    make_track("s2", "Gone"),
                    make_track("s3", "Hello", play_count=2),
                ],
                destination_tracks=[
                    make_track("d1", "Twice"),
                    make_track("d2", "Twice"),
                    make_track("d3", "Hello", play_count=1),
                ],
                source_playlists=[make_playlist("Mix", ["s1", "s2", "s3"])],
                precondition=DRY_RUN,
            )
            return use_case.execute(command).report.render()

        assert run() == run()
