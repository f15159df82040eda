"""Smoke and end-to-end tests for the tunebridge CLI."""

import pytest
from typer.testing import CliRunner

from tunebridge.infrastructure.cli.app import app


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


class TestCoreCommandStructure:
    """Test that core command structure exists and is accessible."""

    def test_main_help_shows_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "migrate" in result.stdout
        assert "version" in result.stdout

    def test_version_command_works(self, runner):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "tunebridge" in result.stdout

    def test_migrate_help(self, runner):
        result = runner.invoke(app, ["migrate", "--help"])

        assert result.exit_code == 0
        assert "--dry-run" in result.stdout

    def test_missing_library_file(self, runner, tmp_path):
        result = runner.invoke(app, ["migrate", str(tmp_path / "nope.xml")])
        assert result.exit_code != 0


class TestMigrateCommand:
    """Run the migrate command against temporary library files."""

    def test_successful_run_with_diagnostics(self, runner, itunes_library_file, rhythmbox_dir):
        """Diagnostics alone do not fail the run."""
        result = runner.invoke(
            app, ["migrate", str(itunes_library_file), "--rhythmbox-path", str(rhythmbox_dir)]
        )

        assert result.exit_code == 0, result.output
        assert "Migration complete" in result.stdout
        assert "Unmatched tracks" in result.stdout
        assert (rhythmbox_dir / "rhythmdb.xml.bak").exists()

    def test_fail_on_diagnostics(self, runner, itunes_library_file, rhythmbox_dir):
        result = runner.invoke(
            app,
            [
                "migrate",
                str(itunes_library_file),
                "-r",
                str(rhythmbox_dir),
                "--fail-on-diagnostics",
            ],
        )

        assert result.exit_code == 2

    def test_dry_run_with_report_file(self, runner, itunes_library_file, rhythmbox_dir, tmp_path):
        report = tmp_path / "report.txt"

        result = runner.invoke(
            app,
            [
                "migrate",
                str(itunes_library_file),
                "-r",
                str(rhythmbox_dir),
                "--dry-run",
                "--report",
                str(report),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "dry run" in result.stdout
        assert not (rhythmbox_dir / "rhythmdb.xml.bak").exists()
        lines = report.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("WARNING [unmatched-track]")
        assert lines[-1].startswith("summary: unmatched-track=1")

    def test_quiet_prints_no_summary(self, runner, itunes_library_file, rhythmbox_dir):
        result = runner.invoke(
            app, ["migrate", str(itunes_library_file), "-r", str(rhythmbox_dir), "-q", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "Migration" not in result.stdout

    def test_quiet_without_report_file_prints_plain_report(
        self, runner, itunes_library_file, rhythmbox_dir
    ):
        result = runner.invoke(
            app, ["migrate", str(itunes_library_file), "-r", str(rhythmbox_dir), "-q", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "WARNING [unmatched-track]" in result.output
        assert "summary: unmatched-track=1" in result.output

    def test_quiet_with_report_file_prints_nothing(
        self, runner, itunes_library_file, rhythmbox_dir, tmp_path
    ):
        report = tmp_path / "report.txt"

        result = runner.invoke(
            app,
            [
                "migrate",
                str(itunes_library_file),
                "-r",
                str(rhythmbox_dir),
                "-q",
                "--dry-run",
                "--report",
                str(report),
            ],
        )

        assert result.exit_code == 0
        assert "summary:" not in result.output
        assert report.read_text(encoding="utf-8").endswith("\n")

    def test_fatal_error_exit_code(self, runner, itunes_library_file, rhythmbox_dir):
        (rhythmbox_dir / "rhythmdb.xml.bak").write_text("old")

        result = runner.invoke(app, ["migrate", str(itunes_library_file), "-r", str(rhythmbox_dir)])

        assert result.exit_code == 1
        assert "backup already exists" in result.stdout
