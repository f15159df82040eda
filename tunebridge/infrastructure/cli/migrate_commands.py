"""Migration command for tunebridge CLI."""

from pathlib import Path
from typing import Annotated

import typer

from tunebridge.application.use_cases import MigrationOutcome
from tunebridge.config import get_logger, setup_loguru_logger
from tunebridge.infrastructure.cli.ui import (
    command_error_handler,
    console,
    display_diagnostics,
    display_migration_summary,
)
from tunebridge.infrastructure.services.migration_runner import run_migration

logger = get_logger(__name__)

# Exit status when --fail-on-diagnostics is set and warnings were reported
DIAGNOSTICS_EXIT_CODE = 2


def register_migrate_commands(app: typer.Typer) -> None:
    """Register migration commands with the Typer app."""
    app.command(
        name="migrate",
        help="Migrate play statistics and playlists from iTunes to Rhythmbox",
        rich_help_panel="🎵 Migration",
    )(migrate)


@command_error_handler
def migrate(
    ctx: typer.Context,
    itunes_library: Annotated[
        Path,
        typer.Argument(
            help="Path to the iTunes Library XML file",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    rhythmbox_path: Annotated[
        Path | None,
        typer.Option(
            "--rhythmbox-path",
            "-r",
            help="Rhythmbox data directory (default: $XDG_DATA_HOME/rhythmbox)",
            file_okay=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Report what would change without writing anything"),
    ] = False,
    report: Annotated[
        Path | None,
        typer.Option("--report", help="Also write the diagnostics report to this file"),
    ] = None,
    fail_on_diagnostics: Annotated[
        bool,
        typer.Option(
            "--fail-on-diagnostics",
            help=f"Exit with status {DIAGNOSTICS_EXIT_CODE} when warnings were reported",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors and print the plain report to stderr instead of the summary",
        ),
    ] = False,
) -> None:
    """Migrate an iTunes library into Rhythmbox."""
    if quiet:
        verbose = bool(ctx.obj and ctx.obj.get("verbose"))
        setup_loguru_logger(verbose=verbose, quiet=True)

    run = run_migration(itunes_library, rhythmbox_path=rhythmbox_path, dry_run=dry_run)
    result = run.result

    if not quiet:
        display_migration_summary(run)
        display_diagnostics(result.report)
    elif report is None:
        typer.echo(result.report.render(), err=True, nl=False)

    if report is not None:
        report.write_text(result.report.render(), encoding="utf-8")
        logger.info(f"Wrote diagnostics report: {report}")

    if fail_on_diagnostics and result.outcome is MigrationOutcome.WITH_DIAGNOSTICS:
        console.print(
            f"\n[yellow]{result.report.warning_count} warnings reported[/yellow]"
        )
        raise typer.Exit(code=DIAGNOSTICS_EXIT_CODE)
