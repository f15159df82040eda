"""UI helpers for CLI interaction.

This module keeps presentation logic (rich tables, colored diagnostics and
error lines) separate from the migration itself.
"""

from collections.abc import Callable
import functools
from typing import ParamSpec, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from tunebridge.config import get_logger
from tunebridge.domain.entities import DiagnosticReport, Severity
from tunebridge.domain.exceptions import MigrationError
from tunebridge.infrastructure.services.migration_runner import MigrationRun

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.WARNING: "yellow",
    Severity.INFO: "dim",
}

P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Fatal migration errors exit with their own ``exit_code``; anything else
    exits with 1. Either way the user sees one red line, and the full
    traceback goes to the log.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except MigrationError as e:
                logger.opt(exception=e).debug(f"{type(e).__name__} during {operation}")
                logger.error(e.message)
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {escape(e.message)}")
                raise typer.Exit(code=e.exit_code) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def display_migration_summary(run: MigrationRun) -> None:
    """Print the headline numbers of a run as a two-column table."""
    result = run.result
    title = "Migration preview (dry run)" if run.dry_run else "Migration complete"
    console.print(f"\n[bold blue]{title}[/bold blue]")

    summary_table = Table(show_header=False, box=None, padding=(0, 2))
    summary_table.add_column(style="cyan")
    summary_table.add_column(style="green bold")

    rows = [
        ("Source Tracks", len(result.resolution)),
        ("Matched", result.matched_count),
        ("Unmatched", result.unmatched_count),
        ("Ambiguous", result.ambiguous_count),
        ("Destination Tracks Updated", len(result.updated_ids)),
        ("Playlists Rebuilt", len(result.destination_playlists)),
        ("Warnings", result.report.warning_count),
    ]
    for label, value in rows:
        summary_table.add_row(label, str(value))
    if not run.dry_run:
        summary_table.add_row("Backups", ", ".join(p.name for p in run.precondition.backup_paths))

    console.print(summary_table)


def display_diagnostics(report: DiagnosticReport) -> None:
    """Print diagnostics grouped under a heading per category."""
    if not len(report):
        console.print("\n[green]No diagnostics[/green]")
        return

    for category, entries in report.by_category().items():
        console.print(f"\n[bold]{category.heading}[/bold] [dim]({len(entries)})[/dim]")
        for entry in entries:
            style = SEVERITY_STYLES[entry.severity]
            console.print(f"  [{style}]{escape(entry.render())}[/{style}]", highlight=False)
