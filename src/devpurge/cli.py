"""CLI interface for devpurge."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.prompt import Prompt

from devpurge import __version__
from devpurge.cleaner import delete_paths, deleted_paths
from devpurge.config import load_settings
from devpurge.display import (
    confirm_deletion,
    console,
    prompt_selection,
    shorten_path,
    show_deletion_preview,
    show_deletion_progress,
    show_deletion_result,
    show_deletion_summary,
    show_results,
    show_scanning_progress,
    show_warnings,
)
from devpurge.exceptions import DevPurgeError
from devpurge.logging_config import setup_logging
from devpurge.orchestrator import ScanOrchestrator

BYTES_PER_MB = 1024 * 1024

# Create Typer app
app = typer.Typer(
    name="devpurge",
    help="Find and remove build and dependency folders (node_modules, target, ...)",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"devpurge version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Directory to scan"),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", "-m", min=0, help="Hide folders smaller than this many MB"
    ),
    scan: bool = typer.Option(False, "--scan", help="Ignore cached sizes and measure everything"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Neither read nor write the cache"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip the confirmation prompt"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be deleted"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Scan a directory tree for dependency folders and delete the ones you pick."""
    settings = load_settings()
    setup_logging(logging.DEBUG if verbose else settings.log_level)

    console.print("[bold blue]DevPurge - Developer Dependency Cleaner[/bold blue]")

    if path is None:
        path = Prompt.ask("Enter path to scan", default=os.getcwd(), console=console)

    min_size_mb = settings.min_size_mb if min_size is None else min_size
    orchestrator = ScanOrchestrator(
        cache_path=None if no_cache else settings.cache_file,
        max_workers=settings.workers,
    )

    console.print(f"Scanning {escape(path)} for dependency folders... This may take a while.")
    try:
        with show_scanning_progress() as progress:
            task = progress.add_task("Scanning...", total=None)

            def update_progress(current: str) -> None:
                progress.update(task, description=f"Scanning: {escape(shorten_path(current))}")

            report = orchestrator.scan(
                Path(path),
                min_size_bytes=min_size_mb * BYTES_PER_MB,
                use_cache=not no_cache,
                force_rescan=scan,
                progress_callback=update_progress,
            )
    except DevPurgeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("[yellow]Scan interrupted[/yellow]")
        raise typer.Exit(130)

    show_warnings(report.warnings)

    if not report.results:
        if min_size_mb > 0:
            console.print(f"No dependency folders of at least {min_size_mb} MB found.")
        else:
            console.print("No dependency folders found.")
        raise typer.Exit(0)

    show_results(report)
    console.print()

    selected = prompt_selection(report.results)
    if not selected:
        console.print("No folders selected. Exiting.")
        raise typer.Exit(0)

    show_deletion_preview(selected, dry_run=dry_run)

    if not yes and not dry_run:
        if not confirm_deletion(len(selected)):
            console.print("[yellow]Operation cancelled.[/yellow]")
            raise typer.Exit(0)

    console.print(f"\n[bold]Deleting {len(selected)} folders...[/bold]")
    with show_deletion_progress() as progress:
        task = progress.add_task("Deleting...", total=len(selected))

        def deletion_progress(current: str, done: int, total: int) -> None:
            progress.update(
                task,
                completed=done - 1,
                description=f"Deleting {escape(shorten_path(current, 40))}",
            )

        outcomes = delete_paths(selected, dry_run=dry_run, progress_callback=deletion_progress)
        progress.update(task, completed=len(selected), description="Done!")

    for outcome in outcomes:
        show_deletion_result(outcome)

    removed = deleted_paths(outcomes)
    if removed:
        orchestrator.post_delete_update(removed)

    show_deletion_summary(outcomes)


if __name__ == "__main__":
    app()
