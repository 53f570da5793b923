"""Rich terminal display for devpurge."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Prompt
from rich.table import Table

from devpurge.models import DeletionResult, ScanReport, ScanResult, format_size

console = Console()


def shorten_path(path: str, width: int = 50) -> str:
    """Keep the tail of a long path, prefixed with an ellipsis."""
    if len(path) <= width:
        return path
    return "..." + path[-(width - 3):]


def show_scanning_progress() -> Progress:
    """Create spinner for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_deletion_progress() -> Progress:
    """Create progress bar for deletion."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def show_warnings(warnings: list[str], limit: int = 10) -> None:
    """Display non-fatal scan warnings."""
    if not warnings:
        return

    console.print(f"[yellow]! {len(warnings)} warning(s) during scan[/yellow]")
    for message in warnings[:limit]:
        console.print(f"  [dim]{escape(message)}[/dim]")
    if len(warnings) > limit:
        console.print(f"  [dim]... and {len(warnings) - limit} more[/dim]")
    console.print()


def show_results(report: ScanReport) -> None:
    """Display the numbered list of folders found."""
    table = Table(title="Dependency Folders", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path")
    table.add_column("Type", style="cyan")
    table.add_column("Size", justify="right")

    for i, item in enumerate(report.results, start=1):
        size = item.size_human
        if item.partial:
            size = f"[yellow]>={size}[/yellow]"
        table.add_row(str(i), escape(item.path), item.project_type or item.folder_type, size)

    console.print(table)

    cached = f", {report.cache_hits} from cache" if report.cache_hits else ""
    console.print(
        f"Found {len(report.results)} folders{cached}. "
        f"Total size: [bold]{format_size(report.total_bytes)}[/bold]"
    )


def parse_selection(text: str, count: int) -> list[int]:
    """
    Turn a selection like '1,3,5-7', 'all' or 'none' into 0-based indexes.

    Raises:
        ValueError: If the text is malformed or a number is out of range
    """
    text = text.strip().lower()
    if text in ("", "all", "a"):
        return list(range(count))
    if text in ("none", "n"):
        return []

    selected: set[int] = set()
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        if "-" in part:
            start_str, end_str = part.split("-", 1)
            start, end = int(start_str), int(end_str)
            if start > end:
                raise ValueError(f"Invalid range: {part}")
            numbers = range(start, end + 1)
        else:
            numbers = range(int(part), int(part) + 1)
        for number in numbers:
            if not 1 <= number <= count:
                raise ValueError(f"No folder numbered {number}")
            selected.add(number - 1)

    return sorted(selected)


def prompt_selection(results: list[ScanResult]) -> list[ScanResult]:
    """Ask which folders to delete until the answer parses."""
    while True:
        answer = Prompt.ask(
            "Select folders to DELETE ([bold]all[/bold], [bold]none[/bold], or e.g. 1,3,5-7)",
            default="all",
            console=console,
        )
        try:
            return [results[i] for i in parse_selection(answer, len(results))]
        except ValueError as e:
            console.print(f"[red]{e}[/red]")


def show_deletion_preview(items: list[ScanResult], dry_run: bool = False) -> None:
    """Display the folders about to be deleted."""
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    console.print("[bold]Selected folders:[/bold]")
    for item in items:
        console.print(f"  {escape(shorten_path(item.path, 70))} ({item.size_human})")

    total = sum(item.size_bytes for item in items)
    console.print(f"\n[bold]Total to delete: {format_size(total)}[/bold]")


def confirm_deletion(count: int) -> bool:
    """Ask the user to type 'yes'."""
    answer = Prompt.ask(
        f"\nAre you sure you want to delete {count} folders? (type 'yes' to confirm)",
        console=console,
    )
    return answer.strip().lower() == "yes"


def show_deletion_result(result: DeletionResult) -> None:
    """Display result of a single deletion."""
    if result.success:
        verb = "would free" if result.dry_run else "freed"
        console.print(f"  [green]✓[/green] {escape(result.path)}: {format_size(result.bytes_freed)} {verb}")
    else:
        console.print(f"  [red]✗[/red] {escape(result.path)}: {escape(result.error or '')}")


def show_deletion_summary(results: list[DeletionResult]) -> None:
    """Display deletion summary."""
    total_freed = sum(r.bytes_freed for r in results if r.success)
    success_count = sum(1 for r in results if r.success)
    failure_count = sum(1 for r in results if not r.success)
    dry_run = any(r.dry_run for r in results)

    lines = [
        f"[bold]{'Space to reclaim' if dry_run else 'Reclaimed space'}:[/bold] {format_size(total_freed)}",
        f"  Folders: {success_count}",
    ]
    if failure_count:
        lines.append(f"  [red]Failed: {failure_count}[/red]")

    console.print()
    console.print(Panel("\n".join(lines), title="Cleanup Complete", border_style="green"))
