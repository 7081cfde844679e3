"""Rich console output for rona commands."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rona.errors import GitError, RonaError
from rona.git.staging import StagingResult
from rona.git.status import FileState, StatusEntry


class RonaLogger:
    """Rich console output for rona commands."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose output
        """
        self.console = console or Console()
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Dim message, shown only in verbose mode."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def plain(self, message: str) -> None:
        """Print text as-is (no markup, no highlighting)."""
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def report_error(self, error: RonaError) -> None:
        """Print a RonaError, with git's stderr in verbose mode."""
        self.error(error.message)
        if isinstance(error, GitError) and error.stderr and self.verbose:
            self.console.print(Panel(Text(error.stderr), title="git", border_style="red"))

    def show_partition(self, result: StagingResult) -> None:
        """Display staged and excluded files in a table."""
        split = result.partition
        if not split.total:
            return

        title = "Planned Staging (dry-run)" if result.dry_run else "Staging"

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Action", justify="center")
        table.add_column("State", style="magenta")
        table.add_column("Path", style="cyan")

        for entry in split.to_stage:
            marker = "[red]-[/red]" if entry.worktree == "D" else "[green]+[/green]"
            table.add_row(marker, _state_label(entry), Text(entry.path))
        for entry in split.excluded:
            table.add_row("[dim]excluded[/dim]", _state_label(entry), Text(entry.path, style="dim"))

        self.console.print()
        self.console.print(table)
        self.console.print()

    def staging_summary(self, result: StagingResult) -> None:
        """Display the one-line outcome of add-with-exclude."""
        split = result.partition
        if not split.to_stage:
            self.info("No files to add or delete")
            return

        deleted = result.deleted_count
        added = len(split.to_stage) - deleted
        verb = "Would add" if result.dry_run else "Added"
        self.success(
            f"{verb} {added} files, deleted {deleted} and excluded {result.excluded_count} files for commit."
        )

        for pattern in split.unmatched_patterns:
            self.debug(f"Pattern '{pattern}' matched no files")


def _state_label(entry: StatusEntry) -> Text:
    if entry.state in (FileState.RENAMED, FileState.COPIED) and entry.original_path:
        return Text(f"{entry.state.value} from {entry.original_path}")
    return Text(entry.state.value)
