"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output, and formatted text.
Supports verbosity levels and --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.cli.models import ExportSummary
from src.issue_tracker.models import ReconcileAction


class OutputHandler:
    """Handles all terminal output using Rich library.

    Provides methods for displaying messages, spinners and the run summary
    with color coding and verbosity level control.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Export completed")
        >>> with handler.spinner("Fetching collection..."):
        ...     # Do work
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_summary(self, summary: ExportSummary) -> None:
        """Display the run summary with color coding.

        Args:
            summary: Result of the export run
        """
        self.console.print("\n[bold]Export Summary:[/bold]")

        if summary.exported_collections:
            self.console.print(
                f"  [green]↓[/green] Exported: {len(summary.exported_collections)} collection(s), "
                f"{summary.documents_written} document(s)"
            )

        if summary.skipped_collections:
            self.console.print(
                f"  [dim]─[/dim] Skipped: {len(summary.skipped_collections)} collection(s)"
            )

        if summary.commit_ids:
            commits = ", ".join(commit_id[:8] for commit_id in summary.commit_ids)
            label = "Commit" if len(summary.commit_ids) == 1 else "Commits"
            self.console.print(f"  [blue]●[/blue] {label}: {commits}")

        reconcile = summary.reconcile
        if reconcile is None:
            if summary.exported_collections and not summary.committed:
                self.console.print("\n[green]Documentation unchanged. No issues updated.[/green]")
            return

        created = reconcile.count(ReconcileAction.CREATED)
        commented = reconcile.count(ReconcileAction.COMMENTED)
        deleted = (
            reconcile.count(ReconcileAction.DELETE_LABELED)
            + reconcile.count(ReconcileAction.DELETE_COMMENTED)
        )
        unsupported = reconcile.count(ReconcileAction.UNSUPPORTED)

        if created:
            self.console.print(f"  [green]+[/green] Issues created: {created}")
        if commented:
            self.console.print(f"  [blue]~[/blue] Issues updated: {commented}")
        if deleted:
            self.console.print(f"  [red]-[/red] Issues marked deleted: {deleted}")
        if unsupported:
            self.console.print(f"  [yellow]⚠[/yellow] Renames ignored: {unsupported}")

        if reconcile.entries == 0:
            self.console.print("\n[green]No changed documents in commit.[/green]")
        else:
            self.console.print(
                f"\n[green]Reconciled {reconcile.entries} change(s) "
                f"from {reconcile.pages} page(s)[/green]"
            )
