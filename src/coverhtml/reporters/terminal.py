"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coverhtml.analyzers.coverage import aggregate_coverage

if TYPE_CHECKING:
    from coverhtml.models.report import Report

console = Console(stderr=True)

_GOOD_COVERAGE = 80.0
_FAIR_COVERAGE = 60.0


def _coverage_color(pct: float) -> str:
    """Return a Rich color name for a coverage percentage."""
    if pct >= _GOOD_COVERAGE:
        return "green"
    if pct >= _FAIR_COVERAGE:
        return "yellow"
    return "red"


class CLIReporter:
    """Rich terminal output for the coverhtml command."""

    def __init__(self, output: Console | None = None) -> None:
        """Initialize the CLI reporter."""
        self.console = output or console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}", soft_wrap=True, highlight=False)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", soft_wrap=True)

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)

    def print_coverage_summary(self, report: Report) -> None:
        """Print a per-file coverage table followed by the total."""
        if not report.files:
            self.print_warning("Coverage profile contains no files")
            return

        table = Table(title="Coverage", show_lines=False)
        table.add_column("File", style="cyan")
        table.add_column("Statements", justify="right")
        table.add_column("Coverage", justify="right")
        table.add_column("Uncovered ranges", justify="right")

        for file in report.files:
            color = _coverage_color(file.coverage)
            table.add_row(
                escape(file.name),
                f"{file.covered_statements}/{file.total_statements}",
                f"[{color}]{file.coverage:.1f}%[/{color}]",
                str(len(file.uncovered_ranges)),
            )

        total = aggregate_coverage(report)
        color = _coverage_color(total)
        table.add_section()
        table.add_row(
            "[bold]Total (mean per file)[/bold]", "", f"[{color}]{total:.1f}%[/{color}]", ""
        )
        self.console.print(table)


reporter = CLIReporter()
