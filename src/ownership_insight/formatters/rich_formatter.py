"""Rich terminal formatter for Ownership Insight."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..ownership.models import ChurnReport, Granularity, OwnershipReport
from .base import BaseFormatter, Report

console = Console()


def _ratio_label(ratio: float, threshold: float) -> str:
    pct = f"{ratio * 100:5.1f}%"
    if ratio > threshold:
        return f"[red bold]{pct}[/red bold]"
    elif ratio > threshold - 0.15:
        return f"[yellow]{pct}[/yellow]"
    return f"[green]{pct}[/green]"


class RichFormatter(BaseFormatter):
    """Rich terminal tables for ownership and churn reports."""

    def render(self, report: Report, limit: Optional[int] = None) -> None:
        if isinstance(report, OwnershipReport):
            self._print_ownership(report, limit)
        else:
            self._print_churn(report, limit)

    def format(self, report: Report, limit: Optional[int] = None) -> str:
        # Rich output goes directly to console; return empty string
        self.render(report, limit)
        return ""

    def _print_ownership(self, report: OwnershipReport, limit: Optional[int]) -> None:
        unit = "lines" if report.mode.value == "exact" else "touches"
        scope = "file" if report.granularity is Granularity.FILE else f"directory (depth {report.depth})"
        title = f"Ownership by {scope} [dim]({report.mode.value} mode"
        if report.fidelity.value == "approximate":
            title += ", approximate"
        title += ")[/dim]"

        rows = report.candidates if limit is None else report.candidates[:limit]
        table = Table(title=title, title_justify="left", show_lines=False)
        table.add_column("Path" if report.granularity is Granularity.FILE else "Directory")
        table.add_column("Top author")
        table.add_column("Ownership", justify="right")
        table.add_column(unit.capitalize(), justify="right")
        for score in rows:
            table.add_row(
                escape(score.path),
                escape(score.top_author),
                _ratio_label(score.ratio, report.threshold),
                str(score.total),
            )

        console.print(table)
        console.print(
            f"[bold]{len(report.matches)}[/bold] of {len(report.candidates)} above "
            f"{report.threshold * 100:.0f}% ownership"
            f" [dim]({report.files_scanned} files scanned)[/dim]"
        )

    def _print_churn(self, report: ChurnReport, limit: Optional[int]) -> None:
        if report.granularity is Granularity.FILE:
            scope = "by file"
        else:
            scope = f"by directory (depth {report.depth})"
        window = f"last {report.window_days} days" if report.window_days > 0 else "all time"

        rows = report.entries if limit is None else report.entries[:limit]
        table = Table(title=f"Churn ({window}) {scope}", title_justify="left")
        table.add_column("File" if report.granularity is Granularity.FILE else "Directory")
        table.add_column("Churn", justify="right")
        table.add_column("Adds", justify="right")
        table.add_column("Dels", justify="right")
        table.add_column("Touches", justify="right")
        for entry in rows:
            table.add_row(
                escape(entry.path),
                f"{entry.churn:.1f}",
                str(entry.adds),
                str(entry.dels),
                str(entry.touches),
            )
        console.print(table)
