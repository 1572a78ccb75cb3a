"""Per-author line counts for a single file."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..api import blame_summary
from ..exceptions import OwnershipInsightError
from ..formatters import OutputFormat
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console


@app.command()
def blame(
    file: str = typer.Argument(..., help="File path relative to the repository root"),
    repo: Path = typer.Option(
        Path("."), "--path", "-C", help="Any path inside the git repository", exists=True
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.RICH,
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Show who last touched how many lines of FILE."""
    setup_logging("verbose" if verbose else "normal")

    try:
        counts = blame_summary(file, repo_path=repo)
    except OwnershipInsightError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if fmt is OutputFormat.JSON:
        print(json.dumps({file: counts}, indent=2))
        return

    total = sum(counts.values())
    table = Table(title=escape(file), title_justify="left")
    table.add_column("Author")
    table.add_column("Lines", justify="right")
    table.add_column("Share", justify="right")
    for author, lines in counts.items():
        share: Optional[float] = lines / total if total else None
        table.add_row(escape(author), str(lines), f"{share * 100:.1f}%" if share is not None else "-")
    console.print(table)
