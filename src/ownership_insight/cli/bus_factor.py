"""Ownership concentration command."""

from pathlib import Path
from typing import Optional

import typer

from ..api import scan_ownership
from ..exceptions import OwnershipInsightError
from ..formatters import OutputFormat, get_formatter
from ..logging_config import get_logger
from ..ownership.models import Granularity, ScanMode
from . import app
from ._common import choice_value, err_console, resolve_config, split_extensions


@app.command("bus-factor")
def bus_factor(
    path: Path = typer.Argument(
        Path("."),
        help="Any path inside the git repository",
        exists=True,
    ),
    mode: Optional[ScanMode] = typer.Option(
        None,
        "--mode",
        "-m",
        help="exact (blame every line) or heuristic (count commit touches) [default: exact]",
        case_sensitive=False,
    ),
    by: Optional[Granularity] = typer.Option(
        None,
        "--by",
        help="Score each file or roll up to directories [default: file]",
        case_sensitive=False,
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", help="Directory depth for --by dir [default: 2]", min=0
    ),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", "-t", help="Ownership share above which a path is flagged [default: 0.75]"
    ),
    min_total: Optional[int] = typer.Option(
        None, "--min-total", help="Minimum lines/touches to report a path [default: 25]", min=0
    ),
    include_all: bool = typer.Option(
        False, "--all", help="Score every tracked file, ignoring the extension allow-list"
    ),
    include_ext: Optional[str] = typer.Option(
        None, "--include-ext", help="Extra extensions to score, comma separated (e.g. lua,vim)"
    ),
    max_commits: Optional[int] = typer.Option(
        None, "--max-commits", help="Only walk the most recent N commits (heuristic mode)", min=1
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Parallel blame workers (default: auto-detect)", min=0
    ),
    approximate: bool = typer.Option(
        False,
        "--approximate",
        help="Fold directories from file winners only (faster to explain, less accurate)",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Rows to show [default: 20]", min=1),
    fmt: OutputFormat = typer.Option(
        OutputFormat.RICH,
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
        case_sensitive=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped paths and commits"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Find files or directories dominated by a single author.

    [bold cyan]Examples:[/bold cyan]

      ownership-insight bus-factor .

      ownership-insight bus-factor . --mode heuristic --max-commits 2000

      ownership-insight bus-factor . --by dir --depth 1 --format json
    """
    try:
        settings = resolve_config(
            config=config,
            mode=choice_value(mode),
            granularity=choice_value(by),
            depth=depth,
            threshold=threshold,
            min_total=min_total,
            include_all=include_all or None,
            extra_extensions=split_extensions(include_ext),
            max_commits=max_commits,
            workers=workers,
            dir_fidelity="approximate" if approximate else None,
            limit=limit,
            verbose=verbose,
            quiet=quiet,
        )
        report = scan_ownership(path, config=settings)
        get_formatter(fmt).render(report, limit=settings.limit)

    except OwnershipInsightError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        get_logger().exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
