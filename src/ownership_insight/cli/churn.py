"""Recent churn command."""

from pathlib import Path
from typing import Optional

import typer

from ..api import scan_churn
from ..exceptions import OwnershipInsightError
from ..formatters import OutputFormat, get_formatter
from ..logging_config import get_logger
from ..ownership.models import ChurnAnchor, Granularity
from . import app
from ._common import choice_value, err_console, resolve_config, split_extensions


@app.command()
def churn(
    path: Path = typer.Argument(
        Path("."),
        help="Any path inside the git repository",
        exists=True,
    ),
    window_days: Optional[int] = typer.Option(
        None,
        "--window-days",
        help="Trailing window in days; 0 counts all history without decay [default: 90]",
    ),
    by: Optional[Granularity] = typer.Option(
        None,
        "--by",
        help="Rank files or roll up to directories [default: file]",
        case_sensitive=False,
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", help="Directory depth for --by dir [default: 2]", min=0
    ),
    anchor: Optional[ChurnAnchor] = typer.Option(
        None,
        "--anchor",
        help="End the window at the wall clock (now) or the newest commit (head) [default: now]",
        case_sensitive=False,
    ),
    include_all: bool = typer.Option(
        False, "--all", help="Include every changed file, ignoring the extension allow-list"
    ),
    include_ext: Optional[str] = typer.Option(
        None, "--include-ext", help="Extra extensions to include, comma separated"
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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped commits"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Rank paths by recent change volume, older changes fading out.

    [bold cyan]Examples:[/bold cyan]

      ownership-insight churn . --window-days 30

      ownership-insight churn . --by dir --depth 1 --anchor head --format json
    """
    try:
        settings = resolve_config(
            config=config,
            window_days=window_days,
            granularity=choice_value(by),
            depth=depth,
            churn_anchor=choice_value(anchor),
            include_all=include_all or None,
            extra_extensions=split_extensions(include_ext),
            limit=limit,
            verbose=verbose,
            quiet=quiet,
        )
        report = scan_churn(path, config=settings)
        get_formatter(fmt).render(report, limit=settings.limit)

    except OwnershipInsightError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        get_logger().exception("Unexpected error")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
