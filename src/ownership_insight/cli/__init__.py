"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="ownership-insight",
    help="Ownership Insight - authorship concentration and churn for git repositories",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(
            f"[bold cyan]Ownership Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Who owns this code, and how fast is it changing?"""


# Import subcommands to register them
from .bus_factor import bus_factor as _bus_factor  # noqa: F401, E402
from .churn import churn as _churn  # noqa: F401, E402
from .blame import blame as _blame  # noqa: F401, E402


def main() -> None:
    app()
