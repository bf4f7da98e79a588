"""CLI entry point. Registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="symdiff",
    help="symdiff - Semantic diffs between symbol snapshots",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"symdiff {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Compare two builds at the level of named declarations."""


def main() -> None:
    app()


# Import subcommands to register them
from .diff import diff_cmd as _diff_cmd  # noqa: F401, E402
from .inspect_snapshot import inspect_cmd as _inspect_cmd  # noqa: F401, E402
