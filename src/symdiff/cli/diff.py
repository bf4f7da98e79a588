"""Compare two snapshot files from the command line."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..diff.engine import diff_snapshots
from ..diff.extensions import select_adapters
from ..exceptions import SymdiffError
from ..logging_config import setup_logging
from ..snapshot.loader import JsonSnapshotProvider
from . import app
from ._common import console, err_console, resolve_config
from ._diff_output import DiffFormatter


@app.command(name="diff")
def diff_cmd(
    old: Path = typer.Argument(..., help="Snapshot of the earlier build (JSON)"),
    new: Path = typer.Argument(..., help="Snapshot of the later build (JSON)"),
    ignore_internal: Optional[bool] = typer.Option(
        None,
        "--ignore-internal/--include-internal",
        help="Skip compiler-generated declarations",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: text, rich, json",
    ),
    extension: Optional[List[str]] = typer.Option(
        None,
        "--extension",
        "-e",
        help="Metadata kind to diff (repeatable; default: all)",
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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """Show what changed between two builds.

    Exit status is 0 whenever the diff was computed (even when empty) and
    1 when a snapshot or the configuration could not be loaded.

    [bold cyan]Examples:[/bold cyan]

      symdiff diff old.json new.json

      symdiff diff old.json new.json --ignore-internal --format text

      symdiff diff old.json new.json -e docstring -e simp --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            ignore_internal=ignore_internal,
            fmt=fmt,
            extensions=extension,
            verbose=verbose,
            quiet=quiet,
        )
        adapters = select_adapters(settings.extensions)

        provider = JsonSnapshotProvider()
        old_snapshot = provider.load(old)
        new_snapshot = provider.load(new)

        result = diff_snapshots(
            old_snapshot,
            new_snapshot,
            ignore_internal=settings.ignore_internal,
            adapters=adapters,
        )

        formatter = DiffFormatter(console=console, err_console=err_console)
        formatter.render(
            result, fmt=settings.output_format, show_warnings=settings.show_warnings
        )

    except SymdiffError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", markup=True, highlight=False)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error in diff")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
