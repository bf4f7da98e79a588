"""Inspect CLI command — load one snapshot and report what it contains."""

from collections import Counter
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import SymdiffError
from ..logging_config import setup_logging
from ..snapshot.loader import JsonSnapshotProvider
from ..snapshot.models import DeclKind
from . import app
from ._common import console, err_console


@app.command(name="inspect")
def inspect_cmd(
    snapshot: Path = typer.Argument(..., help="Snapshot file (JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load a snapshot and print declaration, module and metadata counts."""
    setup_logging(verbose=verbose)

    try:
        loaded = JsonSnapshotProvider().load(snapshot)
    except SymdiffError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    kinds = Counter(decl.kind for decl in loaded)

    table = Table(title=loaded.label, expand=False)
    table.add_column("Item", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("modules", str(len(loaded.modules)))
    table.add_row("declarations", str(len(loaded)))
    for kind in DeclKind:
        if kinds[kind]:
            table.add_row(f"  {kind}", str(kinds[kind]))
    for key in sorted(loaded.extensions):
        table.add_row(f"extension {key}", str(len(loaded.extension(key))))

    console.print(table)
