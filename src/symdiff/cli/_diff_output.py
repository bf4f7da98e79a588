"""Terminal formatter for DiffResult output.

Renders the summarizer's ordering either as plain text (identical to
``summarize``), as colour-coded Rich output grouped by module, or as JSON.
"""

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..diff.engine import DiffResult
from ..diff.models import (
    Added,
    AttributeAdded,
    AttributeRemoved,
    Diff,
    DirectImportAdded,
    DirectImportRemoved,
    DocAdded,
    DocRemoved,
    ModuleAdded,
    ModuleRemoved,
    Removed,
    TransitiveImportAdded,
    TransitiveImportRemoved,
)
from ..diff.summary import NO_MODULE_HEADER, group_by_module, render_diff, summarize
from ..exceptions import DiffWarning

_ADDITIONS = (Added, ModuleAdded, DirectImportAdded, TransitiveImportAdded, DocAdded, AttributeAdded)
_REMOVALS = (
    Removed,
    ModuleRemoved,
    DirectImportRemoved,
    TransitiveImportRemoved,
    DocRemoved,
    AttributeRemoved,
)


def _styled(diff: Diff) -> str:
    """Return a Rich-markup line for a diff."""
    text = escape(render_diff(diff))
    if isinstance(diff, _ADDITIONS):
        return f"[green]+[/green] {text}"
    if isinstance(diff, _REMOVALS):
        return f"[red]-[/red] {text}"
    return f"[yellow]~[/yellow] {text}"


class DiffFormatter:
    """Render a DiffResult.

    Usage::

        formatter = DiffFormatter()
        formatter.render(result)              # default: rich console
        formatter.render(result, fmt="json")  # machine-readable JSON
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self._console = console or Console()
        self._err_console = err_console or Console(stderr=True)

    def render(self, result: DiffResult, fmt: str = "rich", show_warnings: bool = True) -> None:
        if fmt == "json":
            typer.echo(json.dumps(result.to_dict(), indent=2, default=str))
            return
        if fmt == "text":
            typer.echo(summarize(result.diffs), nl=False)
        else:
            self._render_rich(result)
        if show_warnings and result.warnings:
            self._render_warnings(result.warnings)

    def _render_rich(self, result: DiffResult) -> None:
        header = f"[bold]{escape(result.old_label or 'old')}[/bold] -> [bold]{escape(result.new_label or 'new')}[/bold]"
        counts = result.counts()
        summary = "  |  ".join(f"{name}: {n}" for name, n in counts.items()) or "No changes"
        self._console.print(Panel(summary, title=header, expand=False))

        for module, group in group_by_module(result.diffs):
            title = module if module is not None else NO_MODULE_HEADER
            self._console.print(f"[bold cyan]{escape(title)}[/bold cyan]")
            for diff in group:
                self._console.print(f"  {_styled(diff)}")

        total = len(result.diffs)
        self._console.print(f"[dim]{total} change{'s' if total != 1 else ''}[/dim]")

    def _render_warnings(self, warnings: List[DiffWarning]) -> None:
        self._err_console.print(f"[yellow]{len(warnings)} warning(s):[/yellow]")
        for warning in warnings:
            self._err_console.print(f"  [yellow]![/yellow] {escape(str(warning))}")
