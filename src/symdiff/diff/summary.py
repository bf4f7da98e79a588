"""Summarizer — deterministic ordering and plain-text rendering of diffs.

Diffs are sorted by ``(priority, module)`` with the rendered line as a
final tie-breaker, so the same set of diffs always produces the same
text regardless of the order the engine emitted them in.  Consecutive
diffs of the same module are grouped under one header.
"""

from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Type

from .models import (
    DIFF_CASES,
    Added,
    AttributeAdded,
    AttributeChanged,
    AttributeRemoved,
    Diff,
    DirectImportAdded,
    DirectImportRemoved,
    DocAdded,
    DocChanged,
    DocRemoved,
    ModuleAdded,
    ModuleRemoved,
    ModuleRenamed,
    MovedToModule,
    MovedWithinModule,
    ProofChanged,
    Removed,
    Renamed,
    SpeciesChanged,
    TransitiveImportAdded,
    TransitiveImportRemoved,
    TypeChanged,
    diff_module,
    diff_priority,
)

NO_MODULE_HEADER = "(no module)"


def _renamed(d: Renamed) -> str:
    suffix = " (namespace only)" if d.namespace_only else ""
    return f"renamed `{d.old_name}` to `{d.new_name}`{suffix}"


def _proof_changed(d: ProofChanged) -> str:
    what = "value" if d.is_proof_relevant else "proof"
    return f"changed {what} of `{d.name}`"


def _attribute_changed(d: AttributeChanged) -> str:
    return f"changed attribute @[{d.attr_name}] of `{d.name}`: {d.old_value!r} -> {d.new_value!r}"


_TEMPLATES: Dict[Type[Diff], Callable] = {
    Added: lambda d: f"added `{d.name}`",
    Removed: lambda d: f"removed `{d.name}`",
    Renamed: _renamed,
    MovedToModule: lambda d: f"moved `{d.name}` from {d.old_module} to {d.new_module}",
    MovedWithinModule: lambda d: f"moved `{d.name}` within {d.module}",
    ProofChanged: _proof_changed,
    TypeChanged: lambda d: f"changed type of `{d.name}`",
    SpeciesChanged: lambda d: f"changed `{d.name}` from {d.old_kind} to {d.new_kind}",
    ModuleAdded: lambda d: f"added module {d.module}",
    ModuleRemoved: lambda d: f"removed module {d.module}",
    ModuleRenamed: lambda d: f"renamed module {d.old_module} to {d.new_module}",
    DirectImportAdded: lambda d: f"{d.module} now imports {d.imported}",
    DirectImportRemoved: lambda d: f"{d.module} no longer imports {d.imported}",
    TransitiveImportAdded: lambda d: f"{d.module} now transitively imports {d.imported}",
    TransitiveImportRemoved: lambda d: f"{d.module} no longer transitively imports {d.imported}",
    DocAdded: lambda d: f"added doc string to `{d.name}`",
    DocChanged: lambda d: f"changed doc string of `{d.name}`",
    DocRemoved: lambda d: f"removed doc string from `{d.name}`",
    AttributeAdded: lambda d: f"added attribute @[{d.attr_name}] to `{d.name}`",
    AttributeRemoved: lambda d: f"removed attribute @[{d.attr_name}] from `{d.name}`",
    AttributeChanged: _attribute_changed,
}

if set(_TEMPLATES) != set(DIFF_CASES):
    raise TypeError("diff templates out of sync with DIFF_CASES")


def render_diff(diff: Diff) -> str:
    """One-line description of a single diff."""
    return _TEMPLATES[type(diff)](diff)


def _sort_key(diff: Diff) -> Tuple[int, bool, str, str]:
    module = diff_module(diff)
    return (diff_priority(diff), module is not None, module or "", render_diff(diff))


def sort_diffs(diffs: Iterable[Diff]) -> List[Diff]:
    """Sort by priority, then module (module-less first), then rendered text."""
    return sorted(diffs, key=_sort_key)


def group_by_module(diffs: Iterable[Diff]) -> List[Tuple[Optional[str], List[Diff]]]:
    """Group *consecutive* diffs sharing a module, preserving order."""
    groups: List[Tuple[Optional[str], List[Diff]]] = []
    for diff in diffs:
        module = diff_module(diff)
        if groups and groups[-1][0] == module:
            groups[-1][1].append(diff)
        else:
            groups.append((module, [diff]))
    return groups


def count_by_case(diffs: Iterable[Diff]) -> Dict[str, int]:
    """Number of diffs per case name, in ``DIFF_CASES`` order, zeros omitted."""
    counts = Counter(type(d) for d in diffs)
    return {case.__name__: counts[case] for case in DIFF_CASES if counts[case]}


def summarize(diffs: Iterable[Diff]) -> str:
    """Render diffs as grouped plain text followed by the total count."""
    ordered = sort_diffs(diffs)
    lines: List[str] = []
    for module, group in group_by_module(ordered):
        lines.append(module if module is not None else NO_MODULE_HEADER)
        lines.extend(f"  {render_diff(d)}" for d in group)
    total = len(ordered)
    lines.append(f"{total} change{'s' if total != 1 else ''}")
    return "\n".join(lines) + "\n"
