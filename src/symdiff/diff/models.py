"""Diff cases — a closed sum type of every semantic change symdiff reports.

Each case is a frozen dataclass deriving from ``Diff``.  ``DIFF_CASES``
lists them all, and the two total functions ``diff_priority`` and
``diff_module`` are driven by tables checked against ``DIFF_CASES`` when
this module is imported: adding a case without a priority and a module
accessor fails at import time.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from ..snapshot.models import DeclKind


@dataclass(frozen=True)
class Diff:
    """Base of all diff cases."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Enum) else value
        return data


# ── Declarations ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Added(Diff):
    name: str
    module: str


@dataclass(frozen=True)
class Removed(Diff):
    name: str
    module: str


@dataclass(frozen=True)
class Renamed(Diff):
    old_name: str
    new_name: str
    namespace_only: bool
    module: str


@dataclass(frozen=True)
class MovedToModule(Diff):
    name: str
    old_module: str
    new_module: str


@dataclass(frozen=True)
class MovedWithinModule(Diff):
    name: str
    module: str


@dataclass(frozen=True)
class ProofChanged(Diff):
    name: str
    is_proof_relevant: bool
    module: str


@dataclass(frozen=True)
class TypeChanged(Diff):
    name: str
    module: str


@dataclass(frozen=True)
class SpeciesChanged(Diff):
    name: str
    old_kind: DeclKind
    new_kind: DeclKind
    module: str


# ── Modules and imports ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class ModuleAdded(Diff):
    module: str


@dataclass(frozen=True)
class ModuleRemoved(Diff):
    module: str


@dataclass(frozen=True)
class ModuleRenamed(Diff):
    old_module: str
    new_module: str


@dataclass(frozen=True)
class DirectImportAdded(Diff):
    module: str
    imported: str


@dataclass(frozen=True)
class DirectImportRemoved(Diff):
    module: str
    imported: str


@dataclass(frozen=True)
class TransitiveImportAdded(Diff):
    module: str
    imported: str


@dataclass(frozen=True)
class TransitiveImportRemoved(Diff):
    module: str
    imported: str


# ── Extension metadata ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class DocAdded(Diff):
    name: str


@dataclass(frozen=True)
class DocChanged(Diff):
    name: str


@dataclass(frozen=True)
class DocRemoved(Diff):
    name: str


@dataclass(frozen=True)
class AttributeAdded(Diff):
    attr_name: str
    name: str


@dataclass(frozen=True)
class AttributeRemoved(Diff):
    attr_name: str
    name: str


@dataclass(frozen=True)
class AttributeChanged(Diff):
    attr_name: str
    name: str
    old_value: Any = None
    new_value: Any = None


DIFF_CASES: Tuple[Type[Diff], ...] = (
    Added,
    Removed,
    Renamed,
    MovedToModule,
    MovedWithinModule,
    ProofChanged,
    TypeChanged,
    SpeciesChanged,
    ModuleAdded,
    ModuleRemoved,
    ModuleRenamed,
    DirectImportAdded,
    DirectImportRemoved,
    TransitiveImportAdded,
    TransitiveImportRemoved,
    DocAdded,
    DocChanged,
    DocRemoved,
    AttributeAdded,
    AttributeRemoved,
    AttributeChanged,
)

# Lower is reported first.
_PRIORITY: Dict[Type[Diff], int] = {
    ModuleRemoved: 0,
    ModuleAdded: 1,
    ModuleRenamed: 2,
    DirectImportRemoved: 5,
    DirectImportAdded: 6,
    TransitiveImportRemoved: 7,
    TransitiveImportAdded: 8,
    Removed: 10,
    Added: 11,
    Renamed: 12,
    MovedToModule: 13,
    MovedWithinModule: 14,
    SpeciesChanged: 15,
    TypeChanged: 16,
    ProofChanged: 17,
    DocRemoved: 30,
    DocAdded: 31,
    DocChanged: 32,
    AttributeRemoved: 40,
    AttributeAdded: 41,
    AttributeChanged: 42,
}


def _no_module(diff: Diff) -> Optional[str]:
    return None


_MODULE_OF: Dict[Type[Diff], Callable[[Any], Optional[str]]] = {
    Added: lambda d: d.module,
    Removed: lambda d: d.module,
    Renamed: lambda d: d.module,
    MovedToModule: lambda d: d.new_module,
    MovedWithinModule: lambda d: d.module,
    ProofChanged: lambda d: d.module,
    TypeChanged: lambda d: d.module,
    SpeciesChanged: lambda d: d.module,
    ModuleAdded: lambda d: d.module,
    ModuleRemoved: lambda d: d.module,
    ModuleRenamed: lambda d: d.new_module,
    DirectImportAdded: lambda d: d.module,
    DirectImportRemoved: lambda d: d.module,
    TransitiveImportAdded: lambda d: d.module,
    TransitiveImportRemoved: lambda d: d.module,
    DocAdded: _no_module,
    DocChanged: _no_module,
    DocRemoved: _no_module,
    AttributeAdded: _no_module,
    AttributeRemoved: _no_module,
    AttributeChanged: _no_module,
}

for _table_name, _table in (("priority", _PRIORITY), ("module", _MODULE_OF)):
    _missing = set(DIFF_CASES) - set(_table)
    _extra = set(_table) - set(DIFF_CASES)
    if _missing or _extra:
        raise TypeError(
            f"diff {_table_name} table out of sync: missing "
            f"{sorted(c.__name__ for c in _missing)}, extra {sorted(c.__name__ for c in _extra)}"
        )

del _table_name, _table, _missing, _extra


def diff_priority(diff: Diff) -> int:
    """Fixed report priority of a diff case (lower first)."""
    return _PRIORITY[type(diff)]


def diff_module(diff: Diff) -> Optional[str]:
    """Module a diff is grouped under; ``None`` for metadata-only diffs."""
    return _MODULE_OF[type(diff)](diff)
