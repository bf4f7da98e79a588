"""Data models for symbol snapshots, the immutable record of one build."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterator, Mapping, Optional, Tuple


class DeclKind(Enum):
    """Syntactic category of a declaration (its "species")."""

    AXIOM = "axiom"
    DEFINITION = "definition"
    THEOREM = "theorem"
    OPAQUE = "opaque"
    QUOTIENT = "quotient"
    INDUCTIVE = "inductive"
    CONSTRUCTOR = "constructor"
    RECURSOR = "recursor"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Declaration:
    """A single named entity in a snapshot.

    ``type_expr`` and ``value_expr`` are opaque hashable values; the engine
    only compares and hashes them.  ``value_expr`` is ``None`` for
    declarations without a body (axioms, inductives, ...).
    """

    name: str
    kind: DeclKind
    type_expr: Hashable
    value_expr: Optional[Hashable]
    module: str

    @property
    def has_value(self) -> bool:
        return self.value_expr is not None


@dataclass(frozen=True)
class Module:
    """A module and the modules it imports directly."""

    name: str
    imports: Tuple[str, ...] = ()


def _freeze(mapping: Mapping) -> Mapping:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Snapshot:
    """Complete, immutable symbol database of one build.

    Declarations are keyed by their unique name.  Modules keep their
    import order.  ``extensions`` holds the metadata stores (doc strings,
    attribute membership, reducibility, ...) as read-only
    ``name -> payload`` mappings keyed by metadata-kind id.
    """

    declarations: Mapping[str, Declaration] = field(default_factory=dict)
    modules: Tuple[Module, ...] = ()
    extensions: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    label: str = ""

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to wrap the mappings read-only
        object.__setattr__(self, "declarations", _freeze(self.declarations))
        object.__setattr__(self, "modules", tuple(self.modules))
        object.__setattr__(
            self,
            "extensions",
            MappingProxyType({k: _freeze(v) for k, v in self.extensions.items()}),
        )

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.declarations.values())

    def __len__(self) -> int:
        return len(self.declarations)

    def get(self, name: str) -> Optional[Declaration]:
        return self.declarations.get(name)

    @property
    def module_names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self.modules)

    def imports_of(self) -> Dict[str, Tuple[str, ...]]:
        """Direct-import adjacency: module name -> imported module names."""
        return {m.name: m.imports for m in self.modules}

    def extension(self, key: str) -> Mapping[str, Any]:
        """Return the metadata store ``key``, empty when absent."""
        return self.extensions.get(key, MappingProxyType({}))
