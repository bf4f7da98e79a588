"""Trait registry — the declaration attributes that fingerprints are built from.

The registry is closed: five traits, in a fixed order.  That order is the
combination order used by every fingerprint, whatever subset is excluded.
"""

from enum import Enum
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, Mapping, Tuple

from ..snapshot.models import Declaration, Snapshot


class Trait(Enum):
    NAME = "name"
    TYPE = "type"
    VALUE = "value"
    KIND = "kind"
    MODULE = "module"

    def value_of(self, decl: Declaration, snapshot: Snapshot) -> Hashable:
        """Extract this trait from ``decl`` as seen in ``snapshot``."""
        return _ACCESSORS[self](decl, snapshot)

    def __str__(self) -> str:
        return self.value


def _name(decl: Declaration, snapshot: Snapshot) -> str:
    return decl.name


def _type(decl: Declaration, snapshot: Snapshot) -> Hashable:
    return decl.type_expr


def _value(decl: Declaration, snapshot: Snapshot) -> Hashable:
    return decl.value_expr


def _kind(decl: Declaration, snapshot: Snapshot) -> str:
    return decl.kind.value


def _module(decl: Declaration, snapshot: Snapshot) -> str:
    return decl.module


_ACCESSORS: Dict[Trait, Callable[[Declaration, Snapshot], Hashable]] = {
    Trait.NAME: _name,
    Trait.TYPE: _type,
    Trait.VALUE: _value,
    Trait.KIND: _kind,
    Trait.MODULE: _module,
}

# Registry order; fingerprints fold traits in exactly this sequence.
TRAIT_REGISTRY: Tuple[Trait, ...] = (
    Trait.NAME,
    Trait.TYPE,
    Trait.VALUE,
    Trait.KIND,
    Trait.MODULE,
)

def _check_registry(registry: Tuple[Trait, ...], accessors: Mapping[Trait, object]) -> None:
    if len(registry) != len(Trait) or not set(registry) == set(Trait) == set(accessors):
        raise TypeError("trait registry and accessor table must cover every Trait exactly once")


_check_registry(TRAIT_REGISTRY, _ACCESSORS)

TraitSet = FrozenSet[Trait]

NO_TRAITS: TraitSet = frozenset()


def trait_set(traits: Iterable[Trait]) -> TraitSet:
    return frozenset(traits)


def format_traits(traits: TraitSet) -> str:
    """Render a trait set in registry order, e.g. ``{name, value}``."""
    return "{" + ", ".join(str(t) for t in TRAIT_REGISTRY if t in traits) + "}"
