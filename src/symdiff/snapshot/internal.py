"""Heuristic classification of system-generated declaration names."""

import re
from typing import Callable

InternalNameClassifier = Callable[[str], bool]

# Auxiliary constructions the elaborator derives for every inductive type.
_AUX_SUFFIXES = frozenset(
    {
        "below",
        "ibelow",
        "brecOn",
        "binductionOn",
        "casesOn",
        "recOn",
        "noConfusion",
        "noConfusionType",
        "sizeOf_spec",
    }
)

_NUMBERED_AUX = re.compile(r"^(match|proof|eq)_\d+$")


def is_internal_name(name: str) -> bool:
    """Return True if ``name`` looks compiler-generated rather than authored.

    >>> is_internal_name("Nat.add._private.helper")
    True
    >>> is_internal_name("List.map.match_1")
    True
    >>> is_internal_name("List.map")
    False
    """
    components = name.split(".")
    if components[-1] in _AUX_SUFFIXES:
        return True
    for component in components:
        if component.startswith("_"):
            return True
        if _NUMBERED_AUX.match(component):
            return True
    return False
