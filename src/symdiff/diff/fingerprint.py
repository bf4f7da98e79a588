"""Fingerprint engine — 64-bit digests over a subset of declaration traits.

Trait values are hashed with BLAKE2b (8-byte digest) over a canonical,
type-tagged encoding, so digests are stable across processes (Python's
``hash()`` of ``str`` is salted per interpreter).  The per-trait hashes
are folded in registry order into an accumulator that starts from
``FINGERPRINT_SEED``; excluded traits are skipped, never reordered.
"""

import hashlib
from enum import Enum
from typing import Hashable, List

from ..snapshot.models import Declaration, Snapshot
from .traits import NO_TRAITS, TRAIT_REGISTRY, TraitSet

MASK64 = (1 << 64) - 1
FINGERPRINT_SEED = 0x2545F4914F6CDD1D
_GOLDEN = 0x9E3779B97F4A7C15


def _encode(value: Hashable, out: List[bytes]) -> None:
    if value is None:
        out.append(b"N")
    elif isinstance(value, bool):
        out.append(b"B1" if value else b"B0")
    elif isinstance(value, int):
        raw = str(value).encode("ascii")
        out.append(b"I%d:" % len(raw) + raw)
    elif isinstance(value, float):
        raw = repr(value).encode("ascii")
        out.append(b"F%d:" % len(raw) + raw)
    elif isinstance(value, str):
        raw = value.encode("utf-8")
        out.append(b"S%d:" % len(raw) + raw)
    elif isinstance(value, Enum):
        out.append(b"E")
        _encode(value.value, out)
    elif isinstance(value, (tuple, frozenset)):
        items = sorted(value, key=repr) if isinstance(value, frozenset) else value
        out.append(b"T%d:" % len(items))
        for item in items:
            _encode(item, out)
    else:
        raw = repr(value).encode("utf-8")
        out.append(b"R%d:" % len(raw) + raw)


def stable_hash(value: Hashable) -> int:
    """Deterministic 64-bit hash of a trait value."""
    parts: List[bytes] = []
    _encode(value, parts)
    digest = hashlib.blake2b(b"".join(parts), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def mix_hash(h: int, acc: int) -> int:
    """Order-sensitive 64-bit combination of ``h`` into ``acc``."""
    acc ^= (h + _GOLDEN + ((acc << 6) & MASK64) + (acc >> 2)) & MASK64
    return acc & MASK64


def fingerprint(
    decl: Declaration,
    snapshot: Snapshot,
    excluded: TraitSet = NO_TRAITS,
) -> int:
    """Fingerprint ``decl`` over every registry trait not in ``excluded``."""
    acc = FINGERPRINT_SEED
    for trait in TRAIT_REGISTRY:
        if trait in excluded:
            continue
        acc = mix_hash(stable_hash(trait.value_of(decl, snapshot)), acc)
    return acc


def trait_values(decl: Declaration, snapshot: Snapshot, excluded: TraitSet = NO_TRAITS) -> tuple:
    """The raw values a fingerprint is computed from, for collision checks."""
    return tuple(
        trait.value_of(decl, snapshot) for trait in TRAIT_REGISTRY if trait not in excluded
    )
