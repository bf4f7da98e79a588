"""Unchanged filter — drop declarations whose full fingerprint is on both sides.

Only the declarations left over (added, removed or modified) reach the
matcher, which keeps matching proportional to the size of the change
rather than the size of the snapshots.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..exceptions import ErrorCode, FingerprintCollisionWarning
from ..logging_config import get_logger, log_diff_warning
from ..snapshot.internal import InternalNameClassifier, is_internal_name
from ..snapshot.models import Declaration, Snapshot
from .fingerprint import fingerprint, trait_values

logger = get_logger(__name__)


@dataclass
class ChangedDeclarations:
    """Declarations that survived the unchanged filter."""

    befores: List[Declaration] = field(default_factory=list)
    afters: List[Declaration] = field(default_factory=list)
    unchanged_count: int = 0
    warnings: List[FingerprintCollisionWarning] = field(default_factory=list)


def eligible_declarations(
    snapshot: Snapshot,
    ignore_internal: bool = False,
    classifier: Optional[InternalNameClassifier] = None,
) -> List[Declaration]:
    """Declarations that take part in matching: valued and, optionally, authored."""
    is_internal = classifier or is_internal_name
    return [
        decl
        for decl in snapshot
        if decl.has_value and not (ignore_internal and is_internal(decl.name))
    ]


def _fingerprint_all(
    decls: List[Declaration], snapshot: Snapshot
) -> Tuple[List[Tuple[Declaration, int]], Dict[int, List[Declaration]]]:
    keyed = [(decl, fingerprint(decl, snapshot)) for decl in decls]
    index: Dict[int, List[Declaration]] = {}
    for decl, fp in keyed:
        index.setdefault(fp, []).append(decl)
    return keyed, index


def _collision(fp: int, first: Declaration, second: Declaration, where: str) -> FingerprintCollisionWarning:
    warning = FingerprintCollisionWarning(
        message=(
            f"Declarations {first.name!r} and {second.name!r} share full fingerprint "
            f"{fp:016x} ({where}); treating both as changed"
        ),
        code=ErrorCode.SD200,
        context={"fingerprint": f"{fp:016x}", "names": [first.name, second.name], "where": where},
    )
    log_diff_warning(logger, warning)
    return warning


def filter_unchanged(
    old: Snapshot,
    new: Snapshot,
    ignore_internal: bool = False,
    classifier: Optional[InternalNameClassifier] = None,
) -> ChangedDeclarations:
    """Split eligible declarations into changed befores/afters.

    A full fingerprint present on exactly one side marks its declaration
    as changed.  A fingerprint on both sides is dropped as unchanged,
    provided the underlying trait values really are equal; anything that
    only *hashes* equal is reported as a collision and kept.
    """
    old_keyed, old_index = _fingerprint_all(eligible_declarations(old, ignore_internal, classifier), old)
    new_keyed, new_index = _fingerprint_all(eligible_declarations(new, ignore_internal, classifier), new)

    result = ChangedDeclarations()

    for index, side in ((old_index, "old snapshot"), (new_index, "new snapshot")):
        for fp, decls in index.items():
            if len(decls) > 1:
                result.warnings.append(_collision(fp, decls[0], decls[1], side))

    unchanged: Set[int] = set()
    for fp, olds in old_index.items():
        news = new_index.get(fp)
        if news is None or len(olds) != 1 or len(news) != 1:
            continue
        if trait_values(olds[0], old) == trait_values(news[0], new):
            unchanged.add(fp)
        else:
            result.warnings.append(_collision(fp, olds[0], news[0], "across snapshots"))

    result.befores = [decl for decl, fp in old_keyed if fp not in unchanged]
    result.afters = [decl for decl, fp in new_keyed if fp not in unchanged]
    result.unchanged_count = len(unchanged)

    logger.debug(
        "Unchanged filter: %d unchanged, %d befores, %d afters",
        result.unchanged_count,
        len(result.befores),
        len(result.afters),
    )
    return result
