"""Diff engine — computes the semantic diff between two symbol snapshots.

The pipeline runs in five passes:
  1. Unchanged filter: drop declarations whose full fingerprint appears
     in both snapshots.
  2. Match engine: pair the remaining befores/afters under trait-exclusion
     hypotheses (renames, moves, value/type/kind changes); leftovers are
     Added/Removed.
  3. Rename extraction: old <-> new names from the Renamed diffs.
  4. Module imports and extension metadata, correlated through the
     rename map.
  5. Minimization, then summarizer ordering.

The engine is a pure function of its inputs: snapshots are never mutated
and no state survives between calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import DiffWarning
from ..logging_config import get_logger
from ..snapshot.internal import InternalNameClassifier
from ..snapshot.models import Snapshot
from .extensions import ExtensionAdapter, default_adapters
from .imports import diff_modules
from .matching import match_declarations
from .minimize import minimize
from .models import Diff
from .rename import RenameMap
from .summary import count_by_case, sort_diffs
from .unchanged import filter_unchanged

logger = get_logger(__name__)


@dataclass
class DiffResult:
    """Outcome of one diff run.

    ``diffs`` is minimized and already in summarizer order.
    """

    diffs: List[Diff] = field(default_factory=list)
    warnings: List[DiffWarning] = field(default_factory=list)
    renames: RenameMap = field(default_factory=RenameMap)
    unchanged_count: int = 0
    old_label: str = ""
    new_label: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.diffs

    def counts(self) -> Dict[str, int]:
        return count_by_case(self.diffs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "old": self.old_label,
            "new": self.new_label,
            "total": len(self.diffs),
            "counts": self.counts(),
            "diffs": [d.to_dict() for d in self.diffs],
            "warnings": [w.to_json() for w in self.warnings],
        }


def diff_extensions(
    old: Snapshot,
    new: Snapshot,
    renames: RenameMap,
    adapters: Mapping[str, ExtensionAdapter],
    ignore_internal: bool = False,
    classifier: Optional[InternalNameClassifier] = None,
) -> List[Diff]:
    """Run every registered adapter whose metadata kind appears in a snapshot."""
    present = set(old.extensions) | set(new.extensions)

    diffs: List[Diff] = []
    for key, adapter in adapters.items():
        if key not in present:
            continue
        produced = adapter.diff(
            old.extension(key),
            new.extension(key),
            renames,
            ignore_internal=ignore_internal,
            classifier=classifier,
        )
        logger.debug("Extension %s: %d diff(s)", key, len(produced))
        diffs.extend(produced)

    for key in sorted(present - set(adapters)):
        logger.debug("No adapter registered for extension %r; skipping", key)

    return diffs


def diff_snapshots(
    old: Snapshot,
    new: Snapshot,
    *,
    ignore_internal: bool = False,
    classifier: Optional[InternalNameClassifier] = None,
    adapters: Optional[Mapping[str, ExtensionAdapter]] = None,
) -> DiffResult:
    """Compute the semantic diff from ``old`` to ``new``.

    Args:
        old: The earlier snapshot.
        new: The later snapshot.
        ignore_internal: Leave system-generated declarations out of
            matching and metadata diffing.
        classifier: Predicate deciding which names are internal; defaults
            to ``is_internal_name``.
        adapters: Extension adapter registry; defaults to
            ``default_adapters()``.

    Returns:
        A DiffResult.  Never raises for well-formed snapshots, including
        empty or identical ones.
    """
    registry = default_adapters() if adapters is None else adapters

    changed = filter_unchanged(old, new, ignore_internal=ignore_internal, classifier=classifier)
    matched = match_declarations(changed.befores, changed.afters, old, new)
    renames = RenameMap.from_diffs(matched.diffs)

    diffs: List[Diff] = list(matched.diffs)
    diffs.extend(diff_modules(old, new))
    diffs.extend(
        diff_extensions(
            old, new, renames, registry, ignore_internal=ignore_internal, classifier=classifier
        )
    )
    diffs = minimize(diffs)

    warnings: List[DiffWarning] = [*changed.warnings, *matched.warnings]
    logger.info(
        "Diff %s -> %s: %d change(s), %d unchanged, %d rename(s), %d warning(s)",
        old.label or "old",
        new.label or "new",
        len(diffs),
        changed.unchanged_count,
        len(renames),
        len(warnings),
    )

    return DiffResult(
        diffs=sort_diffs(diffs),
        warnings=warnings,
        renames=renames,
        unchanged_count=changed.unchanged_count,
        old_label=old.label,
        new_label=new.label,
    )
