"""Drop diffs implied by a coarser diff in the same list."""

from typing import List, Set

from ..logging_config import get_logger
from .models import AttributeRemoved, Diff, DocRemoved, Removed

logger = get_logger(__name__)


def minimize(diffs: List[Diff]) -> List[Diff]:
    """Remove metadata removals already explained by a declaration removal.

    ``Removed(n)`` implies that ``n`` lost its doc string and every
    attribute, so ``DocRemoved(n)`` and ``AttributeRemoved(_, n)`` are
    dropped.  Order of the surviving diffs is preserved.
    """
    removed: Set[str] = {d.name for d in diffs if isinstance(d, Removed)}
    if not removed:
        return list(diffs)

    kept = [
        d
        for d in diffs
        if not (isinstance(d, (DocRemoved, AttributeRemoved)) and d.name in removed)
    ]
    if len(kept) != len(diffs):
        logger.debug("Minimizer dropped %d implied diff(s)", len(diffs) - len(kept))
    return kept
