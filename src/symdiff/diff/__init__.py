"""Semantic diffing of symbol snapshots."""

from .engine import DiffResult, diff_extensions, diff_snapshots
from .extensions import (
    DocStringAdapter,
    ExtensionAdapter,
    TagAttributeAdapter,
    ValuedAttributeAdapter,
    default_adapters,
    select_adapters,
)
from .fingerprint import fingerprint
from .matching import HYPOTHESES, Hypothesis, match_declarations
from .minimize import minimize
from .models import DIFF_CASES, Diff, diff_module, diff_priority
from .rename import RenameMap
from .summary import render_diff, sort_diffs, summarize
from .traits import TRAIT_REGISTRY, Trait
from .unchanged import filter_unchanged

__all__ = [
    "DIFF_CASES",
    "Diff",
    "DiffResult",
    "DocStringAdapter",
    "ExtensionAdapter",
    "HYPOTHESES",
    "Hypothesis",
    "RenameMap",
    "TRAIT_REGISTRY",
    "TagAttributeAdapter",
    "Trait",
    "ValuedAttributeAdapter",
    "default_adapters",
    "diff_extensions",
    "diff_module",
    "diff_priority",
    "diff_snapshots",
    "filter_unchanged",
    "fingerprint",
    "match_declarations",
    "minimize",
    "render_diff",
    "select_adapters",
    "sort_diffs",
    "summarize",
]
