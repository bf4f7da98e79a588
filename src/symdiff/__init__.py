"""
symdiff - Semantic diffs between symbol snapshots

Reports what changed between two builds of a large codebase at the level
of declarations: additions, removals, renames, moves between modules,
type/value/kind changes, metadata changes and module import changes.
"""

__version__ = "0.1.0"

from .api import compare
from .diff import Diff, DiffResult, diff_snapshots, summarize
from .snapshot import Declaration, DeclKind, Module, Snapshot, load_snapshot

__all__ = [
    "compare",  # Main entry point
    "diff_snapshots",  # Engine over already-loaded snapshots
    "summarize",
    "Diff",
    "DiffResult",
    "Declaration",
    "DeclKind",
    "Module",
    "Snapshot",
    "load_snapshot",
]
