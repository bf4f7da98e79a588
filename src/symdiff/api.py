"""Public API for symdiff.

Example:
    >>> from symdiff import compare
    >>>
    >>> result = compare("build-old.json", "build-new.json")
    >>> print(result.counts())
    >>>
    >>> # Skip compiler-generated declarations, doc strings only
    >>> result = compare("old.json", "new.json", ignore_internal=True,
    ...                  extensions=["docstring"])
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import load_config
from .diff.engine import DiffResult, diff_snapshots
from .diff.extensions import select_adapters
from .logging_config import get_logger
from .snapshot.internal import InternalNameClassifier
from .snapshot.loader import JsonSnapshotProvider

logger = get_logger(__name__)

Source = Union[str, Path, Mapping[str, Any]]


def compare(
    old: Source,
    new: Source,
    config_file: Optional[Path] = None,
    classifier: Optional[InternalNameClassifier] = None,
    **overrides,
) -> DiffResult:
    """Load two snapshots and diff them.

    Args:
        old: Path to (or parsed document of) the earlier snapshot.
        new: Path to (or parsed document of) the later snapshot.
        config_file: Optional TOML configuration file.
        classifier: Custom internal-name predicate.
        **overrides: DiffConfig fields (``ignore_internal``, ``extensions``, ...).

    Raises:
        SnapshotLoadError: If either snapshot cannot be loaded.
        ConfigurationError: If the configuration is invalid.
    """
    config = load_config(config_file=config_file, **overrides)
    adapters = select_adapters(config.extensions)

    provider = JsonSnapshotProvider()
    old_snapshot = provider.load(old)
    new_snapshot = provider.load(new)

    return diff_snapshots(
        old_snapshot,
        new_snapshot,
        ignore_internal=config.ignore_internal,
        classifier=classifier,
        adapters=adapters,
    )
