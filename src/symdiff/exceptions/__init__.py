"""Exception hierarchy for symdiff."""

from .base import SymdiffError
from .config import ConfigurationError, InvalidConfigError
from .snapshot import SnapshotLoadError, SnapshotVersionError
from .taxonomy import (
    AmbiguousMatchWarning,
    DiffWarning,
    ErrorCode,
    FingerprintCollisionWarning,
)

__all__ = [
    "SymdiffError",
    "SnapshotLoadError",
    "SnapshotVersionError",
    "ConfigurationError",
    "InvalidConfigError",
    "ErrorCode",
    "DiffWarning",
    "FingerprintCollisionWarning",
    "AmbiguousMatchWarning",
]
