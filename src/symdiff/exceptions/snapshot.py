"""Snapshot loading exceptions: unreadable, malformed or incompatible inputs."""

from typing import Optional

from .base import SymdiffError
from .taxonomy import ErrorCode


class SnapshotLoadError(SymdiffError):
    """Raised when a snapshot cannot be loaded from its source.

    Defaults to SD101 (malformed document); the loader passes SD100 for
    unreadable files and SD103 for duplicate declarations.
    """

    def __init__(self, source: str, reason: str, code: ErrorCode = ErrorCode.SD101):
        super().__init__(
            f"Cannot load snapshot: {source}",
            details={"source": source, "reason": reason},
            code=code,
        )
        self.source = source
        self.reason = reason


class SnapshotVersionError(SnapshotLoadError):
    """Raised when a snapshot was written in an unsupported format version."""

    def __init__(self, source: str, found: Optional[object], supported: int):
        super().__init__(
            source,
            f"unsupported format version {found!r} (expected {supported})",
            code=ErrorCode.SD102,
        )
        self.found = found
        self.supported = supported
