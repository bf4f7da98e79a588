"""Error codes and non-fatal diagnostics raised while diffing.

Error Code Convention:
    SD1xx - Snapshot loading
    SD2xx - Fingerprinting
    SD3xx - Matching
    SD4xx - Configuration

Fatal problems are exceptions (see ``exceptions.snapshot`` and
``exceptions.config``).  The matcher never aborts on ambiguous input; it
records a ``DiffWarning`` instead, logs it, and keeps going.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured codes for errors and warnings."""

    # Snapshot loading (SD1xx)
    SD100 = "SD100"  # File unreadable
    SD101 = "SD101"  # Malformed document
    SD102 = "SD102"  # Unsupported format version
    SD103 = "SD103"  # Duplicate declaration name

    # Fingerprinting (SD2xx)
    SD200 = "SD200"  # Full fingerprint shared by distinct declarations

    # Matching (SD3xx)
    SD300 = "SD300"  # Several befores share a partial fingerprint
    SD301 = "SD301"  # Several afters compete for one before

    # Configuration (SD4xx)
    SD400 = "SD400"  # Invalid configuration value


@dataclass(frozen=True)
class DiffWarning:
    """A non-fatal diagnostic produced during a diff run.

    Attributes:
        message: Human-readable description
        code: Structured code for categorization
        context: Names, modules, hypothesis involved
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "warning_code": self.code.value,
            "kind": type(self).__name__,
            "message": self.message,
            "context": self.context,
        }


@dataclass(frozen=True)
class FingerprintCollisionWarning(DiffWarning):
    """Two distinct declarations share a full fingerprint (SD200)."""

    pass


@dataclass(frozen=True)
class AmbiguousMatchWarning(DiffWarning):
    """A partial fingerprint maps to more than one candidate (SD3xx)."""

    pass
