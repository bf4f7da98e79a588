"""Base exception for symdiff."""

from typing import Dict, Optional

from .taxonomy import ErrorCode


class SymdiffError(Exception):
    """Base exception for all symdiff errors.

    ``code`` is set by subclasses that map onto an ``ErrorCode``; the
    string form is then prefixed with it, matching ``DiffWarning``.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, str]] = None,
        code: Optional[ErrorCode] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.code = code

    def __str__(self) -> str:
        text = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            text = f"{text} ({details_str})"
        if self.code is not None:
            text = f"[{self.code.value}] {text}"
        return text
