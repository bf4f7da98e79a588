"""Configuration exceptions."""

from typing import Any

from .base import SymdiffError
from .taxonomy import ErrorCode


class ConfigurationError(SymdiffError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
            code=ErrorCode.SD400,
        )
        self.key = key
        self.value = value
        self.reason = reason
