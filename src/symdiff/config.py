"""Configuration loading and management for symdiff.

Configuration sources are merged in priority order:
    1. Defaults (defined in DiffConfig)
    2. Global config (~/.symdiff.toml)
    3. Project config (./symdiff.toml)
    4. Explicit config file (``--config``)
    5. Environment variables (SYMDIFF_*)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(ignore_internal=True, output_format="json")
    >>> config.ignore_internal
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, SymdiffError

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["text", "rich", "json"]

_VERBOSITIES = ("quiet", "normal", "verbose")
_OUTPUT_FORMATS = ("text", "rich", "json")


@dataclass(frozen=True)
class DiffConfig:
    """Configuration for a diff run.

    Attributes:
        ignore_internal: Skip system-generated declarations when matching
            and when diffing metadata.
        extensions: Extension adapter ids to run. Empty means every
            registered adapter.
        output_format: ``text`` (plain summary), ``rich`` (coloured
            terminal output) or ``json``.
        show_warnings: Print collision/ambiguity warnings after the diff.
        verbosity: Logging verbosity level.
    """

    ignore_internal: bool = False
    extensions: list[str] = field(default_factory=list)
    output_format: OutputFormat = "rich"
    show_warnings: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.output_format not in _OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format",
                self.output_format,
                f"must be one of {', '.join(_OUTPUT_FORMATS)}",
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity",
                self.verbosity,
                f"must be one of {', '.join(_VERBOSITIES)}",
            )
        if not all(isinstance(e, str) and e for e in self.extensions):
            raise InvalidConfigError(
                "extensions", self.extensions, "must be a list of non-empty strings"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> DiffConfig:
    """Load configuration from all sources.

    Args:
        config_file: Optional explicit TOML file.
        **overrides: CLI-level overrides; ``None`` values are ignored.

    Raises:
        SymdiffError: If a config file is missing or cannot be parsed,
            or a field is unknown.
        InvalidConfigError: If a field value fails validation.
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".symdiff.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except SymdiffError:
            raise
        except Exception as e:
            raise SymdiffError(f"Invalid config file '{global_config}': {e}")

    project_config = Path.cwd() / "symdiff.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except SymdiffError:
            raise
        except Exception as e:
            raise SymdiffError(f"Invalid config file '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise SymdiffError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except SymdiffError:
            raise
        except Exception as e:
            raise SymdiffError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return DiffConfig(**merged)
    except TypeError as e:
        raise SymdiffError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SYMDIFF_* environment variables.

    Supported environment variables:
        SYMDIFF_IGNORE_INTERNAL: bool (true/false/1/0)
        SYMDIFF_OUTPUT_FORMAT: text/rich/json
        SYMDIFF_SHOW_WARNINGS: bool
        SYMDIFF_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(DiffConfig)

    result: dict[str, Any] = {}

    for field_name in DiffConfig.__dataclass_fields__:
        env_key = f"SYMDIFF_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise SymdiffError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string
    (lists), so the default stays in effect.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    A ``[symdiff]`` table is used when present, otherwise the top level.
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise SymdiffError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("symdiff")
    return dict(section) if isinstance(section, dict) else data
