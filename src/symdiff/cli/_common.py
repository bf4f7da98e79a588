"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import DiffConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    ignore_internal: Optional[bool] = None,
    fmt: Optional[str] = None,
    extensions: Optional[List[str]] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> DiffConfig:
    """Build configuration from CLI options; unset options defer to files/env."""
    overrides = {
        "ignore_internal": ignore_internal,
        "output_format": fmt,
        "extensions": extensions or None,
    }
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
