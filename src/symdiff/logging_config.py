"""
Logging configuration for symdiff.

Log output goes to stderr through Rich so that diff output on stdout
stays clean.  Diff warnings (fingerprint collisions, ambiguous matches)
travel on the ``DiffResult`` and are printed by the front end; the log
copy is recorded at INFO so it only shows up in ``--verbose`` runs and
in log files, where it carries its warning code.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions.taxonomy import DiffWarning

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(warning_code)s - %(message)s"


class _WarningCodeFilter(logging.Filter):
    """Expose the diff warning code (or ``-``) as ``%(warning_code)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        payload = getattr(record, "diff_warning", None)
        record.warning_code = payload["warning_code"] if payload else "-"
        return True


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for a symdiff run.

    Args:
        verbose: Enable DEBUG level logging (bucket sharing, each match)
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path; records there are tagged with
                  their diff warning code

    Returns:
        The configured ``symdiff`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.addFilter(_WarningCodeFilter())
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger("symdiff")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``symdiff`` namespace.

    Args:
        name: Module name (e.g., 'symdiff.diff.matching').
              If None, returns the root symdiff logger.
    """
    if name is None:
        return logging.getLogger("symdiff")

    if not name.startswith("symdiff"):
        name = f"symdiff.{name}"

    return logging.getLogger(name)


def log_diff_warning(logger: logging.Logger, warning: DiffWarning) -> None:
    """Record a diff warning at INFO with its structured form attached.

    The structured form is available to handlers as ``record.diff_warning``.
    """
    logger.info("%s", warning, extra={"diff_warning": warning.to_json()})
