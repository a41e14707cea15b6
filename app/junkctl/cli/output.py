"""Shared output helpers for CLI commands.

Provides the output format option, the JSON envelope written by every
command in JSON mode, and logging setup for the global flags.
"""

import json
import logging
from enum import Enum
from typing import Any

from junkctl.utils.formatting import console

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


class OutputFormat(str, Enum):
    """Output format options for commands with machine-readable output."""

    TABLE = "table"
    JSON = "json"


def envelope(data: Any = None, *, success: bool = True, error: str | None = None) -> dict[str, Any]:
    """Wrap command output in the JSON envelope.

    Args:
        data: Command payload (must be JSON serializable).
        success: Whether the command achieved its goal.
        error: Error message for failed commands.

    Returns:
        Dictionary with ``success``, ``data`` and ``error`` keys.
    """
    return {"success": success, "data": data, "error": error}


def print_json(data: Any = None, *, success: bool = True, error: str | None = None) -> None:
    """Print a JSON envelope to stdout."""
    console.print_json(json.dumps(envelope(data, success=success, error=error)))


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging on stderr for the global CLI flags.

    Args:
        verbose: Log debug messages.
        quiet: Only log errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
