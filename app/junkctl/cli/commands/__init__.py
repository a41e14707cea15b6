"""CLI commands for junkctl.

This package contains all subcommand implementations.
"""

from junkctl.cli.commands import check, clean, config, history, scan

__all__ = ["check", "clean", "config", "history", "scan"]
