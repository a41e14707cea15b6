"""CLI package for junkctl.

This package contains the Typer application and all subcommands.
"""

from junkctl.cli.main import app

__all__ = ["app"]
