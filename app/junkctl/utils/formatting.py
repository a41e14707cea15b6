"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from junkctl.core.theme import get_theme, risk_style

if TYPE_CHECKING:
    from junkctl.filesystem.models import FileEntry, RiskLevel


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format a byte count as a human-readable string.

    Examples:
        >>> format_size(512)
        '512 B'
        >>> format_size(1536)
        '1.5 KB'
    """
    if not size_bytes:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def format_risk(level: RiskLevel) -> str:
    """Format a risk tier with its theme color."""
    return f"[{risk_style(level)}]{level.value}[/]"


def create_file_table(title: str = "Junk Files") -> Table:
    """Create a pre-configured table for displaying file entries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for file display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Size", style="size", justify="right", no_wrap=True)
    table.add_column("Modified", style="muted", no_wrap=True)
    return table


def format_file_row(entry: FileEntry) -> tuple[str, str, str]:
    """Format a file entry as a table row.

    Returns:
        Tuple of (path, size, modified).
    """
    return (
        escape(entry.path),
        format_size(entry.size_bytes),
        entry.modified.astimezone().strftime("%Y-%m-%d %H:%M"),
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
