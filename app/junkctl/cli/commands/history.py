"""History command for viewing past cleanups.

This module provides the `junkctl history` command for viewing the
cleanups recorded by `junkctl clean`.
"""

from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from junkctl.cli.output import OutputFormat, print_json
from junkctl.core.state import StateManager
from junkctl.models.history import HistoryEntry
from junkctl.utils.formatting import console, format_size, print_info

app = typer.Typer(
    name="history",
    help="View history of cleanups.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show history of cleanups, newest first.

    Examples:
        junkctl history              # Show last 20 cleanups
        junkctl history -l 50        # Show last 50 cleanups
        junkctl history -f json      # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    entries = StateManager().get_history(limit=limit)

    if output_format == OutputFormat.JSON:
        print_json([entry.to_dict() for entry in entries])
        return

    if not entries:
        print_info("No history entries found.")
        return

    _print_table(entries)


def _print_table(entries: list[HistoryEntry]) -> None:
    """Print history as Rich table.

    Args:
        entries: List of history entries to display.
    """
    table = Table(
        title="Cleanup History",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="info")
    table.add_column("Deleted", justify="right", style="success")
    table.add_column("Failed", justify="right")
    table.add_column("Reclaimed", justify="right", style="size")
    table.add_column("Source", style="muted")

    for entry in entries:
        failed = entry.failed_count
        table.add_row(
            entry.id[:8],
            _format_timestamp(entry.timestamp),
            str(entry.deleted_count),
            f"[error]{failed}[/]" if failed else "0",
            format_size(entry.total_size),
            str(entry.metadata.get("source", "-")),
        )

    console.print(table)


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display.

    Args:
        iso_timestamp: ISO format timestamp string.

    Returns:
        Formatted local timestamp string (YYYY-MM-DD HH:MM).
    """
    dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")
