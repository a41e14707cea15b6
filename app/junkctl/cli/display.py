"""Shared Rich display functions for scans, verdicts and cleanups.

Provides reusable table builders and summary printers used by the scan,
clean and check commands.
"""

from collections.abc import Sequence

from rich.markup import escape
from rich.table import Table

from junkctl.filesystem.models import CleanResult, DeleteVerdict, PathVerdict, ScanResult
from junkctl.utils.formatting import (
    console,
    create_file_table,
    format_file_row,
    format_risk,
    format_size,
    print_success,
    print_warning,
)


def create_scan_table(result: ScanResult, limit: int | None = None) -> Table:
    """Create a table listing the files of a scan.

    Args:
        result: Scan result to display.
        limit: Maximum number of rows.

    Returns:
        Rich Table with one row per file.
    """
    table = create_file_table(title="Junk Files")
    table.add_column("Category", style="muted", no_wrap=True)
    files = result.files[:limit] if limit else result.files
    for entry in files:
        table.add_row(*format_file_row(entry), entry.category.value)
    return table


def create_category_table(result: ScanResult) -> Table:
    """Create a table of file counts and sizes per category, largest first."""
    table = Table(
        title="By Category",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", no_wrap=True)
    table.add_column("Files", justify="right")
    table.add_column("Size", style="size", justify="right", no_wrap=True)

    for category, (count, size) in result.category_totals().items():
        table.add_row(category.value, str(count), format_size(size))

    return table


def print_scan_summary(result: ScanResult, shown: int) -> None:
    """Print totals below a scan table."""
    console.print(
        f"\n[dim]Found {result.file_count} junk file(s) "
        f"({format_size(result.total_size)} total)[/dim]"
    )
    if shown < result.file_count:
        console.print(f"[dim](showing {shown} of {result.file_count})[/dim]")
    if result.skipped:
        print_warning(f"{len(result.skipped)} path(s) could not be read (use -v for details)")


def create_plan_table(
    verdicts: Sequence[tuple[str, DeleteVerdict, PathVerdict]],
    dry_run: bool = False,
) -> Table:
    """Create a table showing the deletion verdict of each planned path.

    Args:
        verdicts: Tuples of (path, deletion verdict, access verdict).
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table configured for plan display.
    """
    title = "Planned Deletions (Dry Run)" if dry_run else "Planned Deletions"
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Risk", no_wrap=True)
    table.add_column("Action", no_wrap=True)
    table.add_column("Reason", style="muted")

    for path, delete_verdict, path_verdict in verdicts:
        if not delete_verdict.can_delete:
            action = "[error]refuse[/]"
        elif delete_verdict.requires_confirmation:
            action = "[warning]confirm[/]"
        else:
            action = "[success]trash[/]"
        table.add_row(
            escape(path),
            format_risk(path_verdict.risk_level),
            action,
            escape(delete_verdict.reason),
        )

    return table


def create_results_table(result: CleanResult) -> Table:
    """Create a table listing the outcome of every path of a cleanup.

    Args:
        result: Outcome of the deletion batch.

    Returns:
        Rich Table with deleted paths first, then failures.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Message", style="muted")

    for path in result.deleted_files:
        table.add_row("[success]OK[/]", escape(path), "Moved to trash")
    for failed in result.failed_files:
        table.add_row("[error]FAIL[/]", escape(failed.path), escape(failed.error))

    return table


def print_clean_summary(result: CleanResult) -> None:
    """Print the totals of a cleanup."""
    deleted = len(result.deleted_files)
    failed = len(result.failed_files)
    size = format_size(result.total_size)
    if failed:
        print_warning(f"{deleted} moved to trash ({size}), {failed} failed")
    else:
        print_success(f"All {deleted} path(s) moved to trash ({size} reclaimed).")
