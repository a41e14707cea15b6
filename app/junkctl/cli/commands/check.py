"""Path inspection commands.

Provides the check, size, info and temp-dirs commands, which report on
paths without modifying anything.
"""

import os
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.markup import escape
from rich.table import Table

from junkctl.cli.output import OutputFormat, print_json
from junkctl.filesystem.classifier import classify, validate_operation
from junkctl.filesystem.locations import list_temp_directories
from junkctl.filesystem.sizes import file_info, size_of
from junkctl.utils.formatting import console, format_risk, format_size, print_error, print_info

FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format.",
        case_sensitive=False,
    ),
]


def check(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to classify. They do not need to exist."),
    ],
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show the risk tier and deletion verdict of paths.

    Examples:
        junkctl check /tmp/build.log ~/.ssh/id_rsa
    """
    rows = []
    for path in paths:
        absolute = os.path.abspath(os.path.expanduser(path))
        read = validate_operation("read", absolute)
        delete = validate_operation("delete", absolute)
        rows.append((absolute, classify(absolute), read, delete))

    if output_format == OutputFormat.JSON:
        print_json(
            [
                {
                    "path": path,
                    "risk_level": verdict.risk_level.value,
                    "can_access": read.allowed,
                    "can_delete": delete.allowed,
                    "reason": delete.reason,
                    "warnings": list(delete.warnings),
                }
                for path, verdict, read, delete in rows
            ]
        )
        return

    table = Table(
        title="Path Verdicts",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Risk", no_wrap=True)
    table.add_column("Access", no_wrap=True)
    table.add_column("Delete", no_wrap=True)
    table.add_column("Reason", style="muted")

    for path, verdict, read, delete in rows:
        if not delete.allowed:
            delete_text = "[error]no[/]"
        elif delete.warnings:
            delete_text = "[warning]confirm[/]"
        else:
            delete_text = "[success]yes[/]"
        table.add_row(
            escape(path),
            format_risk(verdict.risk_level),
            "[success]yes[/]" if read.allowed else "[error]no[/]",
            delete_text,
            escape(delete.reason),
        )

    console.print(table)


def size(
    path: Annotated[Path, typer.Argument(help="File or directory to measure.")],
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Print the size of a file or the recursive size of a directory."""
    absolute = os.path.abspath(os.path.expanduser(path))
    try:
        size_bytes = size_of(absolute)
    except OSError as e:
        _fail(f"Cannot measure {absolute}: {e.strerror or e}", output_format)

    if output_format == OutputFormat.JSON:
        print_json({"path": absolute, "size_bytes": size_bytes})
        return
    console.print(
        f"[path]{escape(absolute)}[/]: [size]{format_size(size_bytes)}[/] ({size_bytes} bytes)"
    )


def info(
    path: Annotated[Path, typer.Argument(help="File or directory to describe.")],
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show name, size, kind and modification time of a path."""
    absolute = os.path.abspath(os.path.expanduser(path))
    try:
        entry = file_info(absolute)
    except OSError as e:
        _fail(f"Cannot stat {absolute}: {e.strerror or e}", output_format)

    if output_format == OutputFormat.JSON:
        print_json(entry.to_dict())
        return

    table = Table(show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value", overflow="fold")
    table.add_row("Path", escape(entry.path))
    table.add_row("Name", escape(entry.name))
    table.add_row("Kind", entry.kind.value)
    table.add_row("Size", f"{format_size(entry.size_bytes)} ({entry.size_bytes} bytes)")
    table.add_row("Modified", entry.modified.astimezone().strftime("%Y-%m-%d %H:%M:%S"))
    console.print(table)


def temp_dirs(
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """List the temporary directories that exist on this system."""
    directories = list_temp_directories()

    if output_format == OutputFormat.JSON:
        print_json(directories)
        return

    if not directories:
        print_info("No temporary directories found.")
        return
    for directory in directories:
        console.print(directory, style="path", markup=False, highlight=False)


def _fail(message: str, output_format: OutputFormat) -> NoReturn:
    if output_format == OutputFormat.JSON:
        print_json(None, success=False, error=message)
    else:
        print_error(message)
    raise typer.Exit(code=1)
