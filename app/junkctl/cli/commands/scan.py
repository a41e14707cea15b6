"""Scan command implementation.

Scans directory trees for junk files and caches the result for
``junkctl clean --last``.
"""

import json
import os
from pathlib import Path
from typing import Annotated, Any

import typer

from junkctl.cli.display import create_category_table, create_scan_table, print_scan_summary
from junkctl.cli.output import OutputFormat, print_json
from junkctl.core.config import JunkctlConfig, require_config
from junkctl.core.state import StateManager
from junkctl.filesystem.categories import FileCategory
from junkctl.filesystem.locations import default_scan_roots
from junkctl.filesystem.models import ScanResult
from junkctl.filesystem.scanner import MAX_WORKERS, JunkScanner
from junkctl.utils.formatting import console, print_error, print_info, print_success, print_warning


def scan(
    roots: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Directories to scan. Defaults to the configured or platform temp locations.",
            show_default=False,
        ),
    ] = None,
    extensions: Annotated[
        list[str] | None,
        typer.Option(
            "--ext",
            "-x",
            help="Extension that always qualifies a file (repeatable, replaces the config).",
        ),
    ] = None,
    depth: Annotated[
        int | None,
        typer.Option(
            "--depth",
            "-d",
            min=0,
            help="Number of directory levels to list.",
        ),
    ] = None,
    deep: Annotated[
        bool,
        typer.Option("--deep", help="Use the deep scan depth from the config."),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=MAX_WORKERS,
            help="Threads used to walk sibling directories.",
        ),
    ] = None,
    categories: Annotated[
        list[FileCategory] | None,
        typer.Option(
            "--category",
            "-c",
            case_sensitive=False,
            help="Only keep files of this category (repeatable).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Limit number of results shown.",
        ),
    ] = None,
) -> None:
    """Scan directories for junk files.

    Files qualify when their extension is in the allow-list, when their
    name looks disposable (backups, temp copies, thumbnail caches, logs)
    or when they live in a temp, cache or log location. Protected system
    directories are never entered.

    Examples:
        junkctl scan                     # Scan default temp/cache locations
        junkctl scan ~/Downloads -d 2    # Scan one directory, two levels
        junkctl scan /tmp -x .part -f json
        junkctl scan -c browser -c downloads
    """
    config = require_config()
    json_mode = output_format == OutputFormat.JSON

    scan_roots = _resolve_roots(roots, config)
    if not scan_roots:
        if json_mode:
            print_json(None, success=False, error="No scan roots found")
        else:
            print_error("No scan roots found. Pass directories or set 'scan_paths' in the config.")
        raise typer.Exit(code=1)

    if depth is not None:
        max_depth = depth
    else:
        max_depth = config.deep_max_depth if deep else config.max_depth
    scanner = JunkScanner(
        extensions=extensions if extensions is not None else config.extensions,
        max_depth=max_depth,
        workers=workers if workers is not None else config.workers,
    )

    if json_mode:
        result = scanner.scan(scan_roots)
    else:
        with console.status(f"Scanning {len(scan_roots)} location(s)..."):
            result = scanner.scan(scan_roots)

    if categories:
        result = result.filter_categories(categories)

    _cache_result(result)

    if export_path is not None:
        _export_results(result, export_path, quiet=json_mode)

    if json_mode:
        print_json(_result_payload(result, scan_roots, max_depth, limit))
        return

    if not result.files:
        print_success("No junk files found.")
        if result.skipped:
            print_warning(f"{len(result.skipped)} path(s) could not be read (use -v for details)")
        return

    table = create_scan_table(result, limit)
    console.print(table)
    print_scan_summary(result, shown=table.row_count)
    console.print(create_category_table(result))
    print_info("Run 'junkctl clean --last' to move these files to the trash.")


def _resolve_roots(roots: list[Path] | None, config: JunkctlConfig) -> list[str]:
    """Pick explicit roots, then configured roots, then platform defaults."""
    if roots:
        resolved: list[str] = []
        for root in roots:
            path = os.path.abspath(os.path.expanduser(root))
            if not os.path.isdir(path):
                print_warning(f"Not a directory, skipping: {path}")
                continue
            resolved.append(path)
        return resolved
    if config.scan_paths:
        return [p for p in config.scan_paths if os.path.isdir(p)]
    return default_scan_roots()


def _result_payload(
    result: ScanResult,
    roots: list[str],
    max_depth: int,
    limit: int | None,
) -> dict[str, Any]:
    data = result.to_dict()
    data["roots"] = roots
    data["max_depth"] = max_depth
    data["file_count"] = result.file_count
    data["categories"] = {
        category.value: {"file_count": count, "total_size": size}
        for category, (count, size) in result.category_totals().items()
    }
    if limit:
        data["files"] = data["files"][:limit]
    return data


def _cache_result(result: ScanResult) -> None:
    """Store the scan for 'clean --last'; failures only warn."""
    try:
        StateManager().save_last_scan(result)
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not cache scan result: {e}")


def _export_results(result: ScanResult, export_path: Path, quiet: bool = False) -> None:
    """Export the full scan result to a JSON file."""
    export_path = export_path.expanduser().resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e

    if not quiet:
        print_info(f"Results exported to {export_path}")
