"""Clean command implementation.

Moves junk paths to the trash. Paths come from the command line, from
the cached last scan, or from an exported scan file.
"""

import json
import os
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from junkctl.cli.display import create_plan_table, create_results_table, print_clean_summary
from junkctl.cli.output import OutputFormat, print_json
from junkctl.core.config import require_config
from junkctl.core.state import StateManager
from junkctl.filesystem.classifier import can_delete, classify
from junkctl.filesystem.models import CleanResult, DeleteVerdict, PathVerdict, ScanResult
from junkctl.filesystem.operator import TrashOperator, resolve_path
from junkctl.models.history import create_history_entry
from junkctl.utils.formatting import console, print_error, print_info, print_warning

Plan = list[tuple[str, DeleteVerdict, PathVerdict]]


def clean(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Files or directories to move to the trash.", show_default=False),
    ] = None,
    last: Annotated[
        bool,
        typer.Option("--last", help="Clean the files found by the last scan."),
    ] = False,
    from_file: Annotated[
        Path | None,
        typer.Option(
            "--from",
            help="Clean the files listed in an exported scan (scan --export).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
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
    """Move junk files to the trash.

    Every path is checked against the protected-location rules right
    before it is touched. Paths outside known temp and cache locations
    need confirmation; protected paths are always refused.

    Examples:
        junkctl clean --last             # Clean the last scan's findings
        junkctl clean --last --dry-run   # Preview only
        junkctl clean ~/Downloads/old.bak -y
    """
    json_mode = output_format == OutputFormat.JSON
    config = require_config()

    targets, source = _collect_targets(paths, last, from_file, json_mode)
    if not targets:
        if json_mode:
            print_json(CleanResult().to_dict() | {"dry_run": dry_run})
        else:
            print_info("Nothing to clean.")
        return

    plan = _build_plan(targets)

    if dry_run:
        if json_mode:
            print_json({"dry_run": True, "plan": [_plan_row(*row) for row in plan]})
        else:
            console.print(create_plan_table(plan, dry_run=True))
            allowed = sum(1 for _, verdict, _ in plan if verdict.can_delete)
            print_info(f"Dry-run: {allowed} of {len(plan)} path(s) would be moved to the trash.")
        return

    needs_confirmation = any(v.can_delete and v.requires_confirmation for _, v, _ in plan)
    if not json_mode:
        console.print(create_plan_table(plan))

    if needs_confirmation and not yes:
        if json_mode:
            print_json(
                {"plan": [_plan_row(*row) for row in plan]},
                success=False,
                error="Some paths require confirmation; pass --yes to proceed",
            )
            raise typer.Exit(code=1)
        confirmed = typer.confirm(
            "\nSome paths are outside known junk locations. "
            f"Move {len(plan)} path(s) to the trash?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    result = _execute(targets, show_progress=not json_mode)

    if not json_mode:
        console.print(create_results_table(result))
        print_clean_summary(result)

    if config.record_history:
        _record_history(result, source, quiet=json_mode)

    if json_mode:
        print_json(result.to_dict() | {"dry_run": False}, success=not result.failed_files)

    if result.failed_files:
        raise typer.Exit(code=1)


def _collect_targets(
    paths: list[Path] | None,
    last: bool,
    from_file: Path | None,
    json_mode: bool,
) -> tuple[list[str], str]:
    """Resolve the path list from exactly one source.

    Returns:
        Tuple of (absolute paths without duplicates, source name).
    """
    sources = [bool(paths), last, from_file is not None]
    if sum(sources) != 1:
        _fail("Pass paths, --last or --from (exactly one).", json_mode)

    if last:
        cached = StateManager().load_last_scan()
        if cached is None:
            _fail("No cached scan found. Run 'junkctl scan' first.", json_mode)
        raw, source = [entry.path for entry in cached.files], "last-scan"
    elif from_file is not None:
        raw, source = [entry.path for entry in _load_scan_file(from_file, json_mode).files], "file"
    else:
        raw, source = [os.path.expanduser(p) for p in paths or []], "arguments"

    targets: list[str] = []
    seen: set[str] = set()
    for path in raw:
        absolute = os.path.abspath(path)
        if absolute not in seen:
            seen.add(absolute)
            targets.append(absolute)
    return targets, source


def _load_scan_file(path: Path, json_mode: bool) -> ScanResult:
    """Load an exported scan, or the JSON output of ``scan -f json``."""
    try:
        data = json.loads(path.expanduser().read_text(encoding="utf-8"))
        if isinstance(data, dict) and "files" not in data and isinstance(data.get("data"), dict):
            data = data["data"]
        return ScanResult.from_dict(data)
    except OSError as e:
        _fail(f"Cannot read scan file {path}: {e}", json_mode)
    except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
        _fail(f"Invalid scan file {path}: {e}", json_mode)


def _fail(message: str, json_mode: bool) -> NoReturn:
    if json_mode:
        print_json(None, success=False, error=message)
    else:
        print_error(message)
    raise typer.Exit(code=1)


def _build_plan(targets: list[str]) -> Plan:
    plan: Plan = []
    for path in targets:
        resolved = resolve_path(path)
        plan.append((path, can_delete(resolved), classify(resolved)))
    return plan


def _plan_row(
    path: str,
    delete_verdict: DeleteVerdict,
    path_verdict: PathVerdict,
) -> dict[str, Any]:
    return {
        "path": path,
        "risk_level": path_verdict.risk_level.value,
        "can_delete": delete_verdict.can_delete,
        "requires_confirmation": delete_verdict.requires_confirmation,
        "reason": delete_verdict.reason,
    }


def _execute(targets: list[str], show_progress: bool) -> CleanResult:
    """Run the deletion batch, optionally with a progress bar."""
    operator = TrashOperator()
    if not show_progress:
        return operator.delete(targets)

    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}", style="progress.description", markup=False),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Moving to trash", total=len(targets))

        def on_progress(index: int, total: int, path: str) -> None:
            progress.update(task, completed=index - 1, description=os.path.basename(path) or path)

        result = operator.delete(targets, on_progress=on_progress)
        progress.update(task, completed=len(targets))
    return result


def _record_history(result: CleanResult, source: str, quiet: bool = False) -> None:
    """Append the cleanup to the history file; failures only warn."""
    try:
        entry = create_history_entry(
            result,
            metadata={"command": "junkctl clean", "source": source},
        )
        StateManager().record_action(entry)
    except (OSError, RuntimeError, ValueError) as e:
        print_warning(f"Could not record to history: {e}")
        return
    if not quiet:
        print_info("Cleanup recorded to history.")
