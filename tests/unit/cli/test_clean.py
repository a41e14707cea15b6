"""Unit tests for clean command.

Tests for the CLI clean command implementation. The trash is replaced by
the fake_trash fixture so no file ever reaches the real trash.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from junkctl.cli.main import app
from junkctl.core.config import JunkctlConfig, save_config
from junkctl.core.state import StateManager
from junkctl.filesystem.models import DeleteVerdict
from junkctl.filesystem.operator import REASON_MISSING

runner = CliRunner()


@pytest.fixture
def needs_confirmation() -> Iterator[None]:
    """Make every planned path require confirmation."""
    verdict = DeleteVerdict(can_delete=True, reason="Unrecognized", requires_confirmation=True)
    with patch("junkctl.cli.commands.clean.can_delete", return_value=verdict):
        yield


class TestCleanSources:
    """Tests for path source selection."""

    def test_requires_a_source(self) -> None:
        result = runner.invoke(app, ["clean"])

        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_rejects_two_sources(self, junk_tree: Path) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp"), "--last"])

        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_last_without_cache(self) -> None:
        result = runner.invoke(app, ["clean", "--last", "-f", "json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert "No cached scan" in payload["error"]

    def test_last_uses_cached_scan(self, junk_tree: Path, fake_trash: list[str]) -> None:
        scan = runner.invoke(app, ["scan", str(junk_tree), "-f", "json"])
        scanned = [f["path"] for f in json.loads(scan.stdout)["data"]["files"]]

        result = runner.invoke(app, ["clean", "--last", "-y", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["deleted_files"] == scanned
        assert fake_trash == scanned
        assert not (junk_tree / "a.tmp").exists()

    def test_from_export_file(
        self, junk_tree: Path, tmp_path: Path, fake_trash: list[str]
    ) -> None:
        export = tmp_path / "scan.json"
        runner.invoke(app, ["scan", str(junk_tree), "-x", ".tmp", "-e", str(export)])

        result = runner.invoke(app, ["clean", "--from", str(export), "-y"])

        assert result.exit_code == 0
        assert str(junk_tree / "a.tmp") in fake_trash

    def test_from_json_envelope(
        self, junk_tree: Path, tmp_path: Path, fake_trash: list[str]
    ) -> None:
        scan = runner.invoke(app, ["scan", str(junk_tree), "-f", "json"])
        saved = tmp_path / "envelope.json"
        saved.write_text(scan.stdout)

        result = runner.invoke(app, ["clean", "--from", str(saved), "-y"])

        assert result.exit_code == 0
        assert str(junk_tree / "notes.bak") in fake_trash

    def test_invalid_scan_file(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2")

        result = runner.invoke(app, ["clean", "--from", str(bad)])

        assert result.exit_code == 1
        assert "Invalid scan file" in result.output

    def test_nothing_to_clean(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text('{"files": []}')

        result = runner.invoke(app, ["clean", "--from", str(empty)])

        assert result.exit_code == 0
        assert "Nothing to clean." in result.stdout

    def test_duplicate_paths_collapsed(self, junk_tree: Path, fake_trash: list[str]) -> None:
        target = str(junk_tree / "a.tmp")

        result = runner.invoke(app, ["clean", target, target, "-y", "-f", "json"])

        assert json.loads(result.stdout)["data"]["deleted_files"] == [target]
        assert fake_trash == [target]


class TestCleanExecution:
    """Tests for deleting paths."""

    def test_moves_paths_to_trash(self, junk_tree: Path, fake_trash: list[str]) -> None:
        targets = [str(junk_tree / "a.tmp"), str(junk_tree / "sub")]

        result = runner.invoke(app, ["clean", *targets, "-y"])

        assert result.exit_code == 0
        assert fake_trash == targets
        assert not (junk_tree / "sub").exists()
        assert (junk_tree / "keep.txt").exists()
        assert "All 2 path(s) moved to trash" in result.stdout

    def test_json_result(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp"), "-y", "-f", "json"])

        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["data"]["total_size"] == 4
        assert payload["data"]["failed_files"] == []
        assert payload["data"]["dry_run"] is False

    def test_protected_path_refused(self, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["-q", "clean", "/etc/passwd", "-y", "-f", "json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["data"]["failed_files"][0]["path"] == "/etc/passwd"
        assert fake_trash == []

    def test_missing_path_fails(self, tmp_path: Path, fake_trash: list[str]) -> None:
        missing = str(tmp_path / "gone.tmp")

        result = runner.invoke(app, ["-q", "clean", missing, "-y", "-f", "json"])

        assert result.exit_code == 1
        failed = json.loads(result.stdout)["data"]["failed_files"]
        assert failed == [{"path": missing, "error": REASON_MISSING}]

    def test_trash_error_reported(self, junk_tree: Path) -> None:
        target = str(junk_tree / "a.tmp")
        with patch(
            "junkctl.filesystem.operator.send2trash", side_effect=OSError("trash unavailable")
        ):
            result = runner.invoke(app, ["-q", "clean", target, "-y", "-f", "json"])

        assert result.exit_code == 1
        failed = json.loads(result.stdout)["data"]["failed_files"]
        assert failed == [{"path": target, "error": "trash unavailable"}]
        assert (junk_tree / "a.tmp").exists()


class TestCleanDryRun:
    """Tests for --dry-run."""

    def test_nothing_deleted(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(
            app, ["clean", str(junk_tree / "a.tmp"), "/etc/passwd", "--dry-run"]
        )

        assert result.exit_code == 0
        assert fake_trash == []
        assert (junk_tree / "a.tmp").exists()
        assert "Dry-run: 1 of 2 path(s)" in result.stdout

    def test_json_plan(self, junk_tree: Path, fake_trash: list[str]) -> None:
        target = str(junk_tree / "a.tmp")

        result = runner.invoke(app, ["clean", target, "--dry-run", "-f", "json"])

        data = json.loads(result.stdout)["data"]
        assert data["dry_run"] is True
        assert data["plan"][0]["path"] == target
        assert data["plan"][0]["can_delete"] is True
        assert fake_trash == []


class TestCleanConfirmation:
    """Tests for the confirmation prompt."""

    @pytest.mark.usefixtures("needs_confirmation")
    def test_declined(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp")], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.stdout
        assert fake_trash == []

    @pytest.mark.usefixtures("needs_confirmation")
    def test_accepted(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp")], input="y\n")

        assert result.exit_code == 0
        assert fake_trash == [str(junk_tree / "a.tmp")]

    @pytest.mark.usefixtures("needs_confirmation")
    def test_json_requires_yes(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp"), "-f", "json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert "--yes" in payload["error"]
        assert fake_trash == []


class TestCleanHistory:
    """Tests for history recording."""

    def test_records_history(self, junk_tree: Path, fake_trash: list[str]) -> None:
        result = runner.invoke(app, ["clean", str(junk_tree / "a.tmp"), "-y"])

        assert "Cleanup recorded to history." in result.stdout
        history = StateManager().get_history()
        assert len(history) == 1
        assert history[0].metadata["source"] == "arguments"
        assert history[0].total_size == 4

    def test_history_disabled(self, junk_tree: Path, fake_trash: list[str]) -> None:
        save_config(JunkctlConfig(record_history=False))

        runner.invoke(app, ["clean", str(junk_tree / "a.tmp"), "-y"])

        assert StateManager().get_history() == []
