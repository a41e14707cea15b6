"""Unit tests for the main CLI entry point and shared output helpers."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from junkctl import __version__
from junkctl.cli.main import app
from junkctl.cli.output import envelope, setup_logging

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"junkctl version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "clean", "check", "size", "info", "temp-dirs", "history"):
            assert command in result.stdout

    def test_verbose_enables_debug_logging(self, tmp_path: Path) -> None:
        runner.invoke(app, ["-v", "size", str(tmp_path)])

        assert logging.getLogger().level == logging.DEBUG


class TestEnvelope:
    """Tests for the JSON envelope."""

    def test_success(self) -> None:
        assert envelope([1]) == {"success": True, "data": [1], "error": None}

    def test_failure(self) -> None:
        data = envelope(None, success=False, error="boom")
        assert json.loads(json.dumps(data)) == {"success": False, "data": None, "error": "boom"}


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose: bool, quiet: bool, level: int) -> None:
        setup_logging(verbose=verbose, quiet=quiet)

        assert logging.getLogger().level == level
