"""Fixtures shared by the CLI command tests."""

import pytest

from junkctl.utils import formatting


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep long temporary paths on one line in rendered tables."""
    monkeypatch.setattr(formatting.console, "width", 300)
    monkeypatch.setattr(formatting.err_console, "width", 300)
