"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories at a per-test location."""
    xdg_root = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_root / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg_root / "state"))
    return xdg_root


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo logging.basicConfig calls made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def junk_tree(tmp_path: Path) -> Path:
    """Create a small directory tree with junk and regular files.

    Layout::

        tree/
            a.tmp            (4 bytes)
            keep.txt
            notes.bak        (6 bytes)
            sub/
                b.log        (3 bytes)
                report.docx
                deeper/
                    c.tmp    (2 bytes)
    """
    root = tmp_path / "tree"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.tmp").write_text("aaaa")
    (root / "keep.txt").write_text("keep me")
    (root / "notes.bak").write_text("backup")
    (root / "sub" / "b.log").write_text("log")
    (root / "sub" / "report.docx").write_text("report")
    (root / "sub" / "deeper" / "c.tmp").write_text("cc")
    return root


@pytest.fixture
def fake_trash() -> Iterator[list[str]]:
    """Replace send2trash with a recorder that removes the path."""
    trashed: list[str] = []

    def _trash(path: str) -> None:
        trashed.append(path)
        if Path(path).is_dir():
            shutil.rmtree(path)
        else:
            Path(path).unlink()

    with patch("junkctl.filesystem.operator.send2trash", side_effect=_trash):
        yield trashed
