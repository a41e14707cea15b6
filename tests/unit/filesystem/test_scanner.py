"""Unit tests for JunkScanner.

Tests depth bounds, match rules, protected-directory pruning, error
isolation and parallel traversal.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from junkctl.filesystem.classifier import classify as real_classify
from junkctl.filesystem.junk import JunkDetector
from junkctl.filesystem.models import EntryKind, PathVerdict, RiskLevel
from junkctl.filesystem.scanner import JunkScanner, normalize_extensions, scan


def _names_only_scanner(**kwargs: object) -> JunkScanner:
    """Scanner that ignores location keywords (test dirs may live under /tmp)."""
    return JunkScanner(detector=JunkDetector(path_keywords=()), **kwargs)  # type: ignore[arg-type]


class TestNormalizeExtensions:
    """Tests for normalize_extensions."""

    def test_adds_dot_and_lowercases(self) -> None:
        assert normalize_extensions(["TMP", ".Log", " bak ", ""]) == {".tmp", ".log", ".bak"}


class TestJunkScannerInit:
    """Tests for argument validation."""

    def test_negative_depth(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            JunkScanner(max_depth=-1)

    @pytest.mark.parametrize("depth", ["3", 2.5, True])
    def test_non_integer_depth(self, depth: object) -> None:
        with pytest.raises(TypeError, match="max_depth"):
            JunkScanner(max_depth=depth)  # type: ignore[arg-type]

    @pytest.mark.parametrize("workers", [0, 33])
    def test_workers_out_of_range(self, workers: int) -> None:
        with pytest.raises(ValueError, match="workers"):
            JunkScanner(workers=workers)


class TestJunkScannerScan:
    """Tests for JunkScanner.scan."""

    def test_zero_depth_yields_nothing(self, junk_tree: Path) -> None:
        result = scan([junk_tree], [".tmp"], max_depth=0)

        assert result.files == ()
        assert result.total_size == 0

    def test_depth_one_lists_root_only(self, tmp_path: Path) -> None:
        """A depth of 1 lists the root's files but no subdirectory."""
        root = tmp_path / "a"
        (root / "sub").mkdir(parents=True)
        (root / "b.tmp").write_text("x")
        (root / "sub" / "c.txt").write_text("y")

        result = scan([root], [".tmp"], max_depth=1)

        assert [e.name for e in result.files] == ["b.tmp"]

    def test_collects_in_traversal_order(self, junk_tree: Path) -> None:
        scanner = _names_only_scanner(extensions=[".tmp"], max_depth=3)

        result = scanner.scan([junk_tree])

        assert [e.name for e in result.files] == ["a.tmp", "notes.bak", "b.log", "c.tmp"]
        assert result.total_size == 4 + 6 + 3 + 2
        assert result.total_size == sum(e.size_bytes for e in result.files)

    def test_depth_limit(self, junk_tree: Path) -> None:
        scanner = _names_only_scanner(extensions=[".tmp"], max_depth=2)

        result = scanner.scan([junk_tree])

        assert "c.tmp" not in [e.name for e in result.files]
        assert "b.log" in [e.name for e in result.files]

    def test_extension_allow_list_only(self, junk_tree: Path) -> None:
        """With name patterns and keywords disabled only the extensions match."""
        scanner = JunkScanner(
            extensions=["TMP"],
            max_depth=5,
            detector=JunkDetector(name_patterns=(), path_keywords=()),
        )

        result = scanner.scan([junk_tree])

        assert [e.name for e in result.files] == ["a.tmp", "c.tmp"]

    def test_entries_are_stat_based(self, junk_tree: Path) -> None:
        scanner = _names_only_scanner(extensions=[".tmp"], max_depth=1)

        entry = scanner.scan([junk_tree]).files[0]

        assert entry.path == str(junk_tree / "a.tmp")
        assert entry.kind is EntryKind.FILE
        assert entry.size_bytes == 4
        assert entry.modified.tzinfo is not None

    def test_directories_are_never_entries(self, tmp_path: Path) -> None:
        (tmp_path / "cache.tmp").mkdir()

        result = _names_only_scanner(extensions=[".tmp"], max_depth=2).scan([tmp_path])

        assert result.files == ()

    def test_missing_root_is_skipped_silently(self, tmp_path: Path) -> None:
        result = scan([tmp_path / "missing"], [".tmp"], max_depth=3)

        assert result.files == ()
        assert result.skipped == ()

    def test_duplicate_roots_scanned_once(self, junk_tree: Path) -> None:
        scanner = _names_only_scanner(extensions=[".tmp"], max_depth=1)

        result = scanner.scan([junk_tree, str(junk_tree), junk_tree / "sub" / ".."])

        assert [e.name for e in result.files] == ["a.tmp", "notes.bak"]

    def test_parallel_matches_sequential(self, junk_tree: Path) -> None:
        sequential = _names_only_scanner(extensions=[".tmp"], max_depth=3).scan([junk_tree])
        parallel = _names_only_scanner(extensions=[".tmp"], max_depth=3, workers=4).scan(
            [junk_tree]
        )

        assert parallel == sequential

    def test_symlinks_are_not_followed(self, junk_tree: Path) -> None:
        (junk_tree / "link-to-sub").symlink_to(junk_tree / "sub", target_is_directory=True)
        (junk_tree / "link.tmp").symlink_to(junk_tree / "a.tmp")

        result = _names_only_scanner(extensions=[".tmp"], max_depth=3).scan([junk_tree])

        names = [e.name for e in result.files]
        assert names.count("b.log") == 1
        assert "link.tmp" not in names


class TestProtectedPaths:
    """Tests for pruning of forbidden locations."""

    def test_forbidden_root_is_reported(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        ssh = home / ".ssh"
        ssh.mkdir(parents=True)
        (ssh / "id_rsa.bak").write_text("secret")

        with patch("junkctl.filesystem.classifier.Path.home", return_value=home):
            result = scan([ssh], [".bak"], max_depth=3)

        assert result.files == ()
        assert [s.path for s in result.skipped] == [str(ssh)]

    def test_forbidden_subdirectory_is_pruned(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        (home / ".ssh").mkdir(parents=True)
        (home / ".ssh" / "id_rsa.bak").write_text("secret")
        (home / "old.bak").write_text("old")

        with patch("junkctl.filesystem.classifier.Path.home", return_value=home):
            result = scan([home], [".bak"], max_depth=3)

        assert [e.name for e in result.files] == ["old.bak"]
        assert result.skipped == ()

    def test_pruning_uses_classifier(self, junk_tree: Path) -> None:
        """Every subdirectory is passed through the classifier."""
        def fake_classify(path: str) -> PathVerdict:
            if path.endswith(os.sep + "sub"):
                return PathVerdict(can_access=False, reason="no", risk_level=RiskLevel.FORBIDDEN)
            return real_classify(path)

        with patch("junkctl.filesystem.scanner.classify", side_effect=fake_classify):
            result = _names_only_scanner(extensions=[".tmp"], max_depth=3).scan([junk_tree])

        assert [e.name for e in result.files] == ["a.tmp", "notes.bak"]


class TestErrorIsolation:
    """Tests for per-branch error handling."""

    def test_unreadable_directory_is_skipped(self, junk_tree: Path) -> None:
        blocked = str(junk_tree / "sub")
        real_scandir = os.scandir

        def fake_scandir(path: str) -> object:
            if os.fspath(path) == blocked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with patch("junkctl.filesystem.scanner.os.scandir", side_effect=fake_scandir):
            result = _names_only_scanner(extensions=[".tmp"], max_depth=3).scan([junk_tree])

        assert [e.name for e in result.files] == ["a.tmp", "notes.bak"]
        assert len(result.skipped) == 1
        assert result.skipped[0].path == blocked
        assert result.skipped[0].reason == "Permission denied"

    def test_vanished_file_is_skipped(self, junk_tree: Path) -> None:
        real_stat = os.stat
        target = str(junk_tree / "a.tmp")

        def fake_stat(path: str, *args: object, **kwargs: object) -> os.stat_result:
            if os.fspath(path) == target:
                raise FileNotFoundError(2, "No such file or directory", path)
            return real_stat(path, *args, **kwargs)  # type: ignore[arg-type]

        scanner = _names_only_scanner(extensions=[".tmp"], max_depth=1)
        with patch("junkctl.filesystem.scanner.os.stat", side_effect=fake_stat):
            result = scanner.scan([junk_tree])

        assert [e.name for e in result.files] == ["notes.bak"]
        assert [s.path for s in result.skipped] == [target]
