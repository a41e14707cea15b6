"""Bounded-depth junk file scanner.

Walks a set of root directories up to a maximum depth and collects every
file whose extension is in the caller's allow-list or that the junk
detector flags. Protected system directories are pruned without being
listed. Each branch of the walk returns its own outcome, so a directory
that cannot be listed or a file that cannot be stat'ed only removes that
entry from the result and is reported as a diagnostic.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import partial

from junkctl.filesystem.classifier import classify
from junkctl.filesystem.junk import JunkDetector
from junkctl.filesystem.models import (
    EntryKind,
    FileEntry,
    RiskLevel,
    ScanResult,
    SkippedPath,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3
MAX_WORKERS = 32


@dataclass(frozen=True, slots=True)
class BranchOutcome:
    """Result of visiting one entry or subtree.

    Attributes:
        entries: Matched files found in the branch, in traversal order.
        skipped: Entries of the branch dropped because of filesystem errors.
    """

    entries: tuple[FileEntry, ...] = ()
    skipped: tuple[SkippedPath, ...] = ()

    @classmethod
    def failed(cls, path: str, error: OSError) -> BranchOutcome:
        """Build the outcome of a branch that could not be read."""
        reason = error.strerror or str(error)
        return cls(skipped=(SkippedPath(path=path, reason=reason),))

    @classmethod
    def merge(cls, outcomes: Iterable[BranchOutcome]) -> BranchOutcome:
        """Concatenate sibling outcomes, preserving their order."""
        entries: list[FileEntry] = []
        skipped: list[SkippedPath] = []
        for outcome in outcomes:
            entries.extend(outcome.entries)
            skipped.extend(outcome.skipped)
        return cls(entries=tuple(entries), skipped=tuple(skipped))


_EMPTY = BranchOutcome()


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Normalize extensions to lower case with a leading dot.

    Args:
        extensions: Extensions such as ``.tmp``, ``LOG`` or ``bak``.

    Returns:
        Set of normalized extensions. Empty strings are dropped.
    """
    normalized: set[str] = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(normalized)


class JunkScanner:
    """Scans directory trees for junk files.

    Args:
        extensions: Extensions that always qualify a file for the result.
        max_depth: Number of directory levels to list, counting the root
            as the first level. 0 lists nothing.
        workers: Number of threads used to walk the immediate
            subdirectories of each root. 1 walks sequentially.
        detector: Junk detector consulted for files outside the
            extension allow-list. Defaults to JunkDetector().

    Raises:
        TypeError: If max_depth or workers is not an integer.
        ValueError: If max_depth is negative or workers is out of range.
    """

    def __init__(
        self,
        *,
        extensions: Iterable[str] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
        workers: int = 1,
        detector: JunkDetector | None = None,
    ) -> None:
        if isinstance(max_depth, bool) or not isinstance(max_depth, int):
            msg = f"max_depth must be an integer, got {type(max_depth).__name__}"
            raise TypeError(msg)
        if max_depth < 0:
            msg = f"max_depth must be >= 0, got {max_depth}"
            raise ValueError(msg)
        if isinstance(workers, bool) or not isinstance(workers, int):
            msg = f"workers must be an integer, got {type(workers).__name__}"
            raise TypeError(msg)
        if not (1 <= workers <= MAX_WORKERS):
            msg = f"workers must be between 1 and {MAX_WORKERS}, got {workers}"
            raise ValueError(msg)

        self._extensions = normalize_extensions(extensions)
        self._max_depth = max_depth
        self._workers = workers
        self._detector = detector or JunkDetector()

    @property
    def max_depth(self) -> int:
        """Maximum traversal depth."""
        return self._max_depth

    @property
    def extensions(self) -> frozenset[str]:
        """Normalized extension allow-list."""
        return self._extensions

    def scan(self, roots: Iterable[str | os.PathLike[str]]) -> ScanResult:
        """Scan all roots and collect matching files.

        Missing roots are skipped silently; roots inside a protected system
        directory are skipped and reported as diagnostics. Duplicate roots
        are scanned once.

        Args:
            roots: Directories to scan.

        Returns:
            ScanResult with files in traversal order.
        """
        outcomes: list[BranchOutcome] = []
        seen: set[str] = set()

        pool = ThreadPoolExecutor(max_workers=self._workers) if self._workers > 1 else None
        try:
            for root in roots:
                root_path = os.path.abspath(os.fspath(root))
                if root_path in seen:
                    continue
                seen.add(root_path)

                if not os.path.exists(root_path):
                    logger.debug("Skipping missing root: %s", root_path)
                    continue

                verdict = classify(root_path)
                if verdict.risk_level is RiskLevel.FORBIDDEN:
                    logger.warning("Skipping protected root %s: %s", root_path, verdict.reason)
                    outcomes.append(
                        BranchOutcome(skipped=(SkippedPath(path=root_path, reason=verdict.reason),))
                    )
                    continue

                outcomes.append(self._walk(root_path, 0, pool))
        finally:
            if pool is not None:
                pool.shutdown(wait=True)

        merged = BranchOutcome.merge(outcomes)
        logger.debug(
            "Scan finished: %d file(s) matched, %d path(s) skipped",
            len(merged.entries),
            len(merged.skipped),
        )
        return ScanResult(files=merged.entries, skipped=merged.skipped)

    def _walk(
        self,
        directory: str,
        depth: int,
        pool: ThreadPoolExecutor | None = None,
    ) -> BranchOutcome:
        """Walk one directory level and recurse into its subdirectories.

        Args:
            directory: Directory to list.
            depth: Depth of this directory (roots are at depth 0).
            pool: Executor used to visit this level's entries concurrently.
                Only passed for root directories.

        Returns:
            Merged outcome of every entry below the directory.
        """
        if depth >= self._max_depth:
            return _EMPTY

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot scan directory %s: %s", directory, e)
            return BranchOutcome.failed(directory, e)

        visit = partial(self._visit, depth=depth)
        if pool is not None:
            return BranchOutcome.merge(pool.map(visit, entries))
        return BranchOutcome.merge(visit(entry) for entry in entries)

    def _visit(self, entry: os.DirEntry[str], depth: int) -> BranchOutcome:
        """Visit a single directory entry.

        Args:
            entry: Entry produced by listing its parent directory.
            depth: Depth of the parent directory.

        Returns:
            Outcome of the entry (a subtree for directories).
        """
        try:
            if entry.is_dir(follow_symlinks=False):
                if classify(entry.path).risk_level is RiskLevel.FORBIDDEN:
                    logger.debug("Pruning protected directory: %s", entry.path)
                    return _EMPTY
                return self._walk(entry.path, depth + 1)

            if entry.is_file(follow_symlinks=False) and self._matches(entry.name, entry.path):
                return BranchOutcome(entries=(self._stat_entry(entry.path, entry.name),))
        except OSError as e:
            logger.warning("Cannot access %s: %s", entry.path, e)
            return BranchOutcome.failed(entry.path, e)

        return _EMPTY

    def _matches(self, name: str, path: str) -> bool:
        """Check the extension allow-list, then the junk detector."""
        ext = os.path.splitext(name)[1].lower()
        return ext in self._extensions or self._detector.is_junk(name, path)

    @staticmethod
    def _stat_entry(path: str, name: str) -> FileEntry:
        """Build a FileEntry from a fresh stat of the file.

        Raises:
            OSError: If the file vanished or cannot be stat'ed.
        """
        st = os.stat(path)
        return FileEntry(
            path=path,
            name=name,
            size_bytes=st.st_size,
            kind=EntryKind.FILE,
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        )


def scan(
    roots: Iterable[str | os.PathLike[str]],
    extensions: Iterable[str],
    max_depth: int,
    workers: int = 1,
) -> ScanResult:
    """Scan roots for junk files.

    Convenience wrapper around JunkScanner with the default junk detector.

    Args:
        roots: Directories to scan.
        extensions: Extensions that always qualify a file.
        max_depth: Number of directory levels to list (0 lists nothing).
        workers: Number of threads for sibling subtrees.

    Returns:
        ScanResult with files in traversal order.

    Raises:
        TypeError: If max_depth or workers is not an integer.
        ValueError: If max_depth is negative or workers is out of range.
    """
    scanner = JunkScanner(extensions=extensions, max_depth=max_depth, workers=workers)
    return scanner.scan(roots)
