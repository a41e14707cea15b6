"""Move-to-trash deletion operator.

Handles batch deletion of junk paths through the host trash facility.
Every path is re-validated right before it is touched, because the list
usually comes from a scan taken some time earlier. Deletion is strictly
sequential so that each path gets exactly one, unambiguous outcome.
"""

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from send2trash import send2trash

from junkctl.filesystem.classifier import can_delete
from junkctl.filesystem.models import CleanResult, FailedPath
from junkctl.filesystem.sizes import size_of

logger = logging.getLogger(__name__)

REASON_MISSING = "Path does not exist"

TrashFunction = Callable[[str], None]
ProgressCallback = Callable[[int, int, str], None]  # (index, total, path)


def resolve_path(path: str) -> str:
    """Make a path absolute and resolve symlinks in its parent directories.

    The last component is kept as is: a symlink is trashed as a link, not
    as the file it points to.
    """
    absolute = os.path.abspath(path)
    parent, name = os.path.split(absolute)
    if not name:
        return absolute
    return os.path.join(os.path.realpath(parent), name)


class TrashOperator:
    """Moves validated paths to the operating system's trash.

    Nothing is permanently destroyed here; the trash facility is the only
    safety net beyond the pre-checks.

    Args:
        trash: Function that moves one path to the trash. Defaults to
            send2trash.send2trash.
    """

    def __init__(self, trash: TrashFunction | None = None) -> None:
        self._trash: TrashFunction = trash or send2trash

    def delete(
        self,
        paths: Iterable[str],
        on_progress: ProgressCallback | None = None,
    ) -> CleanResult:
        """Move multiple paths to the trash and collect per-path outcomes.

        Each path is first resolved to an absolute path with symlinked
        parent directories followed, so that relative or ``..`` spellings
        are judged by where they really point. Then, in order: refuse it if
        it no longer exists, refuse it if the classifier forbids deleting
        it, measure it, then trash it. Failures never abort the batch.
        Outcomes are reported under the path as given.

        Args:
            paths: Paths to delete.
            on_progress: Optional callback invoked before each path with
                its 1-based index, the batch size and the path.

        Returns:
            CleanResult listing every input path exactly once.
        """
        batch = [os.fspath(p) for p in paths]
        deleted: list[str] = []
        failed: list[FailedPath] = []
        total_size = 0

        for index, path in enumerate(batch, start=1):
            if on_progress is not None:
                on_progress(index, len(batch), path)

            error, size = self._delete_single(resolve_path(path))
            if error is None:
                deleted.append(path)
                total_size += size
            else:
                failed.append(FailedPath(path=path, error=error))

        logger.info(
            "Trashed %d of %d path(s), %d byte(s) reclaimed",
            len(deleted),
            len(batch),
            total_size,
        )
        return CleanResult(
            deleted_files=tuple(deleted),
            failed_files=tuple(failed),
            total_size=total_size,
        )

    def _delete_single(self, path: str) -> tuple[str | None, int]:
        """Validate, measure and trash a single path.

        Args:
            path: Path to delete.

        Returns:
            Tuple of (error message or None on success, bytes reclaimed).
        """
        if not os.path.exists(path):
            logger.warning("Refusing %s: %s", path, REASON_MISSING)
            return REASON_MISSING, 0

        verdict = can_delete(path, Path(path).name)
        if not verdict.can_delete:
            logger.warning("Refusing %s: %s", path, verdict.reason)
            return verdict.reason, 0

        try:
            size = size_of(path)
        except OSError as e:
            logger.warning("Cannot measure %s: %s", path, e)
            return str(e), 0

        try:
            self._trash(path)
        except Exception as e:
            logger.warning("Failed to trash %s: %s", path, e)
            return str(e) or type(e).__name__, 0

        logger.debug("Trashed %s (%d bytes)", path, size)
        return None, size


def delete_all(paths: Iterable[str]) -> CleanResult:
    """Move paths to the trash with the default trash facility.

    Args:
        paths: Paths to delete.

    Returns:
        CleanResult listing every input path exactly once.
    """
    return TrashOperator().delete(paths)
