"""Size aggregation for files and directory trees.

Provides recursive byte counting with per-entry error isolation and a
single-path stat helper that produces FileEntry records.
"""

import logging
import os
import stat
from datetime import UTC, datetime
from pathlib import Path

from junkctl.filesystem.models import EntryKind, FileEntry

logger = logging.getLogger(__name__)


def directory_size(path: str) -> int:
    """Sum the sizes of all regular files below a directory.

    Symbolic links are neither followed nor counted. Entries that cannot
    be listed or measured contribute 0 and do not abort the sum.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes.
    """
    total = 0
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        logger.warning("Cannot list directory %s: %s", path, e)
        return 0

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                total += directory_size(entry.path)
            elif entry.is_file(follow_symlinks=False):
                total += os.stat(entry.path, follow_symlinks=False).st_size
        except OSError as e:
            logger.warning("Cannot measure %s: %s", entry.path, e)
            continue

    return total


def size_of(path: str) -> int:
    """Get the size of a file or the recursive size of a directory.

    Args:
        path: File or directory to measure.

    Returns:
        Size in bytes.

    Raises:
        FileNotFoundError: If the path does not exist.
        OSError: If the path itself cannot be stat'ed.
    """
    st = os.stat(path)
    if stat.S_ISDIR(st.st_mode):
        return directory_size(path)
    return st.st_size


def file_info(path: str) -> FileEntry:
    """Stat a single path into a FileEntry.

    Directories are measured recursively.

    Args:
        path: File or directory to describe.

    Returns:
        FileEntry for the path.

    Raises:
        FileNotFoundError: If the path does not exist.
        OSError: If the path itself cannot be stat'ed.
    """
    st = os.stat(path)
    is_dir = stat.S_ISDIR(st.st_mode)
    return FileEntry(
        path=path,
        name=Path(path).name or path,
        size_bytes=directory_size(path) if is_dir else st.st_size,
        kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
        modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
    )
