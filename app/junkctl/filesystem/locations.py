"""Well-known junk locations and scan defaults.

Enumerates the temporary and cache directories of the host platform and
provides the default scan roots and junk extensions used by the CLI.
"""

import logging
import os
import tempfile
from pathlib import Path

from junkctl.filesystem.classifier import platform_family, recommended_scan_paths

logger = logging.getLogger(__name__)

# Extensions that qualify a file for a scan regardless of its location.
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".tmp",
    ".temp",
    ".log",
    ".bak",
    ".old",
    ".cache",
    ".dmp",
    ".chk",
    ".gid",
)

# Windows temp and cache locations, relative to the user profile.
_WINDOWS_USER_TEMP_DIRS: tuple[str, ...] = (
    "AppData/Local/Temp",
    "AppData/Local/Microsoft/Windows/INetCache",
    "AppData/Local/Google/Chrome/User Data/Default/Cache",
    "AppData/Local/Microsoft/Edge/User Data/Default/Cache",
)

_WINDOWS_SYSTEM_TEMP_DIRS: tuple[str, ...] = (
    "C:\\Windows\\Temp",
    "C:\\Windows\\SoftwareDistribution\\Download",
)


def list_temp_directories(platform: str | None = None) -> list[str]:
    """List the existing temporary directories of the platform.

    Always includes the interpreter's temporary directory. On Windows the
    user temp folder, the system temp folders and the browser caches are
    added. Paths that do not exist are left out; duplicates are removed
    while keeping the first occurrence.

    Args:
        platform: Platform identifier (sys.platform style). Defaults to the
            running platform.

    Returns:
        Existing directories, in discovery order.
    """
    candidates: list[str] = [tempfile.gettempdir()]

    if platform_family(platform) == "win32":
        home = Path.home()
        candidates.extend(str(home / rel) for rel in _WINDOWS_USER_TEMP_DIRS)
        candidates.extend(_WINDOWS_SYSTEM_TEMP_DIRS)

    directories: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        key = os.path.normcase(os.path.abspath(candidate))
        if key in seen:
            continue
        seen.add(key)
        if os.path.isdir(candidate):
            directories.append(candidate)
        else:
            logger.debug("Temp directory not present: %s", candidate)

    return directories


def default_scan_roots(platform: str | None = None) -> list[str]:
    """Get the roots scanned when the user names none.

    Combines the temporary directories with the recommended safe locations
    of the platform, keeping only directories that exist.

    Args:
        platform: Platform identifier (sys.platform style). Defaults to the
            running platform.

    Returns:
        Existing directories, deduplicated, in priority order.
    """
    roots: list[str] = []
    seen: set[str] = set()
    for candidate in [*list_temp_directories(platform), *recommended_scan_paths(platform)]:
        key = os.path.normcase(os.path.abspath(candidate))
        if key in seen or not os.path.isdir(candidate):
            continue
        seen.add(key)
        roots.append(candidate)
    return roots
