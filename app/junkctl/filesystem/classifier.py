"""Path risk classification for scanning and deletion.

This module defines the classification tables that decide how sensitive
a filesystem path is, and the pure functions that turn a path into an
access or deletion verdict. Nothing here touches the filesystem: paths
are compared as normalized strings, so callers must not assume that a
classified path exists.

Comparison is case-insensitive and separator-agnostic. Every table entry
is stored normalized (lower case, forward slashes). A prefix matches a
path when the path equals it or continues with a separator after it.
"""

import posixpath
import re
import sys
from pathlib import Path
from typing import Literal

from junkctl.filesystem.models import DeleteVerdict, OperationVerdict, PathVerdict, RiskLevel

Operation = Literal["read", "delete", "move"]

# System-critical locations. Nothing below these is ever scanned or deleted.
FORBIDDEN_PREFIXES: tuple[str, ...] = (
    # Windows
    "c:/windows/system32",
    "c:/windows/syswow64",
    "c:/windows/boot",
    "c:/windows/recovery",
    "c:/windows/winsxs",
    "c:/program files/windows defender",
    "c:/program files/windows nt",
    "c:/program files/common files/microsoft shared",
    "c:/programdata/microsoft/windows defender",
    "c:/boot",
    "c:/recovery",
    "c:/system volume information",
    "c:/$recycle.bin",
    # Linux
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/lib",
    "/lib32",
    "/lib64",
    "/libx32",
    "/lost+found",
    "/proc",
    "/run",
    "/sbin",
    "/sys",
    "/usr/bin",
    "/usr/lib",
    "/usr/lib64",
    "/usr/libexec",
    "/usr/sbin",
    "/var/lib/apt",
    "/var/lib/dpkg",
    "/var/lib/rpm",
    # macOS
    "/system",
    "/private/var/db",
    "/library/apple",
)

# Credential stores and trash cans below the user's home directory.
USER_FORBIDDEN_SUFFIXES: tuple[str, ...] = (
    ".ssh",
    ".gnupg",
    ".gpg",
    ".local/share/keyrings",
    "library/keychains",
    "appdata/roaming/microsoft/credentials",
    "appdata/roaming/microsoft/protect",
    ".local/share/trash",
    ".trash",
)

# Program installs and shared OS data: accessible, but flagged as dangerous.
RESTRICTED_PREFIXES: tuple[str, ...] = (
    # Windows
    "c:/program files",
    "c:/program files (x86)",
    "c:/programdata",
    "c:/windows",
    "c:/users/all users",
    "c:/users/default",
    "c:/users/public",
    # Linux
    "/usr",
    "/opt",
    "/var",
    "/srv",
    "/snap",
    "/root",
    # macOS
    "/applications",
    "/library",
    "/private",
)

# Standard system temp, log and cache directories.
SAFE_PREFIXES: tuple[str, ...] = (
    # Windows
    "c:/windows/temp",
    "c:/windows/logs",
    "c:/windows/softwaredistribution/download",
    "c:/windows/prefetch",
    "c:/temp",
    "c:/tmp",
    # Linux and macOS
    "/tmp",
    "/var/tmp",
    "/var/log",
    "/var/cache",
    "/private/tmp",
    "/private/var/tmp",
    "/private/var/log",
)

# Temp caches, browser caches, downloads and recent-files below the home directory.
USER_SAFE_SUFFIXES: tuple[str, ...] = (
    # Windows
    "appdata/local/temp",
    "appdata/local/microsoft/windows/inetcache",
    "appdata/local/microsoft/windows/temporary internet files",
    "appdata/roaming/microsoft/windows/recent",
    # Linux
    ".cache",
    ".thumbnails",
    ".local/share/recently-used.xbel",
    # macOS
    "library/caches",
    "library/logs",
    # All platforms
    "downloads",
)

# Recommended scan locations per platform family: system paths, then paths
# below the home directory (user caches followed by browser caches).
_RECOMMENDED_SYSTEM_PATHS: dict[str, tuple[str, ...]] = {
    "win32": (
        "C:\\Windows\\Temp",
        "C:\\Windows\\Logs",
        "C:\\Windows\\SoftwareDistribution\\Download",
        "C:\\Windows\\Prefetch",
        "C:\\Temp",
        "C:\\Tmp",
    ),
    "darwin": ("/private/tmp", "/private/var/tmp", "/private/var/log"),
    "linux": ("/tmp", "/var/tmp", "/var/log", "/var/cache"),
}

_RECOMMENDED_USER_PATHS: dict[str, tuple[str, ...]] = {
    "win32": (
        "AppData/Local/Temp",
        "AppData/Local/Microsoft/Windows/INetCache",
        "AppData/Local/Microsoft/Windows/Temporary Internet Files",
        "AppData/Roaming/Microsoft/Windows/Recent",
        "Downloads",
        "AppData/Local/Google/Chrome/User Data/Default/Cache",
        "AppData/Local/Microsoft/Edge/User Data/Default/Cache",
        "AppData/Local/Mozilla/Firefox/Profiles",
        "AppData/Roaming/Opera Software/Opera Stable/Cache",
    ),
    "darwin": (
        "Library/Caches",
        "Library/Logs",
        "Downloads",
        "Library/Caches/Google/Chrome",
        "Library/Caches/Firefox",
        "Library/Caches/com.apple.Safari",
    ),
    "linux": (
        ".cache",
        ".thumbnails",
        "Downloads",
        ".cache/google-chrome",
        ".cache/chromium",
        ".cache/mozilla/firefox",
    ),
}

# Boot loader, paging, hibernation and registry hive files.
CRITICAL_FILE_NAMES: frozenset[str] = frozenset(
    {
        "ntldr",
        "bootmgr",
        "boot.ini",
        "ntdetect.com",
        "pagefile.sys",
        "hiberfil.sys",
        "swapfile.sys",
        "system.dat",
        "user.dat",
        "ntuser.dat",
        "autoexec.bat",
        "config.sys",
        "swapfile",
        "swap.img",
        "vmlinuz",
        "initrd.img",
    }
)

_SYSTEM_BINARY_EXTENSIONS: tuple[str, ...] = (".exe", ".dll")
_SYSTEM_BINARY_DIRS: tuple[str, ...] = ("/system32/", "/syswow64/")

REASON_FORBIDDEN = "Path resides in a protected system directory"
REASON_SAFE_SYSTEM = "Known temporary, log or cache directory"
REASON_SAFE_USER = "Known user cache or download location"
REASON_RESTRICTED = "System or program location, handle with care"
REASON_UNKNOWN = "Unrecognized location, confirm before deleting"
REASON_CRITICAL_FILE = "Critical system file cannot be deleted"
REASON_SYSTEM_BINARY = "System program file cannot be deleted"
REASON_PROTECTED_ROOT = "Filesystem root or home directory cannot be deleted"

_DRIVE_ROOT = re.compile(r"[a-z]:")


def normalize_path(path: str) -> str:
    """Normalize a path for case-insensitive, separator-agnostic comparison.

    Args:
        path: Filesystem path in Windows or POSIX notation.

    Returns:
        Lower-cased path with forward slashes, ``.`` and ``..`` segments
        collapsed and no trailing separator.
    """
    normalized = path.replace("\\", "/").lower()
    if not normalized:
        return normalized
    return posixpath.normpath(normalized).rstrip("/") or "/"


def _has_prefix(normalized: str, prefix: str) -> bool:
    return normalized == prefix or normalized.startswith(prefix + "/")


def _home_prefix() -> str:
    return normalize_path(str(Path.home())).rstrip("/")


def _is_root_or_home_ancestor(normalized: str) -> bool:
    if normalized == "/" or _DRIVE_ROOT.fullmatch(normalized):
        return True
    home = _home_prefix()
    return normalized == home or home.startswith(normalized + "/")


def _matches_user_suffix(normalized: str, suffixes: tuple[str, ...]) -> bool:
    home = _home_prefix()
    return any(_has_prefix(normalized, f"{home}/{suffix}") for suffix in suffixes)


def classify(path: str) -> PathVerdict:
    """Classify a path into a risk tier.

    Tiers are tested in a fixed order and the first match wins:
    forbidden (terminal), known-safe system location, known-safe user
    location, restricted system location, and finally caution for
    anything unrecognized.

    Args:
        path: Absolute filesystem path.

    Returns:
        PathVerdict for the path. Always recomputed, never cached.
    """
    normalized = normalize_path(path)

    if any(_has_prefix(normalized, p) for p in FORBIDDEN_PREFIXES) or _matches_user_suffix(
        normalized, USER_FORBIDDEN_SUFFIXES
    ):
        return PathVerdict(
            can_access=False, reason=REASON_FORBIDDEN, risk_level=RiskLevel.FORBIDDEN
        )

    if any(_has_prefix(normalized, p) for p in SAFE_PREFIXES):
        return PathVerdict(can_access=True, reason=REASON_SAFE_SYSTEM, risk_level=RiskLevel.SAFE)

    if _matches_user_suffix(normalized, USER_SAFE_SUFFIXES):
        return PathVerdict(can_access=True, reason=REASON_SAFE_USER, risk_level=RiskLevel.SAFE)

    if any(_has_prefix(normalized, p) for p in RESTRICTED_PREFIXES):
        return PathVerdict(
            can_access=True, reason=REASON_RESTRICTED, risk_level=RiskLevel.DANGEROUS
        )

    return PathVerdict(can_access=True, reason=REASON_UNKNOWN, risk_level=RiskLevel.CAUTION)


def can_delete(path: str, name: str | None = None) -> DeleteVerdict:
    """Check whether a path may be moved to the trash.

    Forbidden paths are refused with the classifier's reason, as are
    filesystem roots, the home directory and its ancestors. Independently
    of the tier, boot/paging/hibernation/registry files and system binaries
    are refused too, since a safe directory can still end up holding one.

    Args:
        path: Absolute filesystem path.
        name: File name to check. Defaults to the last path component.

    Returns:
        DeleteVerdict. ``requires_confirmation`` is advisory only.
    """
    verdict = classify(path)
    if not verdict.can_access:
        return DeleteVerdict(can_delete=False, reason=verdict.reason, requires_confirmation=False)

    normalized = normalize_path(path)
    if _is_root_or_home_ancestor(normalized):
        return DeleteVerdict(
            can_delete=False, reason=REASON_PROTECTED_ROOT, requires_confirmation=False
        )

    lower_name = (name if name is not None else normalized.rsplit("/", 1)[-1]).lower()

    if lower_name in CRITICAL_FILE_NAMES:
        return DeleteVerdict(
            can_delete=False, reason=REASON_CRITICAL_FILE, requires_confirmation=False
        )

    if lower_name.endswith(_SYSTEM_BINARY_EXTENSIONS) and any(
        d in normalized for d in _SYSTEM_BINARY_DIRS
    ):
        return DeleteVerdict(
            can_delete=False, reason=REASON_SYSTEM_BINARY, requires_confirmation=False
        )

    return DeleteVerdict(
        can_delete=True,
        reason=verdict.reason,
        requires_confirmation=verdict.risk_level is not RiskLevel.SAFE,
    )


def validate_operation(
    operation: Operation,
    path: str,
    name: str | None = None,
) -> OperationVerdict:
    """Validate a read, move or delete operation against the classification policy.

    Args:
        operation: Kind of operation the caller intends to perform.
        path: Absolute filesystem path.
        name: File name to check for deletions. Defaults to the last path component.

    Returns:
        OperationVerdict with advisory warnings for the caller to surface.
    """
    verdict = classify(path)
    if not verdict.can_access:
        return OperationVerdict(allowed=False, reason=verdict.reason)

    warnings: list[str] = []
    if operation == "delete":
        delete_verdict = can_delete(path, name)
        if not delete_verdict.can_delete:
            return OperationVerdict(allowed=False, reason=delete_verdict.reason)
        if delete_verdict.requires_confirmation:
            warnings.append("Deletion requires confirmation")
        if verdict.risk_level is RiskLevel.DANGEROUS:
            warnings.append("High-risk location")

    return OperationVerdict(allowed=True, reason=verdict.reason, warnings=tuple(warnings))


def platform_family(platform: str | None = None) -> str:
    """Map a ``sys.platform`` value to ``win32``, ``darwin`` or ``linux``.

    Args:
        platform: Platform identifier. Defaults to the running platform.
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "win32"
    if platform == "darwin":
        return "darwin"
    return "linux"


def recommended_scan_paths(platform: str | None = None) -> list[str]:
    """Build the list of locations that are safe to scan for junk.

    Combines the platform's system temp/log/cache directories with the
    user cache, download and browser cache directories below the home
    directory. The returned paths are not checked for existence.

    Args:
        platform: Platform identifier as in ``sys.platform``. Defaults to
            the running platform.

    Returns:
        Recommended scan paths.
    """
    family = platform_family(platform)
    home = Path.home()

    paths = list(_RECOMMENDED_SYSTEM_PATHS[family])
    paths.extend(str(home / suffix) for suffix in _RECOMMENDED_USER_PATHS[family])
    return paths
