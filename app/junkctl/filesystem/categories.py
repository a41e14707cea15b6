"""Category and file-type tags for junk files.

Every matched file is tagged with the kind of software that left it behind
(browser, chat client, system, ...) and with what the file is (temp copy,
cache, log, ...). Tags are derived from the path alone, so they are cheap
to recompute and never stored.

Path words are compared as tokens: the lower-cased path split on anything
that is not a letter or digit. ``C:\\Users\\x\\AppData\\Local\\Google\\Chrome``
yields ``chrome`` while ``/home/x/knowledge/notes.txt`` does not yield
``edge``.
"""

import re
from enum import Enum


class FileCategory(str, Enum):
    """Origin of a junk file, used to filter and summarize scans."""

    CHAT = "chat"
    BROWSER = "browser"
    DOWNLOADS = "downloads"
    BACKUP = "backup"
    SYSTEM = "system"
    USER = "user"


class FileType(str, Enum):
    """What a junk file is."""

    TEMP = "temp"
    CACHE = "cache"
    LOG = "log"
    BACKUP = "backup"
    OLD = "old"
    BROWSER_CACHE = "browser-cache"
    CHAT = "chat"
    OTHER = "other"


CHAT_TOKENS: frozenset[str] = frozenset({"wechat", "qq", "tencent"})
BROWSER_TOKENS: frozenset[str] = frozenset(
    {"chrome", "chromium", "edge", "firefox", "mozilla", "safari", "opera"}
)
SYSTEM_TOKENS: frozenset[str] = frozenset({"windows", "system32", "syswow64"})
SYSTEM_PREFIXES: tuple[str, ...] = ("/var/", "/private/var/", "/library/")

_TEMP_TOKENS = frozenset({"temp", "tmp", "temporary"})
_LOG_TOKENS = frozenset({"log", "logs"})

# Extension first: a .log file in a temp directory is still a log.
_EXTENSION_TYPES: dict[str, FileType] = {
    ".tmp": FileType.TEMP,
    ".temp": FileType.TEMP,
    ".log": FileType.LOG,
    ".bak": FileType.BACKUP,
    ".old": FileType.OLD,
    ".cache": FileType.CACHE,
}

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def path_tokens(path: str) -> set[str]:
    """Split a path into lower-case alphanumeric words."""
    return {token for token in _TOKEN_SPLIT.split(path.lower()) if token}


def _extension(path: str) -> str:
    name = path.replace("\\", "/").rsplit("/", 1)[-1].lower()
    dot = name.rfind(".")
    return name[dot:] if dot > 0 else ""


def categorize(path: str) -> FileCategory:
    """Tag a path with the kind of software that produced it.

    Rules are tested in order and the first match wins: chat clients,
    browsers, the downloads folder, backups, system locations, and
    finally user data.

    Args:
        path: Absolute filesystem path.

    Returns:
        FileCategory of the path.
    """
    tokens = path_tokens(path)

    if tokens & CHAT_TOKENS:
        return FileCategory.CHAT
    if tokens & BROWSER_TOKENS:
        return FileCategory.BROWSER
    if "downloads" in tokens:
        return FileCategory.DOWNLOADS
    if _extension(path) == ".bak" or any(t.startswith("backup") for t in tokens):
        return FileCategory.BACKUP

    normalized = path.replace("\\", "/").lower()
    if tokens & SYSTEM_TOKENS or normalized.startswith(SYSTEM_PREFIXES):
        return FileCategory.SYSTEM
    return FileCategory.USER


def detect_file_type(path: str) -> FileType:
    """Tag a path with what the file is.

    The extension decides when it is a known junk extension. Otherwise the
    directory words decide: temp, cache and log locations, then browser
    and chat data.

    Args:
        path: Absolute filesystem path.

    Returns:
        FileType of the path, ``OTHER`` when nothing matches.
    """
    by_extension = _EXTENSION_TYPES.get(_extension(path))
    if by_extension is not None:
        return by_extension

    tokens = path_tokens(path)
    if tokens & _TEMP_TOKENS:
        return FileType.TEMP
    if any("cache" in token for token in tokens):
        return FileType.CACHE
    if tokens & _LOG_TOKENS:
        return FileType.LOG
    if tokens & BROWSER_TOKENS:
        return FileType.BROWSER_CACHE
    if tokens & CHAT_TOKENS:
        return FileType.CHAT
    return FileType.OTHER
