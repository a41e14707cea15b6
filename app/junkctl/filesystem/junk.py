"""Junk file detection from file names and path locations.

A file is junk when its name matches a disposable-file pattern (backup,
temp and old copies, OS thumbnail and folder-metadata caches, log files)
or when its full path mentions a temp, cache or log location. The two
signals are independent: either one is sufficient. No I/O is performed,
so the predicate is safe to call on paths that do not exist.
"""

import re
from collections.abc import Iterable

# Evaluated in order against the lower-cased file name.
JUNK_NAME_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"^~.*\.tmp$",
        r"^.*\.temp$",
        r"^.*\.bak$",
        r"^.*\.old$",
        r"^thumbs\.db$",
        r"^ehthumbs\.db$",
        r"^desktop\.ini$",
        r"^\.ds_store$",
        r"^.*\.log$",
    )
)

# Substrings of the lower-cased full path that mark temp/cache/log locations.
JUNK_PATH_KEYWORDS: tuple[str, ...] = ("temp", "tmp", "cache", "log")


class JunkDetector:
    """Decides whether a file qualifies as disposable junk.

    Args:
        name_patterns: Compiled patterns matched against the lower-cased
            file name. Defaults to JUNK_NAME_PATTERNS.
        path_keywords: Keywords searched for in the lower-cased full path.
            Defaults to JUNK_PATH_KEYWORDS.
    """

    def __init__(
        self,
        name_patterns: Iterable[re.Pattern[str]] | None = None,
        path_keywords: Iterable[str] | None = None,
    ) -> None:
        self._name_patterns = (
            tuple(name_patterns) if name_patterns is not None else JUNK_NAME_PATTERNS
        )
        self._path_keywords = (
            tuple(k.lower() for k in path_keywords)
            if path_keywords is not None
            else JUNK_PATH_KEYWORDS
        )

    def matches_name(self, file_name: str) -> bool:
        """Check the file name against the disposable-file patterns."""
        lower_name = file_name.lower()
        return any(pattern.match(lower_name) for pattern in self._name_patterns)

    def matches_location(self, full_path: str) -> bool:
        """Check the full path for temp/cache/log keywords."""
        lower_path = full_path.lower()
        return any(keyword in lower_path for keyword in self._path_keywords)

    def is_junk(self, file_name: str, full_path: str) -> bool:
        """Return True if the name pattern or the path location marks the file as junk."""
        return self.matches_name(file_name) or self.matches_location(full_path)


_default_detector = JunkDetector()


def is_junk(file_name: str, full_path: str) -> bool:
    """Check a file against the default junk patterns and path keywords.

    Args:
        file_name: Base name of the file.
        full_path: Absolute path of the file.

    Returns:
        True if the file qualifies as junk.
    """
    return _default_detector.is_junk(file_name, full_path)
