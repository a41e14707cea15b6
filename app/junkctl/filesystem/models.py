"""Filesystem domain models for junk scanning and cleanup.

This module defines the core data structures exchanged between the
scanner, the size aggregator, the deletion operator and their callers:
matched file entries, scan and clean results, and classifier verdicts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from junkctl.filesystem.categories import FileCategory, FileType, categorize, detect_file_type


class RiskLevel(str, Enum):
    """Sensitivity tier of a filesystem path.

    Attributes:
        SAFE: Known temp/cache/log location, deletable without confirmation.
        CAUTION: Unrecognized location, allowed but should be confirmed.
        DANGEROUS: Program or shared OS data location, allowed but flagged.
        FORBIDDEN: System-critical location, never accessed or deleted.
    """

    SAFE = "safe"
    CAUTION = "caution"
    DANGEROUS = "dangerous"
    FORBIDDEN = "forbidden"


class EntryKind(str, Enum):
    """Type of a measured filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file or directory that was matched or measured.

    The category and file type are derived from the path and are not
    stored. They are included in the serialized form for consumers.

    Attributes:
        path: Absolute filesystem path.
        name: Display name (last path component).
        size_bytes: Size in bytes (recursive for directories).
        kind: Whether the entry is a file or a directory.
        modified: Last modification time (timezone-aware, UTC).
    """

    path: str
    name: str
    size_bytes: int
    kind: EntryKind
    modified: datetime

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def category(self) -> FileCategory:
        """Kind of software that left the entry behind."""
        return categorize(self.path)

    @property
    def file_type(self) -> FileType:
        """What the entry is (temp copy, cache, log, ...)."""
        return detect_file_type(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "path": self.path,
            "name": self.name,
            "size_bytes": self.size_bytes,
            "kind": self.kind.value,
            "modified": self.modified.isoformat(),
            "category": self.category.value,
            "file_type": self.file_type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileEntry:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If kind or timestamp is invalid.
        """
        return cls(
            path=data["path"],
            name=data["name"],
            size_bytes=int(data["size_bytes"]),
            kind=EntryKind(data["kind"]),
            modified=datetime.fromisoformat(data["modified"]),
        )


@dataclass(frozen=True, slots=True)
class SkippedPath:
    """Diagnostic for an entry or subtree dropped during traversal.

    Attributes:
        path: Path that could not be read or measured.
        reason: Underlying error message.
    """

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Result of a junk scan.

    Files are kept in traversal order. The total size is derived from the
    entries, so it always equals the sum of their sizes.

    Attributes:
        files: Matched file entries in traversal order.
        skipped: Entries or subtrees dropped because of filesystem errors.
    """

    files: tuple[FileEntry, ...] = ()
    skipped: tuple[SkippedPath, ...] = ()

    @property
    def total_size(self) -> int:
        """Sum of all matched file sizes in bytes."""
        return sum(entry.size_bytes for entry in self.files)

    @property
    def file_count(self) -> int:
        """Number of matched files."""
        return len(self.files)

    def filter_categories(self, categories: Iterable[FileCategory]) -> ScanResult:
        """Keep only the files of the given categories.

        Skipped-path diagnostics are kept unchanged.
        """
        wanted = set(categories)
        return ScanResult(
            files=tuple(entry for entry in self.files if entry.category in wanted),
            skipped=self.skipped,
        )

    def category_totals(self) -> dict[FileCategory, tuple[int, int]]:
        """Count and total size per category, largest first.

        Returns:
            Mapping of category to (file count, total bytes). Categories
            without files are left out.
        """
        totals: dict[FileCategory, tuple[int, int]] = {}
        for entry in self.files:
            count, size = totals.get(entry.category, (0, 0))
            totals[entry.category] = (count + 1, size + entry.size_bytes)
        return dict(sorted(totals.items(), key=lambda item: item[1][1], reverse=True))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output and caching."""
        return {
            "files": [entry.to_dict() for entry in self.files],
            "total_size": self.total_size,
            "skipped": [{"path": s.path, "reason": s.reason} for s in self.skipped],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanResult:
        """Deserialize from dictionary.

        The stored ``total_size`` is ignored and recomputed from the entries.
        """
        files = tuple(FileEntry.from_dict(item) for item in data.get("files", []))
        skipped = tuple(
            SkippedPath(path=item["path"], reason=item["reason"])
            for item in data.get("skipped", [])
        )
        return cls(files=files, skipped=skipped)


@dataclass(frozen=True, slots=True)
class FailedPath:
    """A path that could not be moved to the trash.

    Attributes:
        path: Path as it was requested.
        error: Human-readable failure reason.
    """

    path: str
    error: str


@dataclass(frozen=True, slots=True)
class CleanResult:
    """Outcome of a batch move-to-trash operation.

    Every requested path appears exactly once, either in ``deleted_files``
    or in ``failed_files``.

    Attributes:
        deleted_files: Paths successfully moved to the trash, in request order.
        failed_files: Paths that were refused or failed, with reasons.
        total_size: Bytes reclaimed by the deleted paths.
    """

    deleted_files: tuple[str, ...] = ()
    failed_files: tuple[FailedPath, ...] = ()
    total_size: int = 0

    @property
    def success(self) -> bool:
        """True if at least one path was deleted (partial success counts)."""
        return len(self.deleted_files) > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "success": self.success,
            "deleted_files": list(self.deleted_files),
            "failed_files": [{"path": f.path, "error": f.error} for f in self.failed_files],
            "total_size": self.total_size,
        }


@dataclass(frozen=True, slots=True)
class PathVerdict:
    """Access classification of a single path.

    Attributes:
        can_access: False only for forbidden paths.
        reason: Human-readable explanation of the tier.
        risk_level: Risk tier of the path.
    """

    can_access: bool
    reason: str
    risk_level: RiskLevel


@dataclass(frozen=True, slots=True)
class DeleteVerdict:
    """Deletion check result for a single path.

    Attributes:
        can_delete: Whether the path may be moved to the trash.
        reason: Human-readable explanation.
        requires_confirmation: Advisory flag for callers; not enforced here.
    """

    can_delete: bool
    reason: str
    requires_confirmation: bool


@dataclass(frozen=True, slots=True)
class OperationVerdict:
    """Validation result for a read, move or delete operation.

    Attributes:
        allowed: Whether the operation may proceed.
        reason: Human-readable explanation.
        warnings: Advisory warnings for the caller to surface.
    """

    allowed: bool
    reason: str
    warnings: tuple[str, ...] = ()
