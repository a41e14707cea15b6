"""History entry model for tracking cleanups.

This module defines data structures for recording move-to-trash
operations in a history file.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from junkctl.filesystem.models import CleanResult


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """Single path handled by a cleanup.

    Attributes:
        path: Absolute path that was submitted for deletion.
        error: Failure reason, or None if the path was moved to the trash.
    """

    path: str
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.path:
            msg = "History item path cannot be empty"
            raise ValueError(msg)

    @property
    def deleted(self) -> bool:
        """Whether the path was moved to the trash."""
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        result: dict[str, Any] = {"path": self.path}
        if self.error is not None:
            result["error"] = self.error
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryItem:
        """Deserialize from dictionary.

        Raises:
            KeyError: If the path is missing.
        """
        return cls(path=data["path"], error=data.get("error"))


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Record of a single cleanup run.

    Attributes:
        id: Unique identifier (12-character hex string from UUID).
        timestamp: When the cleanup ran (ISO 8601 format with timezone).
        items: Paths handled by the cleanup, deleted paths before failed ones.
        total_size: Bytes moved to the trash.
        metadata: Additional context (command, source of the path list).
    """

    id: str
    timestamp: str
    items: tuple[HistoryItem, ...]
    total_size: int = 0
    metadata: dict[str, Any] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.id:
            msg = "History entry ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.items:
            msg = "History entry must have at least one item"
            raise ValueError(msg)
        if self.total_size < 0:
            msg = f"Total size cannot be negative, got {self.total_size}"
            raise ValueError(msg)

    @property
    def deleted_count(self) -> int:
        """Number of paths moved to the trash."""
        return sum(1 for item in self.items if item.deleted)

    @property
    def failed_count(self) -> int:
        """Number of paths that could not be deleted."""
        return len(self.items) - self.deleted_count

    @property
    def success(self) -> bool:
        """True if at least one path was moved to the trash."""
        return self.deleted_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the history entry.
        """
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "items": [item.to_dict() for item in self.items],
            "total_size": self.total_size,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            HistoryEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If item data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            items=tuple(HistoryItem.from_dict(item) for item in data["items"]),
            total_size=data.get("total_size", 0),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage.

        Returns:
            Single JSON line (no trailing newline).
        """
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> HistoryEntry:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_history_entry(
    result: CleanResult,
    metadata: dict[str, Any] | None = None,
) -> HistoryEntry:
    """Create a HistoryEntry from the outcome of a cleanup.

    Automatically generates a unique ID and current timestamp.

    Args:
        result: Outcome of the deletion batch.
        metadata: Optional additional context.

    Returns:
        New HistoryEntry with auto-generated ID and timestamp.

    Raises:
        ValueError: If the result contains no paths.
    """
    items = [HistoryItem(path=path) for path in result.deleted_files]
    items.extend(HistoryItem(path=f.path, error=f.error) for f in result.failed_files)
    if not items:
        msg = "Cannot create history entry with no items"
        raise ValueError(msg)

    return HistoryEntry(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        items=tuple(items),
        total_size=result.total_size,
        metadata=metadata or {},
    )
