"""Unit tests for history models.

Tests for HistoryItem, HistoryEntry and create_history_entry.
"""

import json

import pytest

from junkctl.filesystem.models import CleanResult, FailedPath
from junkctl.models.history import HistoryEntry, HistoryItem, create_history_entry


class TestHistoryItem:
    """Tests for HistoryItem dataclass."""

    def test_deleted_item(self) -> None:
        item = HistoryItem(path="/tmp/a.tmp")
        assert item.deleted is True
        assert item.to_dict() == {"path": "/tmp/a.tmp"}

    def test_failed_item(self) -> None:
        item = HistoryItem(path="/etc/hosts", error="Forbidden")
        assert item.deleted is False
        assert HistoryItem.from_dict(item.to_dict()) == item

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            HistoryItem(path="")


class TestHistoryEntry:
    """Tests for HistoryEntry dataclass."""

    def _entry(self) -> HistoryEntry:
        return HistoryEntry(
            id="abc123def456",
            timestamp="2024-05-01T10:00:00+00:00",
            items=(
                HistoryItem(path="/tmp/a.tmp"),
                HistoryItem(path="/tmp/b.tmp"),
                HistoryItem(path="/etc/hosts", error="Forbidden"),
            ),
            total_size=42,
            metadata={"source": "last-scan"},
        )

    def test_counts(self) -> None:
        entry = self._entry()
        assert entry.deleted_count == 2
        assert entry.failed_count == 1
        assert entry.success is True

    def test_all_failed_is_not_success(self) -> None:
        entry = HistoryEntry(
            id="x",
            timestamp="2024-05-01T10:00:00+00:00",
            items=(HistoryItem(path="/etc/hosts", error="Forbidden"),),
        )
        assert entry.success is False

    def test_json_line_is_single_line(self) -> None:
        line = self._entry().to_json_line()
        assert "\n" not in line
        assert json.loads(line)["metadata"] == {"source": "last-scan"}
        assert HistoryEntry.from_json_line(line + "\n") == self._entry()

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("id", "", "ID cannot be empty"),
            ("timestamp", "", "Timestamp cannot be empty"),
            ("items", (), "at least one item"),
            ("total_size", -1, "cannot be negative"),
        ],
    )
    def test_validation(self, field: str, value: object, message: str) -> None:
        kwargs: dict[str, object] = {
            "id": "abc",
            "timestamp": "2024-05-01T10:00:00+00:00",
            "items": (HistoryItem(path="/tmp/a.tmp"),),
        }
        kwargs[field] = value
        with pytest.raises(ValueError, match=message):
            HistoryEntry(**kwargs)  # type: ignore[arg-type]

    def test_missing_field(self) -> None:
        with pytest.raises(KeyError):
            HistoryEntry.from_dict({"id": "abc", "timestamp": "now"})


class TestCreateHistoryEntry:
    """Tests for create_history_entry factory."""

    def test_deleted_before_failed(self) -> None:
        result = CleanResult(
            deleted_files=("/tmp/a.tmp",),
            failed_files=(FailedPath(path="/tmp/b.tmp", error="busy"),),
            total_size=4,
        )

        entry = create_history_entry(result, metadata={"source": "arguments"})

        assert [i.path for i in entry.items] == ["/tmp/a.tmp", "/tmp/b.tmp"]
        assert entry.items[1].error == "busy"
        assert entry.total_size == 4
        assert len(entry.id) == 12
        assert entry.timestamp.endswith("+00:00")

    def test_unique_ids(self) -> None:
        result = CleanResult(deleted_files=("/tmp/a.tmp",))
        assert create_history_entry(result).id != create_history_entry(result).id

    def test_empty_result_rejected(self) -> None:
        with pytest.raises(ValueError, match="no items"):
            create_history_entry(CleanResult())
