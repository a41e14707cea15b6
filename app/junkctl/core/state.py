"""State management for history tracking and the scan cache.

This module provides the StateManager class for persisting cleanup
history in a JSONL file and for caching the most recent scan result.
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from junkctl.core.paths import (
    HISTORY_FILENAME,
    LAST_SCAN_FILENAME,
    ensure_state_dir,
    get_state_dir,
)
from junkctl.filesystem.models import ScanResult
from junkctl.models.history import HistoryEntry

logger = logging.getLogger(__name__)


class StateManager:
    """Manages history and scan cache state.

    Storage location: ~/.local/state/junkctl/

    The history file uses JSON Lines format where each line is a complete
    JSON object representing a HistoryEntry. This format allows for
    efficient append-only writes and easy parsing. The last scan is a
    single JSON document that is replaced on every scan.
    """

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/junkctl
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        """Path to the history.jsonl file."""
        return self._state_dir / HISTORY_FILENAME

    @property
    def last_scan_path(self) -> Path:
        """Path to the last-scan.json file."""
        return self._state_dir / LAST_SCAN_FILENAME

    def _ensure_state_dir(self) -> None:
        if self._state_dir == get_state_dir():
            ensure_state_dir()
        else:
            self._state_dir.mkdir(parents=True, exist_ok=True)

    def record_action(self, entry: HistoryEntry) -> None:
        """Append a cleanup to the history file.

        Creates file and parent directories if they don't exist.

        Args:
            entry: The history entry to record.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        self._ensure_state_dir()
        line = entry.to_json_line()
        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()

    def get_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Read history entries, newest first.

        Corrupt lines are logged and skipped.

        Args:
            limit: Maximum number of entries to return.
                  If None, returns all entries.

        Returns:
            List of HistoryEntry, newest first.
            Returns empty list if file doesn't exist.
        """
        if not self.history_path.exists():
            return []

        entries: list[HistoryEntry] = []

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    entries.append(HistoryEntry.from_json_line(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, e)
                    continue

        entries.reverse()

        if limit is not None:
            return entries[:limit]
        return entries

    def save_last_scan(self, result: ScanResult) -> Path:
        """Replace the cached scan result.

        The file is written to a temporary file first and then renamed.

        Args:
            result: Scan result to cache.

        Returns:
            Path of the cache file.

        Raises:
            RuntimeError: If the state directory cannot be created.
            OSError: If the file cannot be written.
        """
        self._ensure_state_dir()

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._state_dir,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(result.to_dict(), f)
            os.replace(tmp_path, self.last_scan_path)
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

        return self.last_scan_path

    def load_last_scan(self) -> ScanResult | None:
        """Load the cached scan result.

        Returns:
            The cached ScanResult, or None if no usable cache exists.
        """
        if not self.last_scan_path.exists():
            return None

        try:
            with self.last_scan_path.open(encoding="utf-8") as f:
                return ScanResult.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable scan cache %s: %s", self.last_scan_path, e)
            return None
