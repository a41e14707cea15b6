"""Data models for junkctl.

This module exports the persistent data structures used by the CLI.
"""

from junkctl.models.history import HistoryEntry, HistoryItem, create_history_entry

__all__ = [
    "HistoryEntry",
    "HistoryItem",
    "create_history_entry",
]
