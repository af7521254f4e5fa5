"""Bounded, deduplicated history of detected foreground activities."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import List, Tuple

from .entities import ActivityId, HistoryEntry

DEFAULT_HISTORY_SIZE = 10
MIN_HISTORY_SIZE = 5
MAX_HISTORY_SIZE = 50


def valid_history_size(value: object) -> int:
    """Return ``value`` when it is an int in [5, 50], else the default size."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_HISTORY_SIZE
    if MIN_HISTORY_SIZE <= value <= MAX_HISTORY_SIZE:
        return value
    return DEFAULT_HISTORY_SIZE


class ActivityHistory:
    """Most-recent-first log of distinct activities.

    Invariants after every ``record`` call: no two entries share an activity
    and the length never exceeds ``max_size``. Lowering ``max_size`` only
    takes effect on the next insertion.

    The monitor worker is the only writer. The lock keeps ``entries`` copies
    consistent for UI readers.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self._max_size = valid_history_size(max_size)
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        self._max_size = valid_history_size(value)

    def record(self, activity: ActivityId, timestamp: datetime) -> HistoryEntry:
        """Move ``activity`` to the front with ``timestamp`` and trim the tail."""
        entry = HistoryEntry(activity=activity, timestamp=timestamp)
        with self._lock:
            self._entries = [item for item in self._entries if item.activity != activity]
            self._entries.insert(0, entry)
            del self._entries[self._max_size:]
        return entry

    def entries(self) -> Tuple[HistoryEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "ActivityHistory",
    "DEFAULT_HISTORY_SIZE",
    "MAX_HISTORY_SIZE",
    "MIN_HISTORY_SIZE",
    "valid_history_size",
]
