"""Typed monitor settings and the bounds the engine enforces on them."""

from __future__ import annotations

from dataclasses import dataclass

from .history import DEFAULT_HISTORY_SIZE, valid_history_size

DEFAULT_POLL_INTERVAL_S = 1
MIN_POLL_INTERVAL_S = 1
MAX_POLL_INTERVAL_S = 60


def valid_poll_interval(value: object) -> int:
    """Return ``value`` when it is an int in [1, 60] seconds, else 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_POLL_INTERVAL_S
    if MIN_POLL_INTERVAL_S <= value <= MAX_POLL_INTERVAL_S:
        return value
    return DEFAULT_POLL_INTERVAL_S


@dataclass(frozen=True)
class MonitorSettings:
    """Runtime settings read by the monitor at start.

    Values come from a settings provider the engine does not trust; use
    ``effective_poll_interval_s``/``effective_history_size`` to read them.
    """

    enabled: bool = True
    poll_interval_s: int = DEFAULT_POLL_INTERVAL_S
    show_device_info: bool = True
    history_size: int = DEFAULT_HISTORY_SIZE
    use_custom_adb_path: bool = False
    custom_adb_path: str = ""

    @property
    def effective_poll_interval_s(self) -> int:
        return valid_poll_interval(self.poll_interval_s)

    @property
    def effective_history_size(self) -> int:
        return valid_history_size(self.history_size)


__all__ = [
    "DEFAULT_POLL_INTERVAL_S",
    "MAX_POLL_INTERVAL_S",
    "MIN_POLL_INTERVAL_S",
    "MonitorSettings",
    "valid_poll_interval",
]
