"""Display labels for detection results and monitor snapshots.

Call context:
    ``MonitorVM`` and the console watcher call these helpers so the status
    line, the status-bar text and the history rows read the same everywhere.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..domain.entities import (
    DISABLED,
    ERROR,
    FOUND,
    NO_ACTIVITY,
    NO_DEVICE,
    NOT_FOUND,
    PENDING,
    DetectionResult,
    HistoryEntry,
    MonitorState,
)

HISTORY_TIME_FORMAT = "%H:%M:%S"


def result_label(result: DetectionResult) -> str:
    """Short text for the current-activity slot."""
    if result.kind == FOUND:
        return str(result.activity)
    mapping = {
        NO_ACTIVITY: "No Activity",
        NO_DEVICE: "No Device",
        DISABLED: "Disabled",
        NOT_FOUND: "ADB not found",
        PENDING: "Initializing...",
    }
    if result.kind == ERROR:
        return f"Error: {result.reason}"
    return mapping.get(result.kind, result.kind.replace("_", " ").title())


def status_line(state: MonitorState, poll_interval_s: int) -> str:
    """Panel status line; mirrors the checks the panel runs top to bottom."""
    kind = state.result.kind
    if kind == NOT_FOUND:
        return "Status: ADB not found"
    if kind == DISABLED:
        return "Status: Disabled"
    if kind == PENDING:
        return "Status: Monitoring..." if state.running else "Status: Initializing..."
    if kind == ERROR:
        return f"Status: Error - {state.result.reason}"
    if not state.devices:
        return "Status: No devices connected"
    if state.device is None:
        return "Status: No device selected"
    if kind == NO_ACTIVITY:
        return "Status: No activity detected"
    return f"Status: Active (Refresh: {poll_interval_s}s) | Device: {state.device}"


def status_bar_text(state: MonitorState) -> str:
    return f"Android: {result_label(state.result)}"


def status_tooltip(state: MonitorState, *, show_device_info: bool, poll_interval_s: int) -> str:
    lines = [f"Current Activity: {result_label(state.result)}"]
    if show_device_info and state.device is not None:
        lines.append(f"Device: {state.device}")
    lines.append("Click to copy the short name, double-click for the full name")
    lines.append(f"Refresh interval: {poll_interval_s}s")
    return "\n".join(lines)


def format_timestamp(value: Optional[datetime]) -> str:
    """Local wall-clock ``HH:MM:SS``; ``-`` when there is no timestamp."""
    if value is None:
        return "-"
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(HISTORY_TIME_FORMAT)


def history_row(entry: HistoryEntry) -> str:
    return f"{format_timestamp(entry.timestamp)} - {entry.activity}"


__all__ = [
    "HISTORY_TIME_FORMAT",
    "format_timestamp",
    "history_row",
    "result_label",
    "status_bar_text",
    "status_line",
    "status_tooltip",
]
