"""Domain package exports for value objects and pure detection rules."""

from .component_name import normalize_component
from .devices import parse_device_list, reconcile_selection
from .entities import (
    ActivityId,
    DetectionResult,
    DeviceId,
    HistoryEntry,
    MonitorState,
)
from .history import ActivityHistory
from .settings import MonitorSettings

__all__ = [
    "ActivityHistory",
    "ActivityId",
    "DetectionResult",
    "DeviceId",
    "HistoryEntry",
    "MonitorSettings",
    "MonitorState",
    "normalize_component",
    "parse_device_list",
    "reconcile_selection",
]
