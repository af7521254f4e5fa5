from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

DeviceId = str

FOUND = "found"
NO_ACTIVITY = "no_activity"
NO_DEVICE = "no_device"
ERROR = "error"
DISABLED = "disabled"
NOT_FOUND = "not_found"
PENDING = "pending"

RESULT_KINDS: Tuple[str, ...] = (
    FOUND,
    NO_ACTIVITY,
    NO_DEVICE,
    ERROR,
    DISABLED,
    NOT_FOUND,
    PENDING,
)


@dataclass(frozen=True)
class ActivityId:
    """Canonical ``package.ClassName`` identifier of a foreground screen."""

    value: str
    """Fully-qualified class name as produced by ``normalize_component``."""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("ActivityId must be a non-empty string.")
        if "/" in self.value:
            raise ValueError("ActivityId must be canonical (no '/' separator).")

    @property
    def short_name(self) -> str:
        """Simple class name, i.e. the text after the last dot."""
        return self.value.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DetectionResult:
    """Tagged outcome of a single detection cycle.

    Exactly one variant is populated: ``activity`` only for ``found`` and
    ``reason`` only for ``error``. Use the classmethod constructors instead
    of building instances by hand.
    """

    kind: str
    activity: Optional[ActivityId] = None
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in RESULT_KINDS:
            raise ValueError(f"Unknown detection result kind: {self.kind!r}")
        if self.kind == FOUND:
            if not isinstance(self.activity, ActivityId):
                raise ValueError("A found result requires an ActivityId.")
        elif self.activity is not None:
            raise ValueError(f"A {self.kind} result cannot carry an activity.")
        if self.kind == ERROR:
            if not self.reason:
                raise ValueError("An error result requires a reason.")
        elif self.reason is not None:
            raise ValueError(f"A {self.kind} result cannot carry a reason.")

    @classmethod
    def found(cls, activity: ActivityId) -> "DetectionResult":
        return cls(FOUND, activity=activity)

    @classmethod
    def no_activity(cls) -> "DetectionResult":
        return cls(NO_ACTIVITY)

    @classmethod
    def no_device(cls) -> "DetectionResult":
        return cls(NO_DEVICE)

    @classmethod
    def error(cls, reason: str) -> "DetectionResult":
        return cls(ERROR, reason=reason)

    @classmethod
    def disabled(cls) -> "DetectionResult":
        return cls(DISABLED)

    @classmethod
    def not_found(cls) -> "DetectionResult":
        return cls(NOT_FOUND)

    @classmethod
    def pending(cls) -> "DetectionResult":
        return cls(PENDING)

    @property
    def is_found(self) -> bool:
        return self.kind == FOUND

    @property
    def is_terminal(self) -> bool:
        """True for session-terminal outcomes that stop polling."""
        return self.kind in (DISABLED, NOT_FOUND)


@dataclass(frozen=True)
class HistoryEntry:
    """One distinct activity seen by the monitor and when it was recorded."""

    activity: ActivityId
    timestamp: datetime


@dataclass(frozen=True)
class MonitorState:
    """Immutable snapshot published by the activity monitor.

    The worker replaces the whole snapshot after every cycle so readers never
    observe a half-updated state.
    """

    result: DetectionResult = field(default_factory=DetectionResult.pending)
    device: Optional[DeviceId] = None
    devices: Tuple[DeviceId, ...] = ()
    updated_at: Optional[datetime] = None
    running: bool = False

    @property
    def activity(self) -> Optional[ActivityId]:
        return self.result.activity


__all__ = [
    "ActivityId",
    "DISABLED",
    "DetectionResult",
    "DeviceId",
    "ERROR",
    "FOUND",
    "HistoryEntry",
    "MonitorState",
    "NOT_FOUND",
    "NO_ACTIVITY",
    "NO_DEVICE",
    "PENDING",
    "RESULT_KINDS",
]
