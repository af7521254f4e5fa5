from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

from nowactivity.domain.entities import ActivityId, DetectionResult, DeviceId
from nowactivity.domain.settings import MonitorSettings
from nowactivity.usecases.detect_activity import CycleOutcome


def wait_for(predicate: Callable[[], bool], timeout: float = 3.0, interval: float = 0.01) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class SettingsHolder:
    """Mutable settings provider for monitor tests."""

    def __init__(self, **overrides) -> None:
        self.settings = MonitorSettings(**overrides)

    def __call__(self) -> MonitorSettings:
        return self.settings


class ScriptedDetector:
    """Detector double returning queued outcomes; the last one repeats."""

    def __init__(self, outcomes: List[object]) -> None:
        self._outcomes = list(outcomes)
        self._lock = threading.Lock()
        self.selected: List[Optional[DeviceId]] = []

    @property
    def calls(self) -> int:
        with self._lock:
            return len(self.selected)

    def __call__(self, selected: Optional[DeviceId]) -> CycleOutcome:
        with self._lock:
            self.selected.append(selected)
            outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def found(name: str, device: DeviceId = "emu-1") -> CycleOutcome:
    return CycleOutcome(DetectionResult.found(ActivityId(name)), device, (device,))


def no_device() -> CycleOutcome:
    return CycleOutcome(DetectionResult.no_device(), None, ())


__all__ = ["ScriptedDetector", "SettingsHolder", "found", "no_device", "wait_for"]
