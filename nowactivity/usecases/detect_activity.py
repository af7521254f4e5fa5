"""Use case for one detection cycle.

Refreshes the device list, reconciles the selected device, and runs the
extraction chain for it. The result is an immutable ``CycleOutcome`` that
the monitor turns into its next ``MonitorState`` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from nowactivity.domain.devices import reconcile_selection
from nowactivity.domain.entities import ActivityId, DetectionResult, DeviceId


@dataclass(frozen=True)
class CycleOutcome:
    """Result of a single cycle plus the device context it ran against."""

    result: DetectionResult
    device: Optional[DeviceId]
    devices: Tuple[DeviceId, ...]


class DetectActivity:
    """Use-case callable driving refresh, reconcile, and extraction.

    Attributes:
        refresh_devices: Callable returning ready device serials.
        extract: Callable mapping a device serial to an ``ActivityId``.
    """

    def __init__(
        self,
        refresh_devices: Callable[[], List[DeviceId]],
        extract: Callable[[Optional[DeviceId]], Optional[ActivityId]],
    ) -> None:
        self.refresh_devices = refresh_devices
        self.extract = extract

    def __call__(self, selected: Optional[DeviceId]) -> CycleOutcome:
        """Run one cycle for the previously selected (or requested) device.

        Args:
            selected: Device chosen by the previous cycle or by the user.

        Returns:
            CycleOutcome: ``no_device`` when nothing is attached, ``found``
            when a strategy matched, else ``no_activity``.

        Raises:
            Exception: Unexpected failures propagate to the monitor, which
            reports them as an ``error`` result for this cycle only.
        """
        devices = tuple(self.refresh_devices())
        device = reconcile_selection(selected, devices)
        if device is None:
            return CycleOutcome(DetectionResult.no_device(), None, devices)

        activity = self.extract(device)
        if activity is None:
            return CycleOutcome(DetectionResult.no_activity(), device, devices)
        return CycleOutcome(DetectionResult.found(activity), device, devices)


__all__ = ["CycleOutcome", "DetectActivity"]
