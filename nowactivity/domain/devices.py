"""Parsing and selection helpers for the ``adb devices`` listing."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .entities import DeviceId

READY_STATE = "device"


def parse_device_list(output: str) -> List[DeviceId]:
    """Extract ready device serials from ``adb devices`` output.

    Lines look like ``emulator-5554\tdevice``. Devices reported as
    ``offline``, ``unauthorized`` or in any other state are skipped, as is
    the ``List of devices attached`` header.
    """
    devices: List[DeviceId] = []
    for raw_line in (output or "").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("*") or line.lower().startswith("list of devices"):
            continue
        parts = line.split()
        if len(parts) < 2 or parts[1] != READY_STATE:
            continue
        serial = parts[0]
        if serial not in devices:
            devices.append(serial)
    return devices


def reconcile_selection(
    previous: Optional[DeviceId], devices: Sequence[DeviceId]
) -> Optional[DeviceId]:
    """Keep the previous selection while it is attached, else pick the first device."""
    if previous is not None and previous in devices:
        return previous
    if devices:
        return devices[0]
    return None


__all__ = ["READY_STATE", "parse_device_list", "reconcile_selection"]
