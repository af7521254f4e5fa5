from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.devices import parse_device_list
from ..domain.entities import DeviceId
from ..domain.ports import BridgePort


@dataclass
class RefreshDevices:
    """Query ``adb devices`` and return ready serials in reported order."""

    bridge: BridgePort

    def __call__(self) -> List[DeviceId]:
        return parse_device_list(self.bridge.list_devices())
