from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from nowactivity.domain.entities import DeviceId
from nowactivity.domain.ports import BridgePort

Response = Union[str, List[str], Exception]


@dataclass
class BridgeMock(BridgePort):
    """Offline substitute for ``AdbBridge`` with scripted responses.

    ``responses`` is keyed by the shell argument tuple, e.g.
    ``("dumpsys", "window", "windows")``. A string is returned on every
    call, a list is consumed one item per call (the last item repeats), and
    an exception instance is raised. Unknown queries return ``""``.
    ``calls`` keeps every shell query unless ``record_calls`` is off.
    """

    devices: List[DeviceId] = field(default_factory=lambda: ["emulator-5554"])
    responses: Dict[Tuple[str, ...], Response] = field(default_factory=dict)
    calls: List[Tuple[Optional[DeviceId], Tuple[str, ...]]] = field(default_factory=list)
    record_calls: bool = True

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    # ---------- BridgePort ----------

    def list_devices(self) -> str:
        lines = ["List of devices attached"]
        lines.extend(f"{device}\tdevice" for device in self.devices)
        return "\n".join(lines) + "\n"

    def shell(self, device_id: Optional[DeviceId], args: Sequence[str]) -> str:
        key = tuple(args)
        with self._lock:
            if self.record_calls:
                self.calls.append((device_id, key))
            response = self.responses.get(key, "")
            if isinstance(response, list):
                if not response:
                    return ""
                response = response.pop(0) if len(response) > 1 else response[0]
        if isinstance(response, Exception):
            raise response
        return response

    # ---------- helpers ----------

    def queries(self) -> List[Tuple[str, ...]]:
        with self._lock:
            return [key for _, key in self.calls]

    @classmethod
    def demo(cls) -> "BridgeMock":
        """Bridge that walks through a few screens, one per window dump.

        Runs for the whole process, so queries are not recorded.
        """
        screens = [
            "com.example.shop/.SplashActivity",
            "com.example.shop/.MainActivity",
            "com.example.shop/com.example.shop.cart.CartActivity",
            "com.example.shop/.MainActivity",
            "com.android.settings/.Settings",
        ]
        dumps = [
            f"  mCurrentFocus=Window{{4f1c2a0 u0 {screen}}}\n" for screen in screens
        ]
        return cls(responses={("dumpsys", "window", "windows"): dumps}, record_calls=False)
