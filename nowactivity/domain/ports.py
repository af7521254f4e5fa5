from __future__ import annotations
from typing import Callable, Dict, Optional, Protocol, Sequence

from .entities import DeviceId, MonitorState


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class BridgePort(Protocol):
    """Text command/response channel to the adb bridge tool.

    Implementations return captured stdout and ``""`` for any failure.
    """

    def list_devices(self) -> str: ...  # raw ``adb devices`` output
    def shell(self, device_id: Optional[DeviceId], args: Sequence[str]) -> str: ...


class AdbPathResolver(Protocol):
    """Locate the adb executable; ``None`` when it cannot be found."""

    def __call__(self) -> Optional[str]: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Dict: ...


StateListener = Callable[[MonitorState], None]
