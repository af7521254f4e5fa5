from __future__ import annotations

from typing import List, Optional, Sequence

from nowactivity.domain.entities import DeviceId
from nowactivity.domain.ports import BridgePort

from .command_runner import CommandRunner


class AdbBridge(BridgePort):
    """``BridgePort`` backed by the adb executable.

    All calls block on ``CommandRunner`` and must only run on the monitor
    worker thread.
    """

    def __init__(self, adb_path: str, runner: Optional[CommandRunner] = None) -> None:
        self.adb_path = adb_path
        self.runner = runner or CommandRunner()

    def list_devices(self) -> str:
        return self.runner.run(self.adb_path, ["devices"])

    def shell(self, device_id: Optional[DeviceId], args: Sequence[str]) -> str:
        return self.runner.run(self.adb_path, self.shell_args(device_id, args))

    @staticmethod
    def shell_args(device_id: Optional[DeviceId], args: Sequence[str]) -> List[str]:
        command: List[str] = []
        if device_id:
            command.extend(["-s", device_id])
        command.append("shell")
        command.extend(args)
        return command

    def close(self) -> None:
        self.runner.close()
