"""Adapter, use-case and monitor wiring shared by both runtimes.

This module owns construction of the settings store, the adb locator and the
``ActivityMonitor`` from values in
:class:`nowactivity.viewmodels.settings_vm.SettingsVM`. The console watcher
and the NiceGUI runtime each create one instance.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Mapping, Optional

from ..adapters.adb_bridge import AdbBridge
from ..adapters.adb_locator import AdbLocator
from ..adapters.bridge_mock import BridgeMock
from ..adapters.command_runner import CommandRunner
from ..adapters.storage_local import StorageLocal
from ..domain.entities import DeviceId, MonitorState
from ..domain.ports import BridgePort, StoragePort
from ..usecases.user_settings import LoadUserSettings, SaveUserSettings
from ..utils import logging as logging_utils
from ..viewmodels.monitor_vm import MonitorVM
from ..viewmodels.settings_vm import SettingsVM
from .activity_monitor import ActivityMonitor

SETTINGS_DIR_ENV = "NOWACTIVITY_SETTINGS_DIR"
DEMO_ADB_PATH = "adb (demo)"

_log = logging.getLogger(__name__)


def default_settings_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    """``$NOWACTIVITY_SETTINGS_DIR`` or ``~/.nowactivity``."""
    env = os.environ if environ is None else environ
    configured = (env.get(SETTINGS_DIR_ENV) or "").strip()
    if configured:
        return configured
    return os.path.join(os.path.expanduser("~"), ".nowactivity")


def _demo_adb_path() -> str:
    return DEMO_ADB_PATH


class MonitorController:
    """Create the monitor and route settings and UI commands to it.

    Call chain:
        ``nowactivity.app.main`` and ``nowactivity.web_ui.runtime`` create one
        instance, call ``load_settings`` and ``start``, then read ``snapshot``
        on every redraw.
    """

    def __init__(
        self,
        settings_vm: Optional[SettingsVM] = None,
        *,
        storage: Optional[StoragePort] = None,
        demo: bool = False,
        on_state: Optional[Callable[[MonitorState], None]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize controller collaborators.

        Args:
            settings_vm: Settings state; a default instance when omitted.
            storage: Settings store; ``StorageLocal`` under
                ``default_settings_dir`` when omitted.
            demo: Use the scripted ``BridgeMock`` instead of a real adb.
            on_state: Extra listener called on the worker thread for every
                published state.
            environ: Environment used to locate adb (tests pass a dict).
        """
        self.settings_vm = settings_vm or SettingsVM()
        if self.settings_vm.on_save is None:
            self.settings_vm.on_save = self._persist_settings
        self.storage = storage or StorageLocal(root_dir=default_settings_dir(environ))
        self.uc_load_settings = LoadUserSettings(self.storage)
        self.uc_save_settings = SaveUserSettings(self.storage)
        self.monitor_vm = MonitorVM()
        self.demo = demo
        self._demo_bridge: Optional[BridgeMock] = None

        resolver: Callable[[], Optional[str]]
        if demo:
            resolver = _demo_adb_path
        else:
            resolver = AdbLocator(self.settings_vm.to_settings, environ=environ)
        self.resolve_adb_path = resolver
        self.monitor = ActivityMonitor(
            self.settings_vm.to_settings,
            resolver,
            self._build_bridge,
            on_state=on_state,
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def load_settings(self) -> None:
        """Apply the stored settings; raises ``UseCaseError`` on a bad file."""
        payload = self.uc_load_settings()
        self.settings_vm.apply_dict(payload)
        self._apply_settings()

    def save_settings(self) -> None:
        """Validate, persist and restart monitoring with the new values."""
        self.settings_vm.cmd_save()
        self._apply_settings()
        self.monitor.restart()

    def _persist_settings(self, payload: Dict) -> None:
        self.uc_save_settings(payload)

    def _apply_settings(self) -> None:
        level = logging_utils.apply_debug_setting(self.settings_vm.debug_logging)
        _log.debug("Log level now %s", logging.getLevelName(level))
        self.monitor_vm.apply_settings(self.settings_vm.to_settings())

    # ------------------------------------------------------------------
    # Monitor commands
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.monitor_vm.apply_settings(self.settings_vm.to_settings())
        self.monitor.start()

    def stop(self) -> None:
        self.monitor.stop()

    def dispose(self) -> None:
        self.monitor.dispose()

    def refresh(self) -> None:
        self.monitor.refresh()

    def select_device(self, device_id: DeviceId) -> None:
        self.monitor.select_device(device_id)

    def clear_history(self) -> None:
        self.monitor.history.clear()

    def snapshot(self) -> Dict:
        """Current display DTO built from the latest state and history."""
        return self.monitor_vm.apply_state(self.monitor.get_state(), self.monitor.get_history())

    # ------------------------------------------------------------------
    def _build_bridge(self, adb_path: str) -> BridgePort:
        if self.demo:
            if self._demo_bridge is None:
                self._demo_bridge = BridgeMock.demo()
            return self._demo_bridge
        return AdbBridge(adb_path, CommandRunner())


__all__ = ["DEMO_ADB_PATH", "MonitorController", "SETTINGS_DIR_ENV", "default_settings_dir"]
