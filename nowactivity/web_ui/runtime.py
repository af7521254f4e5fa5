"""NiceGUI runtime orchestration for the activity panel.

This module composes the controller and view models for the web panel. It
holds no NiceGUI imports so it can be exercised without a browser.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional

from nowactivity.app.controller import MonitorController
from nowactivity.domain.ports import StoragePort, UseCaseError
from nowactivity.viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)

COPY_MESSAGE_S = 2.0


class WebRuntime:
    """Orchestration state used by NiceGUI views."""

    def __init__(
        self,
        *,
        demo: bool = False,
        storage: Optional[StoragePort] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings_vm = SettingsVM()
        self.controller = MonitorController(self.settings_vm, storage=storage, demo=demo)
        self._clock = clock
        self._flash_message: Optional[str] = None
        self._flash_until = 0.0
        self.settings_error: Optional[str] = None
        self._settings_lock = threading.Lock()
        self._load_settings_defaults()

    def _load_settings_defaults(self) -> None:
        try:
            self.controller.load_settings()
        except (UseCaseError, ValueError) as exc:
            # keep defaults; the panel shows the problem
            self.settings_error = exc.message if isinstance(exc, UseCaseError) else str(exc)
            LOGGER.warning("Could not load settings: %s", self.settings_error)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.controller.start()

    def shutdown(self) -> None:
        self.controller.dispose()

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------
    def view(self) -> Dict[str, Any]:
        """Panel DTO; a fresh copy message temporarily replaces the status."""
        dto = self.controller.snapshot()
        if self._flash_message and self._clock() < self._flash_until:
            dto["status"] = self._flash_message
        else:
            self._flash_message = None
        return dto

    def settings_payload(self) -> Dict[str, Any]:
        return self.settings_vm.to_dict()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self.controller.refresh()

    def select_device(self, device_id: Optional[str]) -> None:
        if device_id:
            self.controller.select_device(device_id)

    def clear_history(self) -> None:
        self.controller.clear_history()

    def copy_text(self, *, full: bool = True) -> Optional[str]:
        """Text for the clipboard; also arms the ``Copied: ...`` status."""
        text = self.controller.monitor_vm.copy_text(full=full)
        if text:
            self.flash(f"Copied: {text}")
        return text

    def flash(self, message: str) -> None:
        self._flash_message = message
        self._flash_until = self._clock() + COPY_MESSAGE_S

    def apply_settings(self, payload: Mapping[str, Any]) -> None:
        """Validate and save the form values, then restart monitoring.

        Blocks while the monitor restarts, so the panel calls it from a worker
        thread; concurrent calls are applied one at a time.

        Raises:
            ValueError: A value is out of range or the adb path is missing.
            UseCaseError: The settings file could not be written.
        """
        with self._settings_lock:
            previous = self.settings_vm.to_dict()
            try:
                self.settings_vm.apply_dict(payload)
                self.controller.save_settings()
            except (UseCaseError, ValueError):
                self.settings_vm.apply_dict(previous)
                raise
            self.settings_error = None


__all__ = ["COPY_MESSAGE_S", "WebRuntime"]
