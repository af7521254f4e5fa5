"""Background monitor that polls adb for the foreground activity.

One daemon worker thread per session runs detection cycles serially. The
worker is the only writer of ``MonitorState``: every cycle builds a new
frozen snapshot and swaps the reference, so ``get_state`` never blocks and
never sees a half-updated state. UI threads talk to the worker through a
request queue (device selection, manual refresh) instead of touching state.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple

from nowactivity.adapters.command_runner import DEFAULT_TIMEOUT_S
from nowactivity.domain.entities import (
    ActivityId,
    DetectionResult,
    DeviceId,
    HistoryEntry,
    MonitorState,
)
from nowactivity.domain.history import ActivityHistory
from nowactivity.domain.ports import BridgePort, StateListener
from nowactivity.domain.settings import MonitorSettings
from nowactivity.usecases.detect_activity import CycleOutcome, DetectActivity
from nowactivity.usecases.error_mapping import describe_cycle_error
from nowactivity.usecases.extract_activity import ExtractForegroundActivity
from nowactivity.usecases.refresh_devices import RefreshDevices

Detector = Callable[[Optional[DeviceId]], CycleOutcome]

DEFAULT_STOP_GRACE_S = 1.0

_STOP = object()
_SELECT = "select"
_REFRESH = "refresh"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_detector(bridge: BridgePort) -> Detector:
    """Default wiring: device refresh plus the full strategy chain."""
    return DetectActivity(RefreshDevices(bridge), ExtractForegroundActivity(bridge))


@dataclass
class _Session:
    """Per-start worker context; abandoned sessions can never publish."""

    bridge: BridgePort
    detector: Detector
    interval_s: float
    stop: threading.Event = field(default_factory=threading.Event)
    requests: "queue.Queue[Any]" = field(default_factory=queue.Queue)
    thread: Optional[threading.Thread] = None
    selected: Optional[DeviceId] = None
    last_activity: Optional[ActivityId] = None


class ActivityMonitor:
    """Polls the foreground activity and exposes the latest snapshot.

    Lifecycle: stopped -> running -> stopped. ``start`` and ``stop`` are
    idempotent; ``dispose`` is terminal.
    """

    def __init__(
        self,
        settings_provider: Callable[[], MonitorSettings],
        resolve_adb_path: Callable[[], Optional[str]],
        bridge_factory: Callable[[str], BridgePort],
        *,
        on_state: Optional[StateListener] = None,
        history: Optional[ActivityHistory] = None,
        detector_factory: Callable[[BridgePort], Detector] = build_detector,
        clock: Callable[[], datetime] = _utc_now,
        stop_grace_s: float = DEFAULT_STOP_GRACE_S,
        command_timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._settings_provider = settings_provider
        self._resolve_adb_path = resolve_adb_path
        self._bridge_factory = bridge_factory
        self._detector_factory = detector_factory
        self._on_state = on_state
        self._clock = clock
        self._stop_grace_s = stop_grace_s
        self._command_timeout_s = command_timeout_s
        self._history = history or ActivityHistory()
        self._state = MonitorState()
        self._session: Optional[_Session] = None
        self._lifecycle_lock = threading.Lock()
        self._disposed = False
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Read side (any thread)
    # ------------------------------------------------------------------
    def get_state(self) -> MonitorState:
        return self._state

    def get_history(self) -> Tuple[HistoryEntry, ...]:
        return self._history.entries()

    @property
    def history(self) -> ActivityHistory:
        return self._history

    @property
    def is_running(self) -> bool:
        session = self._session
        return bool(session and session.thread and session.thread.is_alive())

    # ------------------------------------------------------------------
    # Commands (UI thread)
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Resolve adb and spawn the worker, unless disabled or not found."""
        with self._lifecycle_lock:
            if self._disposed or self.is_running:
                return
            settings = self._settings_provider()
            self._history.max_size = settings.effective_history_size
            if not settings.enabled:
                self._log.info("Activity monitor disabled in settings")
                self._publish(MonitorState(result=DetectionResult.disabled()))
                return
            adb_path = self._resolve_adb_path()
            if not adb_path:
                self._log.warning("adb not found; configure a custom adb path in settings")
                self._publish(MonitorState(result=DetectionResult.not_found()))
                return

            bridge = self._bridge_factory(adb_path)
            session = _Session(
                bridge=bridge,
                detector=self._detector_factory(bridge),
                interval_s=float(settings.effective_poll_interval_s),
                selected=self._state.device,
            )
            session.thread = threading.Thread(
                target=self._run,
                args=(session,),
                name="nowactivity-monitor",
                daemon=True,
            )
            self._session = session
            self._publish(MonitorState(devices=self._state.devices, device=self._state.device, running=True))
            self._log.info(
                "Monitoring started (adb=%s, interval=%ss)", adb_path, settings.effective_poll_interval_s
            )
            session.thread.start()

    def stop(self) -> None:
        """Stop the worker; returns once no cycle is running any more."""
        with self._lifecycle_lock:
            session = self._session
            if session is None:
                return
            self._session = None
            session.stop.set()
            session.requests.put(_STOP)
            thread = session.thread
            if thread is not None and thread is not threading.current_thread():
                thread.join(self._stop_grace_s)
                if thread.is_alive():
                    self._log.debug("Cycle still running after %.1fs, killing adb", self._stop_grace_s)
                    close = getattr(session.bridge, "close", None)
                    if callable(close):
                        close()
                    thread.join(self._command_timeout_s)
                    if thread.is_alive():
                        self._log.warning("Monitor worker did not exit; it will not publish again")
            self._publish(replace(self._state, running=False))
            self._log.info("Monitoring stopped")

    def restart(self) -> None:
        """Re-read settings and the adb path, then start a fresh session."""
        self.stop()
        self.start()

    def dispose(self) -> None:
        self.stop()
        with self._lifecycle_lock:
            self._disposed = True

    def select_device(self, device_id: DeviceId) -> None:
        """Ask the worker to switch devices and re-detect immediately."""
        session = self._session
        if session is None:
            self._log.debug("select_device(%s) ignored; monitor not running", device_id)
            return
        session.requests.put((_SELECT, device_id))

    def refresh(self) -> None:
        """Ask the worker for an out-of-band cycle."""
        session = self._session
        if session is None:
            return
        session.requests.put((_REFRESH, None))

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------
    def _run(self, session: _Session) -> None:
        while not session.stop.is_set():
            if not self._run_cycle(session):
                return
            if not self._wait_for_next_cycle(session):
                return

    def _wait_for_next_cycle(self, session: _Session) -> bool:
        """Sleep until the interval elapses or a request arrives.

        Returns False when the session was asked to stop.
        """
        deadline = time.monotonic() + session.interval_s
        while not session.stop.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return True
            try:
                request = session.requests.get(timeout=remaining)
            except queue.Empty:
                return True
            if not self._apply_requests(session, request):
                return False
            return True
        return False

    def _apply_requests(self, session: _Session, first: Any) -> bool:
        pending = [first]
        while True:
            try:
                pending.append(session.requests.get_nowait())
            except queue.Empty:
                break
        for request in pending:
            if request is _STOP:
                return False
            kind, value = request
            if kind == _SELECT:
                session.selected = value
        return True

    def _run_cycle(self, session: _Session) -> bool:
        """Run one detection cycle; returns False when the worker should exit."""
        settings = self._settings_provider()
        if not settings.enabled:
            if not session.stop.is_set():
                self._publish(MonitorState(result=DetectionResult.disabled()))
            self._log.info("Activity monitor disabled; worker exiting")
            return False
        self._history.max_size = settings.effective_history_size

        now = self._clock()
        try:
            outcome = session.detector(session.selected)
        except Exception as exc:
            self._log.warning("Detection cycle failed: %s", exc, exc_info=self._log.isEnabledFor(logging.DEBUG))
            state = replace(
                self._state,
                result=DetectionResult.error(describe_cycle_error(exc)),
                updated_at=now,
                running=True,
            )
        else:
            session.selected = outcome.device
            state = MonitorState(
                result=outcome.result,
                device=outcome.device,
                devices=outcome.devices,
                updated_at=now,
                running=True,
            )

        if session.stop.is_set():
            return False

        activity = state.result.activity
        if activity is not None and activity != session.last_activity:
            self._history.record(activity, now)
            self._log.info("Foreground activity: %s", activity)
        session.last_activity = activity
        self._publish(state)
        return True

    def _publish(self, state: MonitorState) -> None:
        self._state = state
        listener = self._on_state
        if listener is None:
            return
        try:
            listener(state)
        except Exception:
            self._log.exception("State listener failed")


__all__ = ["ActivityMonitor", "DEFAULT_STOP_GRACE_S", "build_detector"]
