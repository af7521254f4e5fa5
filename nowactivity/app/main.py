"""Console watcher: print every foreground-activity transition.

Run with ``python -m nowactivity.app.main``. ``--demo`` replays a scripted
device so the watcher can be tried without adb.
"""

from __future__ import annotations

import argparse
import logging
import threading
import time
from typing import List, Optional

from ..adapters.storage_local import StorageLocal
from ..domain.entities import MonitorState
from ..domain.ports import UseCaseError
from ..utils import logging as logging_utils
from ..viewmodels.settings_vm import SettingsVM
from ..viewmodels.status_format import format_timestamp, result_label
from .controller import MonitorController

_log = logging.getLogger(__name__)


class TransitionPrinter:
    """State listener that prints a line whenever the visible text changes."""

    def __init__(self, show_device: bool = True) -> None:
        self.show_device = show_device
        self._last: Optional[str] = None
        self._lock = threading.Lock()

    def format(self, state: MonitorState) -> str:
        line = f"{format_timestamp(state.updated_at)}  {result_label(state.result)}"
        if self.show_device and state.device:
            line += f"  [{state.device}]"
        return line

    def __call__(self, state: MonitorState) -> None:
        key = f"{state.result.kind}|{result_label(state.result)}|{state.device}"
        with self._lock:
            if key == self._last:
                return
            self._last = key
        print(self.format(state), flush=True)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Watch the foreground Android activity.")
    parser.add_argument("--demo", action="store_true", help="use a scripted device instead of adb")
    parser.add_argument("--interval", type=int, default=None, help="poll interval in seconds (1-60)")
    parser.add_argument("--device", default=None, help="serial of the device to watch")
    parser.add_argument("--adb", default=None, help="path to the adb executable")
    parser.add_argument("--settings-dir", default=None, help="directory holding user_settings.json")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def build_controller(args: argparse.Namespace, printer: TransitionPrinter) -> MonitorController:
    settings_vm = SettingsVM()
    storage = StorageLocal(root_dir=args.settings_dir) if args.settings_dir else None
    controller = MonitorController(settings_vm, storage=storage, demo=args.demo, on_state=printer)
    controller.load_settings()

    # Command-line flags win over stored settings but are not saved.
    if args.interval is not None:
        settings_vm.poll_interval_s = args.interval
    if args.adb:
        settings_vm.use_custom_adb_path = True
        settings_vm.custom_adb_path = args.adb
    if args.debug:
        settings_vm.set_debug_logging(True)
    printer.show_device = settings_vm.show_device_info
    return controller


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    printer = TransitionPrinter()
    try:
        controller = build_controller(args, printer)
    except (UseCaseError, ValueError) as exc:
        message = exc.message if isinstance(exc, UseCaseError) else str(exc)
        print(f"error: {message}")
        return 2
    # transitions go to stdout; keep the log quiet unless debugging
    debug = controller.settings_vm.debug_logging
    logging_utils.configure_root(logging.DEBUG if debug else logging.WARNING)

    controller.start()
    if args.device:
        controller.select_device(args.device)
    if not controller.monitor.is_running:
        # disabled or adb missing; the printer already showed why
        controller.dispose()
        return 1

    try:
        while controller.monitor.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        _log.debug("Interrupted, stopping monitor")
    finally:
        controller.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
