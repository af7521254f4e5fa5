"""Locate the adb executable on the local machine.

Search order:
    1. The custom path from settings, when enabled and the file exists.
    2. ``$ANDROID_HOME/platform-tools/adb`` then ``$ANDROID_SDK_ROOT/...``.
    3. The first ``adb`` on ``PATH``.

Call context:
    - ``ActivityMonitor.start`` calls the resolver once per session; ``None``
      puts the monitor in the ``not_found`` state.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional

from nowactivity.domain.settings import MonitorSettings

SDK_ENV_VARS = ("ANDROID_HOME", "ANDROID_SDK_ROOT")

_log = logging.getLogger(__name__)


def adb_executable_name(platform: str = sys.platform) -> str:
    return "adb.exe" if platform.startswith("win") else "adb"


class AdbLocator:
    """Callable ``AdbPathResolver`` reading settings through a provider."""

    def __init__(
        self,
        settings_provider: Callable[[], MonitorSettings],
        *,
        environ: Optional[Mapping[str, str]] = None,
        platform: str = sys.platform,
    ) -> None:
        self._settings_provider = settings_provider
        self._environ = environ
        self._platform = platform

    def __call__(self) -> Optional[str]:
        settings = self._settings_provider()
        environ = os.environ if self._environ is None else self._environ
        exe_name = adb_executable_name(self._platform)

        if settings.use_custom_adb_path and settings.custom_adb_path.strip():
            custom = Path(settings.custom_adb_path.strip()).expanduser()
            if custom.is_file():
                return str(custom.resolve())
            _log.warning("Custom adb path does not exist: %s", custom)

        for var in SDK_ENV_VARS:
            sdk_root = environ.get(var)
            if not sdk_root:
                continue
            candidate = Path(sdk_root) / "platform-tools" / exe_name
            if candidate.is_file():
                return str(candidate.resolve())

        found = shutil.which(exe_name, path=environ.get("PATH"))
        if found:
            return str(Path(found).resolve())
        _log.info("adb executable not found (checked settings, %s, PATH)", "/".join(SDK_ENV_VARS))
        return None


__all__ = ["AdbLocator", "adb_executable_name"]
