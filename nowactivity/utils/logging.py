"""Root logger setup shared by the console watcher and the web panel.

``NOWACTIVITY_LOG_LEVEL`` names a level (``debug``, ``WARNING`` or a number)
and wins over everything else. ``NOWACTIVITY_DEBUG`` or
``NOWACTIVITY_DEBUG_LOGGING`` set to a truthy value forces DEBUG. Without
either, the caller's level and the saved debug toggle decide.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LEVEL_ENV = "NOWACTIVITY_LOG_LEVEL"
DEBUG_ENVS = ("NOWACTIVITY_DEBUG", "NOWACTIVITY_DEBUG_LOGGING")

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}
# NiceGUI's server stack is chatty at DEBUG.
_QUIET_LOGGERS = ("asyncio", "watchfiles", "uvicorn.access")


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or None when nothing is set.

    An unknown level name is ignored and the debug flags are consulted.
    """
    env = os.environ if environ is None else environ
    raw = (env.get(LEVEL_ENV) or "").strip()
    if raw:
        level = int(raw) if raw.isdigit() else logging.getLevelName(raw.upper())
        if isinstance(level, int):
            return level
    if any((env.get(name) or "").strip().lower() in _TRUTHY for name in DEBUG_ENVS):
        return logging.DEBUG
    return None


def env_forces_debug(environ: Optional[Mapping[str, str]] = None) -> bool:
    level = env_level(environ)
    return level is not None and level <= logging.DEBUG


def configure_root(level: int = logging.INFO, environ: Optional[Mapping[str, str]] = None) -> int:
    """Install the compact console handler once and set the root level.

    Returns the level in effect.
    """
    forced = env_level(environ)
    effective = level if forced is None else forced

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
    return effective


def apply_debug_setting(debug_enabled: bool, environ: Optional[Mapping[str, str]] = None) -> int:
    """Follow the saved debug toggle unless the environment forces a level."""
    level = env_level(environ)
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level
