"""Ordered strategy chain that extracts the foreground activity from adb.

Each ``ActivityStrategy`` issues one or more shell queries and runs a pure
parser over the output. Strategies are tried in priority order and the chain
commits to the first one that yields a component. Window-manager state is
tried first because it is the most authoritative and the least laggy; log and
recents based strategies come last because they can report stale or
background activities.

Call context:
    ``DetectActivity`` calls ``ExtractForegroundActivity`` once per cycle on
    the monitor worker thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from nowactivity.domain import dumpsys
from nowactivity.domain.component_name import normalize_component
from nowactivity.domain.entities import ActivityId, DeviceId
from nowactivity.domain.ports import BridgePort

Parser = Callable[[str], Optional[str]]
Query = Tuple[str, ...]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityStrategy:
    """One way of asking adb for the foreground activity."""

    name: str
    queries: Tuple[Query, ...]
    parse: Parser

    def try_extract(self, bridge: BridgePort, device_id: Optional[DeviceId]) -> Optional[str]:
        """Return the raw ``pkg/cls`` token, or ``None`` when nothing parsed.

        A query that raises counts as empty output; later queries of the same
        strategy still run.
        """
        for query in self.queries:
            try:
                output = bridge.shell(device_id, query)
            except Exception as exc:
                _log.debug("Strategy %s query %s failed: %s", self.name, " ".join(query), exc)
                continue
            if not output or not output.strip():
                continue
            component = self.parse(output)
            if component:
                return component
        return None


WINDOW = ActivityStrategy(
    name="window",
    queries=(("dumpsys", "window", "windows"),),
    parse=dumpsys.parse_window_focus,
)
ACTIVITIES = ActivityStrategy(
    name="activities",
    queries=(("dumpsys", "activity", "activities"),),
    parse=dumpsys.parse_resumed_activity,
)
TOP = ActivityStrategy(
    name="top",
    queries=(("dumpsys", "activity", "top"),),
    parse=dumpsys.parse_top_activity,
)
STACK = ActivityStrategy(
    name="stack",
    queries=(("am", "stack", "list"),),
    parse=dumpsys.parse_stack_list,
)
CURRENT = ActivityStrategy(
    name="current",
    queries=(("am", "get-current"),),
    parse=dumpsys.parse_current_activity,
)
LOGCAT = ActivityStrategy(
    name="logcat",
    queries=(
        (
            "logcat",
            "-d",
            "-t",
            "100",
            "ActivityManager:I",
            "ActivityTaskManager:I",
            "*:S",
        ),
    ),
    parse=dumpsys.parse_logcat,
)
RECENTS = ActivityStrategy(
    name="recents",
    queries=(("dumpsys", "activity", "recents"),),
    parse=dumpsys.parse_recents,
)

DEFAULT_STRATEGIES: Tuple[ActivityStrategy, ...] = (
    WINDOW,
    ACTIVITIES,
    TOP,
    STACK,
    CURRENT,
    LOGCAT,
    RECENTS,
)


@dataclass(frozen=True)
class ExtractionHit:
    """Normalized activity plus the strategy and raw token that produced it."""

    activity: ActivityId
    strategy: str
    raw: str


@dataclass
class ExtractForegroundActivity:
    """Run the strategy chain for one device and normalize the first hit."""

    bridge: BridgePort
    strategies: Sequence[ActivityStrategy] = field(default=DEFAULT_STRATEGIES)

    def __call__(self, device_id: Optional[DeviceId]) -> Optional[ActivityId]:
        hit = self.extract(device_id)
        return hit.activity if hit else None

    def extract(self, device_id: Optional[DeviceId]) -> Optional[ExtractionHit]:
        for strategy in self.strategies:
            try:
                raw = strategy.try_extract(self.bridge, device_id)
            except Exception as exc:
                _log.debug("Strategy %s raised: %s", strategy.name, exc)
                continue
            if not raw:
                continue
            try:
                activity = normalize_component(raw)
            except ValueError:
                _log.debug("Strategy %s produced unusable component %r", strategy.name, raw)
                continue
            _log.debug("Strategy %s matched %s -> %s", strategy.name, raw, activity)
            return ExtractionHit(activity=activity, strategy=strategy.name, raw=raw)
        return None


__all__ = [
    "ActivityStrategy",
    "DEFAULT_STRATEGIES",
    "ExtractForegroundActivity",
    "ExtractionHit",
]
