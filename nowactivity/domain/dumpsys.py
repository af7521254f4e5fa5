"""Text parsers for the adb diagnostics used to find the foreground activity.

None of these formats are documented or stable across Android releases, so
every parser is a best-effort line scan that returns the raw ``pkg/cls``
token it found (or ``None``). Canonicalization happens later in
``normalize_component``.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .component_name import COMPONENT_PATTERN, find_component

WINDOW_FOCUS_MARKERS = ("mCurrentFocus", "mFocusedWindow")
RESUMED_ACTIVITY_MARKERS = (
    "mResumedActivity",
    "mFocusedActivity",
    "ResumedActivity",
    "topActivity",
)
STACK_MARKERS = ("visible=true", "topActivity")
LOGCAT_TAGS = ("ActivityManager", "ActivityTaskManager")
LOGCAT_EVENTS = ("START u", "Displayed", "Resuming")
RECENT_ENTRY_MARKER = "Recent #"

_ACTIVITY_RECORD = re.compile(rf"ACTIVITY\s+({COMPONENT_PATTERN.pattern})")
_LOGCAT_CMP = re.compile(r"cmp=([^\s}]+)")
_LOGCAT_DISPLAYED = re.compile(r"Displayed\s+([^:\s]+)")
_LOGCAT_RESUMING = re.compile(rf"Resuming.*?({COMPONENT_PATTERN.pattern})")


def _lines(text: str) -> List[str]:
    return (text or "").replace("\r", "").split("\n")


def _first_marked_component(lines: Iterable[str], markers: Sequence[str]) -> Optional[str]:
    for line in lines:
        if not any(marker in line for marker in markers):
            continue
        component = find_component(line)
        if component:
            return component
    return None


def parse_window_focus(text: str) -> Optional[str]:
    """Focused window from ``dumpsys window``.

    Example: ``mCurrentFocus=Window{1a2b u0 com.app/com.app.MainActivity}``.
    """
    return _first_marked_component(_lines(text), WINDOW_FOCUS_MARKERS)


def parse_resumed_activity(text: str) -> Optional[str]:
    """Resumed/focused activity from ``dumpsys activity activities``.

    Example: ``mResumedActivity: ActivityRecord{3c4d u0 com.app/.Main t12}``.
    """
    return _first_marked_component(_lines(text), RESUMED_ACTIVITY_MARKERS)


def parse_top_activity(text: str) -> Optional[str]:
    """Top activity from ``dumpsys activity top``.

    ``ACTIVITY com.app/.Main 5e6f pid=1234`` records win; otherwise any line
    mentioning an activity with a component token is accepted.
    """
    for line in _lines(text):
        if line.strip().startswith("ACTIVITY"):
            match = _ACTIVITY_RECORD.search(line)
            if match:
                return match.group(1)
        if "/" in line and "activity" in line.lower():
            component = find_component(line)
            if component:
                return component
    return None


def parse_stack_list(text: str) -> Optional[str]:
    """Visible task from the legacy ``am stack list`` output."""
    return _first_marked_component(_lines(text), STACK_MARKERS)


def parse_current_activity(text: str) -> Optional[str]:
    """Any line of ``am get-current`` naming an Activity with a component."""
    for line in _lines(text):
        if "Activity" in line and "/" in line:
            component = find_component(line)
            if component:
                return component
    return None


def parse_logcat(text: str) -> Optional[str]:
    """Most recent activity launch from an ActivityManager logcat tail.

    Lines are scanned newest first. On each line a ``cmp=`` launch intent
    beats ``Displayed`` which beats ``Resuming``.
    """
    for line in reversed(_lines(text)):
        if not any(tag in line for tag in LOGCAT_TAGS):
            continue
        if not any(event in line for event in LOGCAT_EVENTS):
            continue
        for pattern in (_LOGCAT_CMP, _LOGCAT_DISPLAYED, _LOGCAT_RESUMING):
            match = pattern.search(line)
            if match and "/" in match.group(1):
                component = find_component(match.group(1))
                if component:
                    return component
    return None


def parse_recents(text: str) -> Optional[str]:
    """First component of the first entry in ``dumpsys activity recents``.

    Newer releases print the ``Recent #0`` header without a component and put
    ``intent={... cmp=...}``/``realActivity=`` on the following lines, so the
    whole first entry block is searched.
    """
    in_entry = False
    for line in _lines(text):
        if RECENT_ENTRY_MARKER in line:
            if in_entry:
                break
            in_entry = True
        if not in_entry:
            continue
        component = find_component(line)
        if component:
            return component
    return None


__all__ = [
    "parse_current_activity",
    "parse_logcat",
    "parse_recents",
    "parse_resumed_activity",
    "parse_stack_list",
    "parse_top_activity",
    "parse_window_focus",
]
