from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..domain.entities import HistoryEntry, MonitorState
from ..domain.settings import MonitorSettings
from .status_format import (
    history_row,
    result_label,
    status_bar_text,
    status_line,
    status_tooltip,
)

HistoryRow = Tuple[str, str]


@dataclass
class MonitorVM:
    """Turns monitor snapshots into the DTO the panel and status bar render."""

    last_state: MonitorState = field(default_factory=MonitorState)
    settings: MonitorSettings = field(default_factory=MonitorSettings)
    history_rows: List[HistoryRow] = field(default_factory=list)

    def apply_settings(self, settings: MonitorSettings) -> None:
        self.settings = settings

    def apply_state(self, state: MonitorState, history: Sequence[HistoryEntry] = ()) -> Dict:
        """Consume the latest snapshot plus history and return the panel DTO."""
        if not isinstance(state, MonitorState):
            raise TypeError("MonitorVM.apply_state requires a MonitorState.")

        self.last_state = state
        self.history_rows = [(str(entry.activity), history_row(entry)) for entry in history]
        return self.build_dto()

    def build_dto(self) -> Dict:
        state = self.last_state
        interval = self.settings.effective_poll_interval_s
        return {
            "activity": result_label(state.result),
            "has_activity": state.result.is_found,
            "short_name": self.short_name,
            "device": state.device,
            "devices": list(state.devices),
            "status": status_line(state, interval),
            "status_bar": status_bar_text(state),
            "tooltip": status_tooltip(
                state,
                show_device_info=self.settings.show_device_info,
                poll_interval_s=interval,
            ),
            "history": list(self.history_rows),
            "running": state.running,
        }

    # ------------------------------------------------------------------
    # Copy helpers
    # ------------------------------------------------------------------
    @property
    def short_name(self) -> Optional[str]:
        activity = self.last_state.activity
        return activity.short_name if activity is not None else None

    def copy_text(self, *, full: bool = True) -> Optional[str]:
        """Text to put on the clipboard, or None when nothing was detected."""
        activity = self.last_state.activity
        if activity is None:
            return None
        return str(activity) if full else activity.short_name


__all__ = ["HistoryRow", "MonitorVM"]
