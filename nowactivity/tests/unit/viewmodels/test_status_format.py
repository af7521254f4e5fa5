from __future__ import annotations

from datetime import datetime

from nowactivity.domain.entities import ActivityId, DetectionResult, HistoryEntry, MonitorState
from nowactivity.viewmodels.status_format import (
    format_timestamp,
    history_row,
    result_label,
    status_bar_text,
    status_line,
    status_tooltip,
)

MAIN = ActivityId("com.app.Main")


def _state(result, device="emu-1", devices=("emu-1",), running=True) -> MonitorState:
    return MonitorState(result=result, device=device, devices=devices, running=running)


def test_result_labels() -> None:
    assert result_label(DetectionResult.found(MAIN)) == "com.app.Main"
    assert result_label(DetectionResult.no_activity()) == "No Activity"
    assert result_label(DetectionResult.no_device()) == "No Device"
    assert result_label(DetectionResult.not_found()) == "ADB not found"
    assert result_label(DetectionResult.error("boom")) == "Error: boom"


def test_status_line_active() -> None:
    line = status_line(_state(DetectionResult.found(MAIN)), 3)
    assert line == "Status: Active (Refresh: 3s) | Device: emu-1"


def test_status_line_problems() -> None:
    assert status_line(_state(DetectionResult.not_found(), None, (), False), 1) == "Status: ADB not found"
    assert status_line(_state(DetectionResult.no_device(), None, ()), 1) == "Status: No devices connected"
    assert status_line(_state(DetectionResult.no_activity()), 1) == "Status: No activity detected"
    assert status_line(_state(DetectionResult.error("boom")), 1) == "Status: Error - boom"
    assert status_line(_state(DetectionResult.disabled(), None, (), False), 1) == "Status: Disabled"
    assert status_line(MonitorState(), 1) == "Status: Initializing..."
    assert status_line(MonitorState(running=True), 1) == "Status: Monitoring..."


def test_status_bar_and_tooltip() -> None:
    state = _state(DetectionResult.found(MAIN))

    assert status_bar_text(state) == "Android: com.app.Main"
    tooltip = status_tooltip(state, show_device_info=True, poll_interval_s=2)
    assert tooltip.splitlines()[0] == "Current Activity: com.app.Main"
    assert "Device: emu-1" in tooltip
    assert tooltip.splitlines()[-1] == "Refresh interval: 2s"
    assert "Device:" not in status_tooltip(state, show_device_info=False, poll_interval_s=2)


def test_history_row_format() -> None:
    entry = HistoryEntry(MAIN, datetime(2024, 5, 1, 9, 5, 7))
    assert history_row(entry) == "09:05:07 - com.app.Main"
    assert format_timestamp(None) == "-"
