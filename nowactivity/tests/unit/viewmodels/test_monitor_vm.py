from __future__ import annotations

from datetime import datetime

import pytest

from nowactivity.domain.entities import ActivityId, DetectionResult, HistoryEntry, MonitorState
from nowactivity.domain.settings import MonitorSettings
from nowactivity.viewmodels.monitor_vm import MonitorVM

MAIN = ActivityId("com.app.ui.MainActivity")


def _found_state() -> MonitorState:
    return MonitorState(result=DetectionResult.found(MAIN), device="emu-1", devices=("emu-1", "emu-2"), running=True)


def test_apply_state_builds_dto() -> None:
    vm = MonitorVM()
    vm.apply_settings(MonitorSettings(poll_interval_s=5))
    history = [HistoryEntry(MAIN, datetime(2024, 5, 1, 8, 0, 0))]

    dto = vm.apply_state(_found_state(), history)

    assert dto["activity"] == "com.app.ui.MainActivity"
    assert dto["has_activity"] is True
    assert dto["short_name"] == "MainActivity"
    assert dto["devices"] == ["emu-1", "emu-2"]
    assert dto["status"] == "Status: Active (Refresh: 5s) | Device: emu-1"
    assert dto["status_bar"] == "Android: com.app.ui.MainActivity"
    assert dto["history"] == [("com.app.ui.MainActivity", "08:00:00 - com.app.ui.MainActivity")]


def test_copy_text_full_and_short() -> None:
    vm = MonitorVM()
    vm.apply_state(_found_state())

    assert vm.copy_text() == "com.app.ui.MainActivity"
    assert vm.copy_text(full=False) == "MainActivity"


def test_copy_text_without_activity() -> None:
    vm = MonitorVM()
    vm.apply_state(MonitorState(result=DetectionResult.no_activity(), device="emu-1", devices=("emu-1",)))

    assert vm.copy_text() is None
    assert vm.short_name is None


def test_apply_state_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        MonitorVM().apply_state({"result": "found"})
