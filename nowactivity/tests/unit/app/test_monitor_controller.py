from __future__ import annotations

import json
from pathlib import Path

import pytest

from nowactivity.adapters.storage_local import StorageLocal
from nowactivity.app.controller import (
    SETTINGS_DIR_ENV,
    MonitorController,
    default_settings_dir,
)
from nowactivity.domain.entities import NOT_FOUND
from nowactivity.domain.ports import UseCaseError
from nowactivity.tests.unit.app.helpers import wait_for


@pytest.fixture
def storage(tmp_path: Path) -> StorageLocal:
    return StorageLocal(root_dir=str(tmp_path))


def test_demo_controller_detects_scripted_screens(storage) -> None:
    controller = MonitorController(storage=storage, demo=True)
    controller.settings_vm.poll_interval_s = 60
    try:
        controller.start()
        assert wait_for(lambda: controller.snapshot()["has_activity"])
        dto = controller.snapshot()
        assert dto["activity"] == "com.example.shop.SplashActivity"
        assert dto["short_name"] == "SplashActivity"
        assert dto["device"] == "emulator-5554"
        assert dto["status"].startswith("Status: Active (Refresh: 60s)")
        assert dto["history"][0][0] == "com.example.shop.SplashActivity"
    finally:
        controller.dispose()


def test_missing_adb_reports_not_found(storage, tmp_path: Path) -> None:
    empty = tmp_path / "empty-path"
    empty.mkdir()
    controller = MonitorController(storage=storage, environ={"PATH": str(empty)})

    controller.start()

    assert controller.monitor.get_state().result.kind == NOT_FOUND
    assert controller.snapshot()["status"] == "Status: ADB not found"
    controller.dispose()


def test_load_settings_applies_stored_values(storage, tmp_path: Path) -> None:
    (tmp_path / "user_settings.json").write_text(
        json.dumps({"poll_interval_s": 7, "history_size": 30}), encoding="utf-8"
    )
    controller = MonitorController(storage=storage, demo=True)

    controller.load_settings()

    assert controller.settings_vm.poll_interval_s == 7
    assert controller.monitor_vm.settings.history_size == 30


def test_load_settings_rejects_out_of_range_values(storage, tmp_path: Path) -> None:
    (tmp_path / "user_settings.json").write_text(json.dumps({"poll_interval_s": 0}), encoding="utf-8")
    controller = MonitorController(storage=storage, demo=True)

    with pytest.raises(ValueError):
        controller.load_settings()


def test_load_settings_surfaces_storage_errors(storage, tmp_path: Path) -> None:
    (tmp_path / "user_settings.json").write_text("[]", encoding="utf-8")
    controller = MonitorController(storage=storage, demo=True)

    with pytest.raises(UseCaseError):
        controller.load_settings()


def test_save_settings_persists_and_restarts(storage, tmp_path: Path) -> None:
    controller = MonitorController(storage=storage, demo=True)
    try:
        controller.settings_vm.poll_interval_s = 4
        controller.save_settings()

        saved = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
        assert saved["poll_interval_s"] == 4
        assert controller.monitor.is_running
    finally:
        controller.dispose()


def test_clear_history_empties_snapshot_rows(storage) -> None:
    controller = MonitorController(storage=storage, demo=True)
    try:
        controller.start()
        assert wait_for(lambda: controller.snapshot()["history"])
        controller.clear_history()
        assert controller.monitor.get_history() == ()
    finally:
        controller.dispose()


def test_default_settings_dir_honors_env(tmp_path: Path) -> None:
    assert default_settings_dir({SETTINGS_DIR_ENV: str(tmp_path)}) == str(tmp_path)
    assert default_settings_dir({}).endswith(".nowactivity")
