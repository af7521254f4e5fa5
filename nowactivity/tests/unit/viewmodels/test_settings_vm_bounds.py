from __future__ import annotations

import pytest

from nowactivity.domain.settings import MonitorSettings
from nowactivity.viewmodels.settings_vm import SettingsVM, default_settings_payload


def test_defaults_match_monitor_settings() -> None:
    payload = default_settings_payload()

    assert payload["enabled"] is True
    assert payload["poll_interval_s"] == 1
    assert payload["history_size"] == 10
    assert payload["show_device_info"] is True
    assert payload["use_custom_adb_path"] is False
    assert payload["custom_adb_path"] == ""
    assert "debug_logging" in payload


@pytest.mark.parametrize("value", [0, 61, -5, "abc", None, True])
def test_poll_interval_out_of_bounds_is_rejected(value) -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError):
        vm.poll_interval_s = value
    assert vm.poll_interval_s == 1


@pytest.mark.parametrize("value", [4, 51])
def test_history_size_out_of_bounds_is_rejected(value) -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError):
        vm.history_size = value


def test_apply_dict_coerces_flat_keys() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "enabled": "false",
            "poll_interval_s": "5",
            "history_size": 25.0,
            "show_device_info": 0,
            "use_custom_adb_path": "yes",
            "custom_adb_path": "  /opt/sdk/adb  ",
            "debug_logging": "on",
        }
    )

    assert vm.to_settings() == MonitorSettings(
        enabled=False,
        poll_interval_s=5,
        show_device_info=False,
        history_size=25,
        use_custom_adb_path=True,
        custom_adb_path="/opt/sdk/adb",
    )
    assert vm.debug_logging is True


def test_apply_dict_rejects_unknown_keys() -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError, match="refreshInterval"):
        vm.apply_dict({"refreshInterval": 3})


def test_apply_dict_is_all_or_nothing() -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError):
        vm.apply_dict({"history_size": 20, "poll_interval_s": 99})
    assert vm.history_size == 10


def test_cmd_save_validates_custom_path() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)
    vm.use_custom_adb_path = True

    assert not vm.is_valid()
    with pytest.raises(ValueError):
        vm.cmd_save()
    assert saved == []

    vm.set_custom_adb_path("/opt/sdk/adb")
    vm.cmd_save()
    assert saved[0]["custom_adb_path"] == "/opt/sdk/adb"


def test_roundtrip_through_dict() -> None:
    vm = SettingsVM()
    vm.apply_dict({"poll_interval_s": 12, "history_size": 50})

    other = SettingsVM()
    other.apply_dict(vm.to_dict())

    assert other.to_settings() == vm.to_settings()
