from __future__ import annotations

from dataclasses import asdict, fields, replace
from typing import Any, Callable, Mapping, Optional

from ..domain.history import MAX_HISTORY_SIZE, MIN_HISTORY_SIZE
from ..domain.settings import MAX_POLL_INTERVAL_S, MIN_POLL_INTERVAL_S, MonitorSettings
from ..utils.logging import env_forces_debug

_CONFIG_KEYS = tuple(f.name for f in fields(MonitorSettings))


def _default_debug_logging() -> bool:
    return env_forces_debug()


class SettingsVM:
    """Keeps monitor settings UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[MonitorSettings] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or MonitorSettings()
        self.on_save = on_save
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self.config = replace(self.config, enabled=self._coerce_bool(value))

    @property
    def poll_interval_s(self) -> int:
        return self.config.poll_interval_s

    @poll_interval_s.setter
    def poll_interval_s(self, value: int) -> None:
        coerced = self._coerce_bounded_int("poll_interval_s", value, MIN_POLL_INTERVAL_S, MAX_POLL_INTERVAL_S)
        self.config = replace(self.config, poll_interval_s=coerced)

    @property
    def show_device_info(self) -> bool:
        return self.config.show_device_info

    @show_device_info.setter
    def show_device_info(self, value: bool) -> None:
        self.config = replace(self.config, show_device_info=self._coerce_bool(value))

    @property
    def history_size(self) -> int:
        return self.config.history_size

    @history_size.setter
    def history_size(self, value: int) -> None:
        coerced = self._coerce_bounded_int("history_size", value, MIN_HISTORY_SIZE, MAX_HISTORY_SIZE)
        self.config = replace(self.config, history_size=coerced)

    @property
    def use_custom_adb_path(self) -> bool:
        return self.config.use_custom_adb_path

    @use_custom_adb_path.setter
    def use_custom_adb_path(self, value: bool) -> None:
        self.config = replace(self.config, use_custom_adb_path=self._coerce_bool(value))

    @property
    def custom_adb_path(self) -> str:
        return self.config.custom_adb_path

    @custom_adb_path.setter
    def custom_adb_path(self, value: str) -> None:
        self.config = replace(self.config, custom_adb_path=self._coerce_optional_str(value))

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.use_custom_adb_path and not self.custom_adb_path:
            return False
        return True

    def validation_error(self) -> Optional[str]:
        if self.use_custom_adb_path and not self.custom_adb_path:
            return "Custom adb path cannot be empty when enabled."
        return None

    def to_settings(self) -> MonitorSettings:
        """Frozen settings snapshot handed to the monitor."""
        return self.config

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_flat_keys = {*_CONFIG_KEYS, "debug_logging"}
        unknown = set(payload.keys()) - allowed_flat_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {}
        for cfg_key in _CONFIG_KEYS:
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_custom_adb_path(self, path: str) -> None:
        self.custom_adb_path = path

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging = self._coerce_bool(enabled)

    def cmd_save(self) -> None:
        error = self.validation_error()
        if error:
            raise ValueError(error)
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key in {"enabled", "show_device_info", "use_custom_adb_path"}:
            return self._coerce_bool(raw)
        if key == "poll_interval_s":
            return self._coerce_bounded_int(key, raw, MIN_POLL_INTERVAL_S, MAX_POLL_INTERVAL_S)
        if key == "history_size":
            return self._coerce_bounded_int(key, raw, MIN_HISTORY_SIZE, MAX_HISTORY_SIZE)
        if key == "custom_adb_path":
            return self._coerce_optional_str(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_bounded_int(name: str, value: Any, low: int, high: int) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if coerced < low or coerced > high:
            raise ValueError(f"{name} must be between {low} and {high}.")
        return coerced


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
