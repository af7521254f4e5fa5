from __future__ import annotations
from dataclasses import dataclass
from typing import Dict
from ..domain.ports import StoragePort
from .error_mapping import map_storage_error


@dataclass
class LoadUserSettings:
    storage: StoragePort

    def __call__(self) -> Dict:
        try:
            return self.storage.load_user_settings()
        except Exception as e:
            raise map_storage_error(e, default_code="LOAD_SETTINGS_FAILED")


@dataclass
class SaveUserSettings:
    storage: StoragePort

    def __call__(self, payload: Dict) -> None:
        try:
            self.storage.save_user_settings(payload)
        except Exception as e:
            raise map_storage_error(e, default_code="SAVE_SETTINGS_FAILED")
