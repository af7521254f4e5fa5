from __future__ import annotations

import logging

import pytest

from nowactivity.utils.logging import (
    apply_debug_setting,
    configure_root,
    env_forces_debug,
    env_level,
)


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_env_level_accepts_names_and_numbers() -> None:
    assert env_level({"NOWACTIVITY_LOG_LEVEL": "warning"}) == logging.WARNING
    assert env_level({"NOWACTIVITY_LOG_LEVEL": " 15 "}) == 15
    assert env_level({}) is None


def test_unknown_level_name_falls_back_to_debug_flags() -> None:
    assert env_level({"NOWACTIVITY_LOG_LEVEL": "chatty"}) is None
    assert env_level({"NOWACTIVITY_LOG_LEVEL": "chatty", "NOWACTIVITY_DEBUG": "yes"}) == logging.DEBUG


def test_explicit_level_wins_over_debug_flag() -> None:
    environ = {"NOWACTIVITY_LOG_LEVEL": "ERROR", "NOWACTIVITY_DEBUG_LOGGING": "1"}

    assert env_level(environ) == logging.ERROR
    assert env_forces_debug(environ) is False
    assert env_forces_debug({"NOWACTIVITY_DEBUG_LOGGING": "on"}) is True


def test_configure_root_uses_caller_level_without_overrides() -> None:
    assert configure_root(logging.WARNING, environ={}) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("asyncio").level == logging.WARNING


def test_debug_setting_follows_toggle_unless_forced() -> None:
    assert apply_debug_setting(True, environ={}) == logging.DEBUG
    assert apply_debug_setting(False, environ={}) == logging.INFO
    assert apply_debug_setting(True, environ={"NOWACTIVITY_LOG_LEVEL": "ERROR"}) == logging.ERROR
    assert logging.getLogger().level == logging.ERROR
