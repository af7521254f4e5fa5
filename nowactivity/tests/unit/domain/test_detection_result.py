from __future__ import annotations

import pytest

from nowactivity.domain.entities import (
    ActivityId,
    DetectionResult,
    MonitorState,
    PENDING,
)


def test_found_carries_activity() -> None:
    result = DetectionResult.found(ActivityId("com.app.Main"))
    assert result.is_found
    assert result.activity == ActivityId("com.app.Main")
    assert result.reason is None


def test_error_requires_reason() -> None:
    assert DetectionResult.error("boom").reason == "boom"
    with pytest.raises(ValueError):
        DetectionResult.error("")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "found"},
        {"kind": "no_activity", "activity": ActivityId("com.app.Main")},
        {"kind": "no_device", "reason": "nope"},
        {"kind": "mystery"},
    ],
)
def test_partially_populated_variants_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        DetectionResult(**kwargs)


def test_terminal_variants() -> None:
    assert DetectionResult.disabled().is_terminal
    assert DetectionResult.not_found().is_terminal
    assert not DetectionResult.no_device().is_terminal


def test_initial_monitor_state_is_pending() -> None:
    state = MonitorState()
    assert state.result.kind == PENDING
    assert state.activity is None
    assert state.running is False
    assert state.devices == ()
