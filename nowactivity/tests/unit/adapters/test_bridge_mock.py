from __future__ import annotations

from nowactivity.adapters.bridge_mock import BridgeMock

WINDOW_QUERY = ("dumpsys", "window", "windows")


def test_demo_bridge_does_not_record_queries() -> None:
    bridge = BridgeMock.demo()

    for _ in range(50):
        assert "mCurrentFocus" in bridge.shell("emulator-5554", WINDOW_QUERY)

    assert bridge.calls == []


def test_scripted_bridge_records_queries() -> None:
    bridge = BridgeMock(responses={WINDOW_QUERY: "dump"})

    bridge.shell("emu-1", WINDOW_QUERY)

    assert bridge.calls == [("emu-1", WINDOW_QUERY)]


def test_list_response_repeats_last_item() -> None:
    bridge = BridgeMock(responses={WINDOW_QUERY: ["first", "last"]})

    assert [bridge.shell(None, WINDOW_QUERY) for _ in range(3)] == ["first", "last", "last"]
