"""NiceGUI entrypoint for the foreground-activity panel."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List

from nicegui import app, run, ui

from nowactivity.domain.history import MAX_HISTORY_SIZE, MIN_HISTORY_SIZE
from nowactivity.domain.ports import UseCaseError
from nowactivity.domain.settings import MAX_POLL_INTERVAL_S, MIN_POLL_INTERVAL_S
from nowactivity.utils import logging as logging_utils
from nowactivity.web_ui.runtime import WebRuntime

REFRESH_S = 0.5


def _install_theme() -> None:
    """Install global CSS/theme tokens for the panel."""
    ui.add_head_html(
        """
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&family=IBM+Plex+Mono:wght@400;500&display=swap" rel="stylesheet">
<style>
:root {
  --na-bg-a: #eef6ee;
  --na-bg-b: #f4f1fa;
  --na-card: rgba(255, 255, 255, 0.88);
  --na-border: #cfdccf;
  --na-accent: #3ddc84;
  --na-muted: #5b6770;
}
body {
  font-family: 'Space Grotesk', sans-serif;
  background: radial-gradient(circle at top left, var(--na-bg-a), var(--na-bg-b));
}
.na-page {
  max-width: 920px;
  margin: 0 auto;
  padding: 14px;
}
.na-card {
  background: var(--na-card);
  border: 1px solid var(--na-border);
  border-radius: 14px;
}
.na-mono { font-family: 'IBM Plex Mono', monospace; }
.na-muted { color: var(--na-muted); font-style: italic; }
.na-history-row { cursor: pointer; }
.na-history-row:hover { background: rgba(61, 220, 132, 0.12); }
</style>
        """
    )


def _notify_error(exc: Exception) -> None:
    """Render exceptions as concise NiceGUI toasts."""
    message = exc.message if isinstance(exc, UseCaseError) else str(exc)
    ui.notify(message, color="negative", close_button="OK")


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @ui.page("/")
    def index() -> None:
        _install_theme()
        settings_form: Dict[str, Any] = runtime.settings_payload()
        shown_devices: Dict[str, List[str]] = {"value": []}

        def copy(full: bool) -> None:
            text = runtime.copy_text(full=full)
            if text:
                ui.clipboard.write(text)
                render_status.refresh()

        def copy_history(activity: str) -> None:
            ui.clipboard.write(activity)
            runtime.flash(f"Copied: {activity}")
            render_status.refresh()

        def on_device_change(event: Any) -> None:
            if event.value and event.value != runtime.view()["device"]:
                runtime.select_device(str(event.value))

        def clear_history() -> None:
            runtime.clear_history()
            render_history.refresh()

        async def save_settings() -> None:
            # restarting the monitor joins its worker; keep that off the event loop
            try:
                await run.io_bound(runtime.apply_settings, dict(settings_form))
            except (UseCaseError, ValueError) as exc:
                _notify_error(exc)
                settings_form.update(runtime.settings_payload())
                return
            ui.notify("Settings saved", color="positive")

        @ui.refreshable
        def render_header() -> None:
            dto = runtime.view()
            with ui.row().classes("w-full justify-between items-center na-card p-3"):
                ui.label("Android Now Activity").classes("text-h5")
                ui.label(dto["status_bar"]).classes("na-mono text-caption").tooltip(dto["tooltip"])

        @ui.refreshable
        def render_current() -> None:
            dto = runtime.view()
            with ui.column().classes("w-full"):
                if dto["has_activity"]:
                    label = ui.label(dto["activity"]).classes("text-h6 na-mono cursor-pointer")
                    label.on("click", lambda _: copy(False))
                    label.on("dblclick", lambda _: copy(True))
                    ui.label("Click to copy the short name, double-click to copy the full name").classes(
                        "text-caption na-muted"
                    )
                else:
                    ui.label(dto["activity"]).classes("text-h6 na-muted")

        @ui.refreshable
        def render_history() -> None:
            rows = runtime.view()["history"]
            if not rows:
                ui.label("No activities recorded yet").classes("na-muted")
                return
            with ui.column().classes("w-full gap-0"):
                for activity, text in rows:
                    ui.label(text).classes("na-mono na-history-row w-full q-px-sm").on(
                        "dblclick", lambda _, a=activity: copy_history(a)
                    )

        @ui.refreshable
        def render_status() -> None:
            ui.label(runtime.view()["status"]).classes("na-mono text-caption")

        with ui.column().classes("na-page w-full"):
            render_header()
            with ui.card().classes("na-card w-full"):
                with ui.row().classes("w-full items-center q-gutter-sm"):
                    ui.label("Device:")
                    device_select = ui.select([], label="Device", on_change=on_device_change).props(
                        "dense outlined"
                    ).classes("w-64")
                    ui.button("Refresh", on_click=runtime.refresh, color="primary")
                    ui.button("Copy", on_click=lambda: copy(True))
                ui.label("Current Activity").classes("text-subtitle1")
                render_current()

            with ui.card().classes("na-card w-full"):
                with ui.row().classes("w-full justify-between items-center"):
                    ui.label("Recent Activities").classes("text-subtitle1")
                    ui.button("Clear", on_click=clear_history).props("flat dense")
                render_history()

            with ui.expansion("Settings").classes("na-card w-full"):
                with ui.column().classes("w-full q-gutter-sm q-pa-sm"):
                    ui.switch(
                        "Enable activity monitoring",
                        value=settings_form["enabled"],
                        on_change=lambda e: settings_form.__setitem__("enabled", bool(e.value)),
                    )
                    with ui.row().classes("q-gutter-sm"):
                        ui.number(
                            "Refresh interval (s)",
                            value=settings_form["poll_interval_s"],
                            min=MIN_POLL_INTERVAL_S,
                            max=MAX_POLL_INTERVAL_S,
                            on_change=lambda e: settings_form.__setitem__("poll_interval_s", e.value),
                        ).props("dense outlined")
                        ui.number(
                            "History size",
                            value=settings_form["history_size"],
                            min=MIN_HISTORY_SIZE,
                            max=MAX_HISTORY_SIZE,
                            on_change=lambda e: settings_form.__setitem__("history_size", e.value),
                        ).props("dense outlined")
                    ui.checkbox(
                        "Show device info",
                        value=settings_form["show_device_info"],
                        on_change=lambda e: settings_form.__setitem__("show_device_info", bool(e.value)),
                    )
                    ui.checkbox(
                        "Use custom adb path",
                        value=settings_form["use_custom_adb_path"],
                        on_change=lambda e: settings_form.__setitem__("use_custom_adb_path", bool(e.value)),
                    )
                    ui.input(
                        "adb path",
                        value=settings_form["custom_adb_path"],
                        on_change=lambda e: settings_form.__setitem__("custom_adb_path", str(e.value or "")),
                    ).props("dense outlined").classes("w-96")
                    ui.checkbox(
                        "Enable debug logging",
                        value=settings_form["debug_logging"],
                        on_change=lambda e: settings_form.__setitem__("debug_logging", bool(e.value)),
                    )
                    ui.button("Save", on_click=save_settings, color="primary")
                    if runtime.settings_error:
                        ui.label(runtime.settings_error).classes("text-negative text-caption")

            render_status()

            def periodic_refresh() -> None:
                dto = runtime.view()
                if dto["devices"] != shown_devices["value"]:
                    shown_devices["value"] = list(dto["devices"])
                    device_select.options = shown_devices["value"]
                    device_select.update()
                if device_select.value != dto["device"]:
                    device_select.value = dto["device"]
                render_header.refresh()
                render_current.refresh()
                render_history.refresh()
                render_status.refresh()

            ui.timer(REFRESH_S, periodic_refresh)


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the NowActivity NiceGUI panel.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--demo", action="store_true", help="use a scripted device instead of adb")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    logging_utils.configure_root(logging.INFO)
    runtime = WebRuntime(demo=args.demo)
    if args.smoke_test:
        payload = runtime.settings_payload()
        print("web-smoke-ok", sorted(payload.keys()))
        return
    app.on_startup(runtime.start)
    app.on_shutdown(runtime.shutdown)
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="Android Now Activity",
        reload=args.reload,
        show=False,
    )


if __name__ == "__main__":
    main()
