"""Translate unexpected exceptions into short, user-facing reasons."""

from __future__ import annotations


from typing import Optional

from nowactivity.adapters.command_errors import CommandError, CommandTimeoutError
from nowactivity.domain.ports import UseCaseError

MAX_REASON_LENGTH = 160


def describe_cycle_error(exc: BaseException) -> str:
    """Return a one-line reason for an ``error`` detection result.

    Args:
        exc (BaseException): Failure caught at the cycle boundary.

    Returns:
        str: Non-empty reason, capped at ``MAX_REASON_LENGTH`` characters.
    """
    if isinstance(exc, UseCaseError):
        text = exc.message
    elif isinstance(exc, CommandTimeoutError):
        text = "adb command timed out"
    elif isinstance(exc, CommandError):
        text = f"adb command failed: {exc}"
    else:
        text = str(exc).strip()
    text = " ".join((text or "").split())
    if not text:
        text = type(exc).__name__
    return _truncate(text)


def map_storage_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map settings persistence failures to stable UseCaseError codes."""
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, PermissionError):
        return UseCaseError(default_code, "Settings file is not accessible (permission denied).")
    if isinstance(exc, ValueError):
        return UseCaseError(default_code, _compose("Settings file is invalid", str(exc)))
    if isinstance(exc, OSError):
        return UseCaseError(default_code, _compose("Settings file I/O failed", exc.strerror or str(exc)))
    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    return f"{base}."


def _truncate(text: str) -> str:
    if len(text) <= MAX_REASON_LENGTH:
        return text
    return text[: MAX_REASON_LENGTH - 3] + "..."


__all__ = ["describe_cycle_error", "map_storage_error"]
