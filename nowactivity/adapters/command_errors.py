from __future__ import annotations

from typing import Optional, Sequence


class CommandError(RuntimeError):
    """Base class for external command failures."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class CommandTimeoutError(CommandError):
    """Process did not finish within the timeout and was killed."""


class CommandFailedError(CommandError):
    """Process could not be spawned or exited with a non-zero status."""


def describe_command(command: Sequence[str], *, limit: int = 120) -> str:
    text = " ".join(str(part) for part in command)
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def stderr_hint(stderr: str, *, limit: int = 200) -> Optional[str]:
    """First non-empty stderr line, trimmed for log output."""
    for line in (stderr or "").splitlines():
        cleaned = line.strip()
        if cleaned:
            return cleaned[:limit]
    return None
