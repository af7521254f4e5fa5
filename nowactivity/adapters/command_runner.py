"""Bounded execution of short-lived external commands.

Every call spawns one child process in its own process group, drains
stdout and stderr, and waits at most ``timeout_s`` seconds. At the deadline
the whole group is killed, so helpers forked by the command (an adb server
starting up, for instance) cannot keep the pipes open. The drain after the
kill is bounded by ``KILL_DRAIN_S``; pipes still held after that are closed
and the direct child is reaped.

Dependencies:
    - ``subprocess`` for process management.

Call context:
    - ``AdbBridge`` issues every adb query through ``CommandRunner.run``.
    - ``ActivityMonitor`` calls ``close`` when disposal has to abandon an
      in-flight detection cycle.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
from typing import List, Sequence, Set

from .command_errors import (
    CommandError,
    CommandFailedError,
    CommandTimeoutError,
    describe_command,
    stderr_hint,
)

DEFAULT_TIMEOUT_S = 10.0
KILL_DRAIN_S = 1.0

if os.name == "nt":
    _GROUP_KWARGS = {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
else:
    _GROUP_KWARGS = {"start_new_session": True}


def _kill_group(proc: subprocess.Popen) -> None:
    """SIGKILL the process group led by ``proc`` (just ``proc`` on Windows)."""
    if proc.returncode is not None:
        # reaped already; the pid may belong to someone else now
        return
    if os.name == "nt":
        proc.kill()
        return
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        proc.kill()


def _reap(proc: subprocess.Popen) -> None:
    """Drain and reap a killed process without waiting on inherited pipes."""
    try:
        proc.communicate(timeout=KILL_DRAIN_S)
    except subprocess.TimeoutExpired:
        # a process outside the group still holds the pipes
        for stream in (proc.stdout, proc.stderr):
            if stream is not None:
                stream.close()
        proc.wait()


class CommandRunner:
    """Run external commands with a fixed wall-clock timeout."""

    def __init__(self, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.timeout_s = float(timeout_s)
        self._log = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._live: Set[subprocess.Popen] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def run(self, executable: str, args: Sequence[str]) -> str:
        """Return stdout of the command, or ``""`` on any failure.

        Spawn errors, non-zero exit codes and timeouts all collapse to an
        empty string; callers treat empty output as "try something else".
        """
        try:
            return self.run_checked(executable, args)
        except CommandError as exc:
            self._log.debug("%s", exc)
            return ""

    def run_checked(self, executable: str, args: Sequence[str]) -> str:
        """Run the command and raise ``CommandError`` subclasses on failure.

        Raises:
            CommandTimeoutError: The process exceeded ``timeout_s`` and was killed.
            CommandFailedError: Spawn failed, the runner is closed, or the
                exit code was non-zero.
        """
        command: List[str] = [str(executable), *[str(arg) for arg in args]]
        label = describe_command(command)
        if self._closed:
            raise CommandFailedError(f"Runner closed, skipped: {label}", command=command)

        try:
            proc = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                **_GROUP_KWARGS,
            )
        except (OSError, ValueError) as exc:
            raise CommandFailedError(f"Failed to start {label}: {exc}", command=command) from exc

        with self._lock:
            closed_meanwhile = self._closed
            if not closed_meanwhile:
                self._live.add(proc)
        if closed_meanwhile:
            _kill_group(proc)
            _reap(proc)
            raise CommandFailedError(f"Runner closed, killed: {label}", command=command)
        try:
            try:
                stdout, stderr = proc.communicate(timeout=self.timeout_s)
            except subprocess.TimeoutExpired as exc:
                _kill_group(proc)
                _reap(proc)
                raise CommandTimeoutError(
                    f"Timed out after {self.timeout_s:g}s: {label}", command=command
                ) from exc
        finally:
            with self._lock:
                self._live.discard(proc)

        if proc.returncode != 0:
            hint = stderr_hint(stderr)
            message = f"Exit code {proc.returncode}: {label}"
            if hint:
                message = f"{message} ({hint})"
            raise CommandFailedError(
                message,
                command=command,
                returncode=proc.returncode,
                stderr=stderr or "",
            )
        return stdout or ""

    def close(self) -> None:
        """Kill in-flight processes and reject further commands."""
        with self._lock:
            self._closed = True
            live = list(self._live)
        for proc in live:
            try:
                _kill_group(proc)
            except OSError:
                # Already exited between the snapshot and the kill.
                pass
        if live:
            self._log.debug("Killed %d in-flight command(s) on close", len(live))


__all__ = ["CommandRunner", "DEFAULT_TIMEOUT_S", "KILL_DRAIN_S"]
