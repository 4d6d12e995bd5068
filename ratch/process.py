"""Process runner used by refresh workers.

Spawns the watched command, captures merged stdout/stderr as text, and waits
for exit. Failures surface as ``CommandError`` so the caller can turn them
into a display line.
"""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import CommandCancelled, CommandError

CANCEL_POLL_SECONDS = 0.05


@dataclass(frozen=True)
class CommandOutput:
    lines: tuple[str, ...]
    exit_code: int


def split_output_lines(text: str) -> tuple[str, ...]:
    """Split captured text on ``\\n``, keeping terminators.

    A trailing fragment without newline is kept as its own line.
    """
    if not text:
        return ()
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return tuple(lines)


def run_command(
    command: Sequence[str],
    cancel_event: threading.Event | None = None,
    poll_seconds: float = CANCEL_POLL_SECONDS,
) -> CommandOutput:
    """Run ``command`` to completion and return its combined output.

    When ``cancel_event`` is given the wait is sliced into ``poll_seconds``
    steps; once the event is set the child is killed, reaped, and
    ``CommandCancelled`` is raised.
    """
    if not command:
        raise CommandError("no command given")
    if cancel_event is not None and cancel_event.is_set():
        raise CommandCancelled(f"{command[0]}: cancelled before start")

    try:
        proc = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except (OSError, ValueError) as exc:
        raise CommandError(f"failed to run {command[0]}: {exc}") from exc

    try:
        if cancel_event is None:
            output, _ = proc.communicate()
        else:
            while True:
                try:
                    output, _ = proc.communicate(timeout=poll_seconds)
                    break
                except subprocess.TimeoutExpired:
                    if not cancel_event.is_set():
                        continue
                    proc.kill()
                    proc.communicate()
                    raise CommandCancelled(f"{command[0]}: cancelled, superseded by a newer run") from None
    except OSError as exc:
        proc.kill()
        proc.wait()
        raise CommandError(f"failed reading output of {command[0]}: {exc}") from exc

    return CommandOutput(lines=split_output_lines(output or ""), exit_code=proc.returncode)
