"""Composition root: wire terminal, executor, and state, then run the loop."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from ..config import DEFAULT_MAX_IN_FLIGHT, DEFAULT_STATUS_SECONDS
from ..refresh import RefreshExecutor
from ..render import status_summary
from ..state import ViewState
from ..terminal import TtyTerminal
from .loop import RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchOptions:
    command: tuple[str, ...]
    interval: float
    constrain: bool = True
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT
    status_seconds: float = DEFAULT_STATUS_SECONDS


def run_watch(options: WatchOptions, stdin_fd: int | None = None, stdout_fd: int | None = None) -> None:
    """Watch ``options.command`` on the controlling terminal until the user quits."""
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    logger.info(
        "watching %s every %gs (constrained=%s)",
        list(options.command),
        options.interval,
        options.constrain,
    )
    run_main_loop(
        state=ViewState(constrain=options.constrain),
        terminal=TtyTerminal(stdin_fd, stdout_fd),
        executor=RefreshExecutor(options.command, max_in_flight=options.max_in_flight),
        timing=RuntimeLoopTiming(interval=options.interval, status_seconds=options.status_seconds),
        summary=status_summary(options.interval, options.command),
    )
