"""Main interactive loop for the watch view.

Each quantum it drains input, updates view state, dispatches due runs,
admits finished results, and redraws only when something changed.
This loop is intentionally wiring-heavy; feature logic lives in the callees.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..refresh import IntervalScheduler, RefreshExecutor, admit
from ..render import draw_frame, render_frame
from ..state import ViewState, Viewport, expire_status_message
from ..terminal import Terminal
from ..view import clamp_cursor, handle_key, refresh_search_pattern

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM_SECONDS = 0.008
MAX_EVENTS_PER_TICK = 256


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    interval: float
    quantum_seconds: float = DEFAULT_QUANTUM_SECONDS
    status_seconds: float = 2.0


@dataclass(frozen=True)
class LoopClock:
    now: Callable[[], float] = field(default=time.monotonic)
    sleep: Callable[[float], None] = field(default=time.sleep)


def drain_input(terminal: Terminal, state: ViewState, viewport: Viewport) -> None:
    """Handle every key already waiting, stopping early on quit."""
    for _ in range(MAX_EVENTS_PER_TICK):
        try:
            key = terminal.poll_event()
        except KeyboardInterrupt:
            continue
        if key is None:
            return
        handle_key(key, state, viewport)
        if state.should_quit:
            return


def admit_results(executor: RefreshExecutor, state: ViewState) -> None:
    for result in executor.drain_results():
        if admit(result, state):
            executor.cancel_older_than(result.generation)


def run_main_loop(
    state: ViewState,
    terminal: Terminal,
    executor: RefreshExecutor,
    timing: RuntimeLoopTiming,
    clock: LoopClock | None = None,
    summary: str = "",
) -> None:
    """Run until the user quits.

    The first run is dispatched immediately with the current generation; later
    runs get the next generation when the scheduler reports them due and the
    executor has room for another run. A due run that is refused is skipped.
    """
    clock = LoopClock() if clock is None else clock
    scheduler = IntervalScheduler(timing.interval, started_at=clock.now())
    last_viewport: Viewport | None = None

    with terminal.session():
        executor.dispatch(state.generation)
        try:
            while True:
                tick_started = clock.now()
                viewport = terminal.size()
                if viewport != last_viewport:
                    last_viewport = viewport
                    state.dirty = True

                drain_input(terminal, state, viewport)
                if state.should_quit:
                    break
                refresh_search_pattern(state, timing.status_seconds, now=tick_started)

                if scheduler.poll(tick_started) and executor.dispatch(state.generation + 1):
                    state.generation += 1

                admit_results(executor, state)
                if state.constrain:
                    clamp_cursor(state, viewport)
                expire_status_message(state, tick_started)

                if state.dirty:
                    draw_frame(terminal, render_frame(state, viewport, summary), viewport)
                    state.dirty = False

                remaining = timing.quantum_seconds - (clock.now() - tick_started)
                if remaining > 0:
                    clock.sleep(remaining)
        finally:
            executor.cancel_all()
            logger.debug("loop stopped at generation %d", state.generation)
