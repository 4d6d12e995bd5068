"""Background execution of the watched command.

Each dispatch runs on its own daemon thread and reports exactly one
``PendingResult`` through a queue. Workers never touch view state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Union

from .. import process
from ..errors import CommandCancelled, CommandError

logger = logging.getLogger(__name__)

DEFAULT_MAX_IN_FLIGHT = 8


@dataclass(frozen=True)
class Lines:
    """Captured output of a finished run."""

    lines: tuple[str, ...]
    exit_code: int | None = None


@dataclass(frozen=True)
class Failure:
    """A run that produced no output because it could not execute."""

    message: str


@dataclass(frozen=True)
class Cancelled:
    """A run that was asked to stop before it finished; never shown."""

    reason: str


Outcome = Union[Lines, Failure, Cancelled]


@dataclass(frozen=True)
class PendingResult:
    generation: int
    outcome: Outcome


RunCommand = Callable[[Sequence[str], threading.Event], process.CommandOutput]


class RefreshExecutor:
    """Dispatch command runs concurrently and collect their tagged outcomes.

    Runs are not serialized: a slow run may still be going when the next one
    starts. Each in-flight generation owns a cancellation event. At most
    ``max_in_flight`` runs are alive at once; further dispatches are refused
    until a run finishes or is superseded by an admitted newer one.
    Bookkeeping methods are meant to be called from the main loop thread only.
    """

    def __init__(
        self,
        command: Sequence[str],
        run_command: RunCommand = process.run_command,
        max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
    ) -> None:
        self.command = tuple(command)
        self.max_in_flight = max(1, max_in_flight)
        self._run_command = run_command
        self._results: Queue[PendingResult] = Queue()
        self._cancel_events: dict[int, threading.Event] = {}

    def _worker(self, generation: int, cancel_event: threading.Event) -> None:
        try:
            output = self._run_command(self.command, cancel_event)
        except CommandCancelled as exc:
            logger.debug("generation %d cancelled: %s", generation, exc)
            outcome: Outcome = Cancelled(str(exc))
        except CommandError as exc:
            logger.info("generation %d failed: %s", generation, exc)
            outcome = Failure(str(exc))
        except Exception as exc:
            # Nothing may escape the worker thread; report it like a failed run.
            logger.exception("generation %d crashed", generation)
            outcome = Failure(f"unexpected error: {exc}")
        else:
            logger.debug(
                "generation %d finished: %d lines, exit %s",
                generation,
                len(output.lines),
                output.exit_code,
            )
            outcome = Lines(lines=tuple(output.lines), exit_code=output.exit_code)
        self._results.put(PendingResult(generation=generation, outcome=outcome))

    def dispatch(self, generation: int) -> bool:
        """Start a worker for ``generation`` unless ``max_in_flight`` runs are already alive.

        Returns whether the run was started.
        """
        if len(self._cancel_events) >= self.max_in_flight:
            logger.debug(
                "skipping generation %d: %d runs still in flight",
                generation,
                len(self._cancel_events),
            )
            return False

        cancel_event = threading.Event()
        self._cancel_events[generation] = cancel_event
        worker = threading.Thread(
            target=self._worker,
            args=(generation, cancel_event),
            name=f"ratch-refresh-{generation}",
            daemon=True,
        )
        logger.debug("dispatching generation %d: %s", generation, " ".join(self.command))
        worker.start()
        return True

    def _cancel(self, generation: int) -> None:
        cancel_event = self._cancel_events.pop(generation, None)
        if cancel_event is None:
            return
        logger.debug("cancelling generation %d", generation)
        cancel_event.set()

    def cancel_older_than(self, generation: int) -> int:
        """Ask every in-flight run older than ``generation`` to stop."""
        stale = [gen for gen in self._cancel_events if gen < generation]
        for gen in stale:
            self._cancel(gen)
        return len(stale)

    def cancel_all(self) -> None:
        for gen in list(self._cancel_events):
            self._cancel(gen)

    def in_flight(self) -> list[int]:
        """Generations dispatched whose results were not drained or cancelled yet."""
        return sorted(self._cancel_events)

    def drain_results(self) -> list[PendingResult]:
        """Drain all completed results without blocking."""
        out: list[PendingResult] = []
        while True:
            try:
                result = self._results.get_nowait()
            except Empty:
                break
            self._cancel_events.pop(result.generation, None)
            out.append(result)
        return out


__all__ = [
    "Cancelled",
    "DEFAULT_MAX_IN_FLIGHT",
    "Failure",
    "Lines",
    "Outcome",
    "PendingResult",
    "RefreshExecutor",
]
