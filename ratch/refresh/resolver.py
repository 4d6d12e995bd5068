"""Admit only the newest arrived run result into the view."""

from __future__ import annotations

import logging

from ..state import ViewState
from .executor import Cancelled, Failure, PendingResult

logger = logging.getLogger(__name__)

FAILURE_LINE_PREFIX = "ratch: "


def failure_line(message: str) -> str:
    """Format a failed run as the single synthetic buffer line."""
    return f"{FAILURE_LINE_PREFIX}{message}\n"


def admit(result: PendingResult, state: ViewState) -> bool:
    """Replace the line buffer with ``result`` unless a newer run was already admitted.

    Returns whether the result was admitted. An older run that finishes after
    a newer one is dropped, so the display never regresses. A cancelled run
    has no output to show and is always dropped.
    """
    if isinstance(result.outcome, Cancelled):
        logger.debug("dropping cancelled generation %d", result.generation)
        return False
    if result.generation < state.highest_admitted_generation:
        logger.debug(
            "dropping stale generation %d (showing %d)",
            result.generation,
            state.highest_admitted_generation,
        )
        return False

    outcome = result.outcome
    if isinstance(outcome, Failure):
        state.lines = [failure_line(outcome.message)]
        state.last_exit_code = None
    else:
        state.lines = list(outcome.lines)
        state.last_exit_code = outcome.exit_code
    state.highest_admitted_generation = result.generation
    state.dirty = True
    return True
