from __future__ import annotations

import enum
import re
import time
from dataclasses import dataclass, field


class Mode(enum.Enum):
    NORMAL = "normal"
    SEARCHING = "searching"


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


@dataclass
class ViewState:
    """Everything the main loop mutates between frames.

    Only the main loop thread touches this object; refresh workers hand their
    output over as immutable ``PendingResult`` values.
    """

    lines: list[str] = field(default_factory=list)
    cursor: int = 0
    mode: Mode = Mode.NORMAL
    search_text: str = ""
    compiled_pattern: re.Pattern[str] | None = None
    pattern_source: str = ""
    highest_admitted_generation: int = 0
    generation: int = 0
    last_exit_code: int | None = None
    constrain: bool = True
    dirty: bool = True
    should_quit: bool = False
    status_message: str = ""
    status_message_until: float = 0.0


def set_status_message(state: ViewState, message: str, seconds: float, now: float | None = None) -> None:
    """Show ``message`` in the status row for ``seconds``."""
    state.status_message = message
    state.status_message_until = (time.monotonic() if now is None else now) + seconds
    state.dirty = True


def expire_status_message(state: ViewState, now: float) -> bool:
    """Clear the transient status message once its deadline passed."""
    if not state.status_message or now < state.status_message_until:
        return False
    state.status_message = ""
    state.status_message_until = 0.0
    state.dirty = True
    return True
