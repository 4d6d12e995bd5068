"""Search-pattern maintenance for the view.

Patterns are regular expressions with smart case: matching ignores case
unless the search text contains an uppercase character.
"""

from __future__ import annotations

import logging
import re

from ..errors import PatternError
from ..state import ViewState, set_status_message

logger = logging.getLogger(__name__)


def compile_search_pattern(text: str) -> re.Pattern[str] | None:
    """Compile ``text``; empty text means no pattern."""
    if not text:
        return None
    flags = 0 if any(ch.isupper() for ch in text) else re.IGNORECASE
    try:
        return re.compile(text, flags)
    except re.error as exc:
        raise PatternError(text, str(exc)) from exc


def refresh_search_pattern(state: ViewState, status_seconds: float, now: float | None = None) -> bool:
    """Recompile the search pattern if ``search_text`` changed since the last attempt.

    An invalid pattern leaves the previous pattern active and posts a transient
    status message instead. Returns whether the active pattern changed.
    """
    if state.search_text == state.pattern_source:
        return False
    state.pattern_source = state.search_text
    try:
        pattern = compile_search_pattern(state.search_text)
    except PatternError as exc:
        logger.debug("%s", exc)
        set_status_message(state, f"invalid pattern: {exc.reason}", status_seconds, now)
        return False
    state.compiled_pattern = pattern
    state.dirty = True
    return True


def first_match_span(pattern: re.Pattern[str] | None, line: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` character offsets of the first non-empty match."""
    if pattern is None:
        return None
    for match in pattern.finditer(line):
        if match.end() > match.start():
            return match.span()
    return None
