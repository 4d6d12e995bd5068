"""Key dispatch for normal and search modes.

Handlers mutate ``ViewState`` in place and report whether anything changed so
the loop can skip redraws for unbound keys.
"""

from __future__ import annotations

from ..state import Mode, ViewState, Viewport

QUIT_KEYS = frozenset({"q", "Q", "CTRL_C"})


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def page_step(viewport: Viewport) -> int:
    """Rows moved by page up/down: one viewport minus one line of overlap."""
    return max(1, viewport.height - 1)


def bottom_cursor(state: ViewState, viewport: Viewport) -> int:
    """Cursor value that shows the last full page."""
    return max(0, len(state.lines) - viewport.height)


def clamp_cursor(state: ViewState, viewport: Viewport) -> bool:
    """Pull the cursor back into ``[0, bottom_cursor]``; return whether it moved."""
    clamped = max(0, min(state.cursor, bottom_cursor(state, viewport)))
    if clamped == state.cursor:
        return False
    state.cursor = clamped
    state.dirty = True
    return True


def _move_cursor(state: ViewState, cursor: int) -> bool:
    if cursor == state.cursor:
        return False
    state.cursor = cursor
    state.dirty = True
    return True


def handle_search_key(key: str, state: ViewState) -> bool:
    """Edit the search text; Enter commits it, Esc cancels it."""
    if key == "ENTER":
        state.mode = Mode.NORMAL
    elif key == "ESC":
        state.mode = Mode.NORMAL
        state.search_text = ""
    elif key == "BACKSPACE":
        if not state.search_text:
            return False
        state.search_text = state.search_text[:-1]
    elif is_printable_key(key):
        state.search_text += key
    else:
        return False
    state.dirty = True
    return True


def handle_normal_key(key: str, state: ViewState, viewport: Viewport) -> bool:
    """Scroll, jump, quit, or open the search prompt."""
    if key in QUIT_KEYS:
        state.should_quit = True
        return True
    if key == "/":
        state.mode = Mode.SEARCHING
        state.search_text = ""
        state.dirty = True
        return True
    if key in {"j", "DOWN"}:
        return _move_cursor(state, state.cursor + 1)
    if key in {"k", "UP"}:
        return _move_cursor(state, state.cursor - 1)
    if key in {"g", "HOME"}:
        return _move_cursor(state, 0)
    if key in {"G", "END"}:
        return _move_cursor(state, bottom_cursor(state, viewport))
    if key == "PAGE_DOWN":
        return _move_cursor(state, state.cursor + page_step(viewport))
    if key == "PAGE_UP":
        return _move_cursor(state, state.cursor - page_step(viewport))
    return False


def handle_key(key: str, state: ViewState, viewport: Viewport) -> bool:
    """Dispatch one key token against the current mode."""
    if key == "CTRL_C":
        state.should_quit = True
        return True
    if state.mode is Mode.SEARCHING:
        return handle_search_key(key, state)
    return handle_normal_key(key, state, viewport)
