"""Frame rendering for the watch view.

``render_frame`` projects view state onto the viewport without side effects;
``draw_frame`` turns that frame into terminal writes.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from .state import Mode, ViewState, Viewport
from .terminal import Terminal
from .text import clip_segments, display_width, sanitize_line
from .view.search import first_match_span

PROMPT_GLYPH = ":"
SEARCH_PROMPT = "/"
MATCH_START_SGR = "\033[7;1m"
MATCH_END_SGR = "\033[27;22m"
STATUS_START_SGR = "\033[7m"
RESET_SGR = "\033[0m"


@dataclass(frozen=True)
class FrameRow:
    text: str
    match: tuple[int, int] | None = None


@dataclass(frozen=True)
class Frame:
    rows: tuple[FrameRow, ...]
    status: str
    status_right: str = ""


def content_row_count(viewport: Viewport) -> int:
    """Rows available for output; the last row is the status line."""
    return max(0, viewport.height - 1)


def status_summary(interval: float, command: Sequence[str]) -> str:
    return f"every {interval:g}s: {shlex.join(command)}"


def render_frame(state: ViewState, viewport: Viewport, summary: str = "") -> Frame:
    """Build the visible rows starting at ``state.cursor`` plus the status line.

    Rows outside the buffer are blank. With an active pattern, the first match
    on each row is marked for highlighting.
    """
    rows: list[FrameRow] = []
    for offset in range(content_row_count(viewport)):
        idx = state.cursor + offset
        if not 0 <= idx < len(state.lines):
            rows.append(FrameRow(""))
            continue
        text = sanitize_line(state.lines[idx])
        rows.append(FrameRow(text, first_match_span(state.compiled_pattern, text)))

    if state.mode is Mode.SEARCHING:
        status = SEARCH_PROMPT + state.search_text
    else:
        status = PROMPT_GLYPH

    right = state.status_message
    if not right:
        right = summary
        if state.last_exit_code:
            right = f"[exit {state.last_exit_code}] {summary}".rstrip()
    return Frame(rows=tuple(rows), status=status, status_right=right)


def _clip_columns(text: str, max_cols: int) -> str:
    return "".join(chunk for chunk, _ in clip_segments([(text, False)], max_cols))


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Pad the status row to the usable width, keeping the left prompt visible first.

    Widths are measured in terminal columns, so wide characters count double.
    """
    usable = max(1, width - 1)
    left = _clip_columns(left_text, usable)
    left_cols = display_width(left)
    room = usable - left_cols - 1
    if room <= 0 or not right_text:
        return left + " " * (usable - left_cols)
    right = _clip_columns(right_text, room)
    gap = " " * (usable - left_cols - display_width(right))
    return f"{left}{gap}{right}"


def styled_row(row: FrameRow, width: int) -> str:
    """Clip ``row`` to the viewport and wrap its match in reverse video."""
    if row.match is None:
        segments = [(row.text, False)]
    else:
        start, end = row.match
        segments = [(row.text[:start], False), (row.text[start:end], True), (row.text[end:], False)]

    out: list[str] = []
    for text, highlighted in clip_segments(segments, max(1, width - 1)):
        if highlighted:
            out.append(f"{MATCH_START_SGR}{text}{MATCH_END_SGR}")
        else:
            out.append(text)
    return "".join(out)


def draw_frame(terminal: Terminal, frame: Frame, viewport: Viewport) -> None:
    terminal.clear()
    for row_idx, row in enumerate(frame.rows):
        terminal.draw_line(row_idx, styled_row(row, viewport.width))
    status = build_status_line(frame.status, viewport.width, frame.status_right)
    terminal.draw_line(len(frame.rows), f"{STATUS_START_SGR}{status}{RESET_SGR}")
    terminal.flush()
