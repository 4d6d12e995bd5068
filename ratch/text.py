"""Display-width measurement and line shaping for captured output.

Command output is shown as plain text: escape sequences and control
characters are stripped, tabs expand to 8-column stops, and wide characters
count as two columns when clipping to the viewport.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def sanitize_line(line: str) -> str:
    """Drop the line terminator, ANSI sequences, and non-printable characters (tabs kept)."""
    text = ANSI_ESCAPE_RE.sub("", line.rstrip("\r\n"))
    return "".join(ch for ch in text if ch == "\t" or ch.isprintable())


def clip_segments(segments: list[tuple[str, bool]], max_cols: int) -> list[tuple[str, bool]]:
    """Expand tabs and trim styled segments to ``max_cols`` display columns.

    Each segment is ``(text, highlighted)``; the flag is carried through
    untouched and empty segments are dropped.
    """
    out: list[tuple[str, bool]] = []
    col = 0
    for text, highlighted in segments:
        if col >= max_cols:
            break
        chunk: list[str] = []
        for ch in text:
            w = char_display_width(ch, col)
            if col + w > max_cols:
                col = max_cols
                break
            chunk.append(" " * w if ch == "\t" else ch)
            col += w
        if chunk:
            out.append(("".join(chunk), highlighted))
    return out
