"""Tests for frame projection and terminal drawing."""

from __future__ import annotations

import unittest

from ratch.render import (
    MATCH_END_SGR,
    MATCH_START_SGR,
    PROMPT_GLYPH,
    FrameRow,
    build_status_line,
    draw_frame,
    render_frame,
    status_summary,
    styled_row,
)
from ratch.state import Mode, ViewState, Viewport
from ratch.view import compile_search_pattern


class _RecordingTerminal:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def draw_line(self, row: int, text: str) -> None:
        self.calls.append(("draw", row, text))

    def flush(self) -> None:
        self.calls.append(("flush",))


class RenderFrameTests(unittest.TestCase):
    def test_draws_height_minus_one_rows_from_cursor(self) -> None:
        state = ViewState(lines=[f"{idx}\n" for idx in range(10)], cursor=3)

        frame = render_frame(state, Viewport(width=20, height=5))

        self.assertEqual([row.text for row in frame.rows], ["3", "4", "5", "6"])

    def test_rows_outside_buffer_are_blank(self) -> None:
        state = ViewState(lines=["a\n", "b\n"], cursor=-1)

        frame = render_frame(state, Viewport(width=20, height=5))

        self.assertEqual([row.text for row in frame.rows], ["", "a", "b", ""])

    def test_first_match_is_marked_per_row(self) -> None:
        state = ViewState(
            lines=["no error here\n", "fine\n", "err err\n"],
            compiled_pattern=compile_search_pattern("err"),
        )

        frame = render_frame(state, Viewport(width=40, height=4))

        self.assertEqual([row.match for row in frame.rows], [(3, 6), None, (0, 3)])

    def test_status_shows_prompt_glyph_or_search_text(self) -> None:
        viewport = Viewport(width=40, height=3)
        normal = render_frame(ViewState(), viewport, summary="every 2s: ls")
        searching = render_frame(ViewState(mode=Mode.SEARCHING, search_text="err"), viewport)

        self.assertEqual(normal.status, PROMPT_GLYPH)
        self.assertEqual(normal.status_right, "every 2s: ls")
        self.assertEqual(searching.status, "/err")

    def test_status_message_and_exit_code_on_right_side(self) -> None:
        viewport = Viewport(width=40, height=3)
        failed = render_frame(ViewState(last_exit_code=2), viewport, summary="every 2s: false")
        message = render_frame(ViewState(status_message="invalid pattern: x"), viewport, summary="s")

        self.assertEqual(failed.status_right, "[exit 2] every 2s: false")
        self.assertEqual(message.status_right, "invalid pattern: x")

    def test_status_summary_quotes_command(self) -> None:
        self.assertEqual(status_summary(0.5, ["grep", "a b"]), "every 0.5s: grep 'a b'")


class DrawFrameTests(unittest.TestCase):
    def test_styled_row_highlights_match_and_clips(self) -> None:
        row = FrameRow("no error here", (3, 6))

        self.assertEqual(styled_row(row, 80), f"no {MATCH_START_SGR}err{MATCH_END_SGR}or here")
        self.assertEqual(styled_row(row, 6), f"no {MATCH_START_SGR}er{MATCH_END_SGR}")

    def test_styled_row_expands_tabs(self) -> None:
        self.assertEqual(styled_row(FrameRow("a\tb"), 80), "a       b")

    def test_build_status_line_keeps_left_prompt_and_pads(self) -> None:
        self.assertEqual(build_status_line(":", 12, "every"), ":     every")
        self.assertEqual(build_status_line("/long search", 6, "every"), "/long")

    def test_build_status_line_measures_wide_characters_in_columns(self) -> None:
        self.assertEqual(build_status_line("/日本", 8, "ab"), "/日本 a")
        self.assertEqual(build_status_line("/日本語", 5), "/日 ")

    def test_draw_frame_clears_draws_each_row_and_flushes(self) -> None:
        terminal = _RecordingTerminal()
        viewport = Viewport(width=20, height=3)
        frame = render_frame(ViewState(lines=["a\n", "b\n", "c\n"]), viewport)

        draw_frame(terminal, frame, viewport)

        self.assertEqual(terminal.calls[0], ("clear",))
        self.assertEqual(terminal.calls[1], ("draw", 0, "a"))
        self.assertEqual(terminal.calls[2], ("draw", 1, "b"))
        self.assertEqual(terminal.calls[3][:2], ("draw", 2))
        self.assertIn(PROMPT_GLYPH, terminal.calls[3][2])
        self.assertEqual(terminal.calls[-1], ("flush",))


if __name__ == "__main__":
    unittest.main()
