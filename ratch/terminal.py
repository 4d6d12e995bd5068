"""Terminal capability used by the main loop.

``Terminal`` is the interface the loop and renderer depend on; ``TtyTerminal``
implements it on a POSIX tty with raw mode, the alternate screen, and one
buffered write per frame.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty
from collections.abc import Iterator
from typing import Protocol

from .input import read_key
from .state import Viewport

DEFAULT_TERMINAL_SIZE = (80, 24)


class Terminal(Protocol):
    def size(self) -> Viewport: ...

    def poll_event(self) -> str | None: ...

    def clear(self) -> None: ...

    def draw_line(self, row: int, text: str) -> None: ...

    def flush(self) -> None: ...

    def session(self) -> contextlib.AbstractContextManager[None]: ...


class TerminalController:
    """Manage raw-mode and alternate-screen transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


class TtyTerminal:
    """``Terminal`` backed by a raw POSIX tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.controller = TerminalController(stdin_fd, stdout_fd)
        self._out: list[str] = []

    def session(self) -> contextlib.AbstractContextManager[None]:
        return self.controller.raw_mode()

    def size(self) -> Viewport:
        term = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
        return Viewport(width=max(1, term.columns), height=max(1, term.lines))

    def poll_event(self) -> str | None:
        """Return the next key token without blocking, or ``None``."""
        key = read_key(self.stdin_fd, timeout_ms=0)
        return key or None

    def clear(self) -> None:
        self._out.append("\033[H\033[J")

    def draw_line(self, row: int, text: str) -> None:
        self._out.append(f"\033[{row + 1};1H{text}")

    def flush(self) -> None:
        if not self._out:
            return
        payload = "".join(self._out)
        self._out.clear()
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))
