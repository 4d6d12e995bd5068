"""Error taxonomy for the refresh engine.

Execution and pattern failures are recoverable inside the main loop; they are
raised where they happen and converted to visible status at the boundary.
"""

from __future__ import annotations


class RatchError(Exception):
    """Base class for errors raised by ratch."""


class CommandError(RatchError):
    """The watched command could not be spawned, read, or waited on."""


class CommandCancelled(CommandError):
    """A superseded run was asked to stop and killed its child process."""


class PatternError(RatchError):
    """Search text failed to compile as a regular expression."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid pattern {text!r}: {reason}")
        self.text = text
        self.reason = reason
