"""Terminal error taxonomy.

Every error here is fatal to the editor: a broken terminal channel leaves the
program without an interface, so nothing retries.
"""

from __future__ import annotations

from typing import Optional


def describe_cause(cause: Optional[BaseException]) -> str:
    """Human-readable description of an OS-level failure."""
    if cause is None:
        return "unknown error"
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    # termios.error is raised as (errno, message)
    if len(cause.args) == 2 and isinstance(cause.args[1], str):
        return cause.args[1]
    return str(cause) or type(cause).__name__


class TerminalError(Exception):
    """Base class for terminal failures.

    Attributes:
        operation: Name of the failing call (e.g. ``tcgetattr``)
        cause: Underlying OS error, if any
    """

    def __init__(
        self,
        operation: str,
        cause: Optional[BaseException] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.cause = cause
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.operation}: {self.detail or describe_cause(self.cause)}"


class TerminalQueryError(TerminalError):
    """Reading the terminal configuration failed (no controlling terminal)."""


class TerminalConfigureError(TerminalError):
    """Applying a terminal configuration failed."""


class GeometryUnavailable(TerminalError):
    """Window-size query failed or reported an unusable size."""


class TerminalReadError(TerminalError):
    """Reading a byte from the terminal failed."""


class SessionStateError(TerminalError):
    """A session operation was called in the wrong lifecycle state."""
