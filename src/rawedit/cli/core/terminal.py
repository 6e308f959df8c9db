"""Terminal session: raw mode entry and guaranteed restoration (Unix only)."""

from __future__ import annotations

import logging
import sys
import termios
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import BinaryIO, ClassVar, Iterator, NoReturn, Optional

from rich.console import Console
from rich.markup import escape

from rawedit.cli.core.errors import (
    SessionStateError,
    TerminalConfigureError,
    TerminalError,
    TerminalQueryError,
)

logger = logging.getLogger(__name__)

# Control sequences
ESC = b"\x1b"
CSI = ESC + b"["
CLEAR_SCREEN = CSI + b"2J"
CURSOR_HOME = CSI + b"H"

# VTIME is measured in tenths of a second
READ_TIMEOUT_DECISECONDS = 1


@dataclass(frozen=True)
class TerminalAttributes:
    """Immutable snapshot of a terminal's configured mode."""
    iflag: int
    oflag: int
    cflag: int
    lflag: int
    ispeed: int
    ospeed: int
    cc: tuple

    @classmethod
    def from_termios(cls, attrs: list) -> TerminalAttributes:
        """Build from the list returned by ``termios.tcgetattr``."""
        iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
        return cls(iflag, oflag, cflag, lflag, ispeed, ospeed, tuple(cc))

    def to_termios(self) -> list:
        """Convert to the list accepted by ``termios.tcsetattr``."""
        return [
            self.iflag,
            self.oflag,
            self.cflag,
            self.lflag,
            self.ispeed,
            self.ospeed,
            list(self.cc),
        ]

    def raw(self) -> TerminalAttributes:
        """Derive the raw-mode configuration from this snapshot.

        Disables echo, canonical input, signal keys, literal-next, output
        post-processing, flow control, parity checking, break interrupts and
        8th-bit stripping; forces 8-bit characters. Reads return after at
        most 100 ms even with no input.
        """
        cc = list(self.cc)
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = READ_TIMEOUT_DECISECONDS
        return replace(
            self,
            iflag=self.iflag & ~(
                termios.BRKINT | termios.ICRNL | termios.INPCK
                | termios.ISTRIP | termios.IXON
            ),
            oflag=self.oflag & ~termios.OPOST,
            cflag=self.cflag | termios.CS8,
            lflag=self.lflag & ~(
                termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG
            ),
            cc=tuple(cc),
        )


def _fileno(stream, operation: str) -> int:
    """Fd behind a standard stream, as a query error when there is none."""
    if stream is None:
        raise TerminalQueryError(operation, detail="standard stream is closed")
    try:
        return stream.fileno()
    except (OSError, ValueError) as exc:
        raise TerminalQueryError(operation, exc) from exc


class SessionState(Enum):
    """Lifecycle of a terminal session."""
    UNINITIALIZED = auto()
    RAW_ACTIVE = auto()
    RESTORED = auto()


class TerminalSession:
    """
    Handle owning the controlling terminal's configuration.

    The original attributes are captured once and reapplied when the
    ``raw_mode`` block exits, whichever way it exits.

    Usage:
        session = TerminalSession()
        original = session.capture_original()
        with session.raw_mode(original):
            ...
    """

    # At most one session may hold the terminal in raw mode per process
    _active: ClassVar[Optional[TerminalSession]] = None

    def __init__(
        self,
        in_fd: Optional[int] = None,
        out: Optional[BinaryIO] = None,
        out_fd: Optional[int] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        self._in_fd = in_fd
        self._out = out
        self._out_fd = out_fd
        self.err_console = err_console or Console(stderr=True)
        self.state = SessionState.UNINITIALIZED
        self._original: Optional[TerminalAttributes] = None

    @property
    def in_fd(self) -> int:
        """Terminal input fd, stdin unless given."""
        if self._in_fd is None:
            self._in_fd = _fileno(sys.stdin, "tcgetattr")
        return self._in_fd

    @property
    def out(self) -> BinaryIO:
        """Binary output stream, stdout unless given."""
        if self._out is None:
            if sys.stdout is None:
                raise TerminalQueryError("write", detail="standard output is closed")
            self._out = sys.stdout.buffer
        return self._out

    @property
    def out_fd(self) -> int:
        """Fd the window size is queried on."""
        if self._out_fd is None:
            self._out_fd = _fileno(self.out, "ioctl(TIOCGWINSZ)")
        return self._out_fd

    @property
    def original(self) -> Optional[TerminalAttributes]:
        """Attributes captured before any mutation, if captured yet."""
        return self._original

    def capture_original(self) -> TerminalAttributes:
        """Read and remember the current terminal configuration."""
        if self._original is not None:
            raise SessionStateError("capture_original", detail="attributes already captured")
        fd = self.in_fd
        try:
            attrs = termios.tcgetattr(fd)
        except (termios.error, OSError) as exc:
            raise TerminalQueryError("tcgetattr", exc) from exc
        self._original = TerminalAttributes.from_termios(attrs)
        logger.debug("Captured terminal attributes on fd %d", fd)
        return self._original

    def enter_raw(self, original: TerminalAttributes) -> None:
        """Apply the raw configuration derived from ``original``.

        Pending unread input is discarded before the change takes effect.
        """
        if self._original is None or original != self._original:
            raise SessionStateError("enter_raw", detail="no captured attributes for this session")
        if self.state is not SessionState.UNINITIALIZED:
            raise SessionStateError("enter_raw", detail=f"session is {self.state.name}")
        if TerminalSession._active is not None:
            raise SessionStateError("enter_raw", detail="another raw-mode session is active")

        try:
            termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, original.raw().to_termios())
        except (termios.error, OSError) as exc:
            raise TerminalConfigureError("tcsetattr", exc) from exc

        TerminalSession._active = self
        self.state = SessionState.RAW_ACTIVE
        logger.debug("Entered raw mode on fd %d", self.in_fd)

    def restore(self) -> None:
        """Reapply the original configuration.

        A failure is reported but never raised: the process must still be
        able to exit.
        """
        if self.state is not SessionState.RAW_ACTIVE or self._original is None:
            return
        if TerminalSession._active is self:
            TerminalSession._active = None
        self.state = SessionState.RESTORED

        try:
            termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, self._original.to_termios())
        except (termios.error, OSError) as exc:
            error = TerminalConfigureError("tcsetattr", exc)
            logger.error("Failed to restore terminal attributes: %s", error)
            self.err_console.print(f"[red]{escape(str(error))}[/]")
            return
        logger.debug("Restored terminal attributes on fd %d", self.in_fd)

    @contextmanager
    def raw_mode(self, original: TerminalAttributes) -> Iterator[TerminalSession]:
        """Hold the terminal in raw mode for the duration of the block."""
        self.enter_raw(original)
        try:
            yield self
        finally:
            self.restore()

    def write(self, data: bytes) -> None:
        """Write control sequences or text to the output and flush."""
        self.out.write(data)
        self.out.flush()

    def fail(self, error: TerminalError) -> NoReturn:
        """Clear the screen, report ``error`` on stderr and exit with status 1.

        Restoration is left to the enclosing ``raw_mode`` block.
        """
        try:
            self.write(CLEAR_SCREEN + CURSOR_HOME)
        except (OSError, TerminalError) as exc:
            logger.warning("Could not clear screen before exit: %s", exc)
        logger.error("Fatal terminal error: %s", error)
        self.err_console.print(f"[red]{escape(str(error))}[/]")
        raise SystemExit(1)
