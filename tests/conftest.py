"""Pytest configuration: pseudo-terminals and scripted key sources."""

from __future__ import annotations

import fcntl
import io
import os
import pty
import struct
import termios
from typing import Iterable, Iterator, Optional

import pytest
from rich.console import Console

from rawedit.cli.core.terminal import TerminalSession


class PtyPair:
    """Master/slave pseudo-terminal. The slave side plays the user's tty."""

    def __init__(self) -> None:
        self.master, self.slave = pty.openpty()

    def set_size(self, rows: int, cols: int) -> None:
        winsize = struct.pack("HHHH", rows, cols, 0, 0)
        fcntl.ioctl(self.slave, termios.TIOCSWINSZ, winsize)

    def attributes(self) -> list:
        return termios.tcgetattr(self.slave)

    def type_bytes(self, data: bytes) -> None:
        os.write(self.master, data)

    def close(self) -> None:
        os.close(self.master)
        os.close(self.slave)


class ScriptedReader:
    """Key source replaying a fixed script; None entries are read timeouts."""

    def __init__(self, script: Iterable[Optional[int]]) -> None:
        self._script = list(script)
        self.reads = 0

    def read_byte(self) -> Optional[int]:
        self.reads += 1
        if not self._script:
            raise AssertionError("key script exhausted")
        return self._script.pop(0)


@pytest.fixture
def pty_pair() -> Iterator[PtyPair]:
    pair = PtyPair()
    pair.set_size(24, 80)
    yield pair
    pair.close()


@pytest.fixture
def err_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def session(pty_pair: PtyPair, err_output: io.StringIO) -> Iterator[TerminalSession]:
    """Session bound to the pty slave, painting into memory."""
    session = TerminalSession(
        in_fd=pty_pair.slave,
        out=io.BytesIO(),
        out_fd=pty_pair.slave,
        err_console=Console(file=err_output, force_terminal=False, width=200),
    )
    yield session
    session.restore()


@pytest.fixture
def scripted_reader() -> type[ScriptedReader]:
    return ScriptedReader
