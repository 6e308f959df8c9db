"""Key echo probe: shows the byte value of every key pressed in raw mode."""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Optional

from rawedit.cli.core.errors import TerminalError
from rawedit.cli.core.input import ByteReader
from rawedit.cli.core.terminal import TerminalSession
from rawedit.cli.studio.editor import LINE_BREAK, KeySource

logger = logging.getLogger(__name__)

QUIT_BYTE = ord("q")


def is_control(byte: int) -> bool:
    """ASCII control characters: 0-31 and DEL."""
    return byte < 0x20 or byte == 0x7F


def describe_byte(byte: int) -> bytes:
    """One output line for ``byte``: its value, plus the glyph if printable."""
    if is_control(byte) or byte > 0x7F:
        return f"{byte}".encode("ascii") + LINE_BREAK
    return f"{byte} ('{chr(byte)}')".encode("ascii") + LINE_BREAK


class KeyEchoApp:
    """Prints each byte read until ``q`` is pressed."""

    def __init__(self, reader: KeySource, out: BinaryIO) -> None:
        self.reader = reader
        self.out = out
        self.running = False

    def run(self) -> int:
        self.running = True
        while self.running:
            self.step()
        return 0

    def step(self) -> Optional[int]:
        """Read and print one byte.

        A read that times out prints nothing, rather than a line for a zero
        byte, so only real key presses show up.
        """
        byte = self.reader.read_byte()
        if byte is None:
            return None
        self.out.write(describe_byte(byte))
        self.out.flush()
        if byte == QUIT_BYTE:
            self.running = False
        return byte


def run_key_probe(
    session: Optional[TerminalSession] = None,
    reader_factory: Callable[[int], KeySource] = ByteReader,
) -> int:
    """Echo key bytes on the controlling terminal until ``q``."""
    session = session or TerminalSession()
    try:
        original = session.capture_original()
        with session.raw_mode(original):
            logger.debug("Key probe started")
            return KeyEchoApp(reader_factory(session.in_fd), session.out).run()
    except TerminalError as exc:
        session.fail(exc)
