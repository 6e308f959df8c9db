"""Editor render/input loop."""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Optional, Protocol

from rawedit.cli.core.commands import Command, KeyMap
from rawedit.cli.core.errors import TerminalError
from rawedit.cli.core.geometry import TerminalSize, query_dimensions
from rawedit.cli.core.input import ByteReader
from rawedit.cli.core.terminal import CLEAR_SCREEN, CURSOR_HOME, TerminalSession

logger = logging.getLogger(__name__)

ROW_MARKER = b"~"
# Output post-processing is off in raw mode, so newlines need an explicit CR
LINE_BREAK = b"\r\n"


class KeySource(Protocol):
    def read_byte(self) -> Optional[int]: ...


class EditorApp:
    """
    Placeholder screen editor.

    Each cycle repaints the screen, then waits up to 100 ms for one byte
    and dispatches it through the key map. Ctrl-Q quits.
    """

    def __init__(
        self,
        size: TerminalSize,
        reader: KeySource,
        out: BinaryIO,
        keymap: Optional[KeyMap] = None,
    ) -> None:
        self.size = size
        self.reader = reader
        self.out = out
        self.keymap = KeyMap() if keymap is None else keymap
        self.running = False
        self.exit_code = 0

    def run(self) -> int:
        """Main loop. Returns the exit status once a quit command arrives."""
        self.running = True
        logger.debug("Editor loop started at %dx%d", self.size.rows, self.size.cols)
        while self.running:
            self.refresh_screen()
            self.process_keypress()
        return self.exit_code

    def render(self) -> bytes:
        """Build one full frame."""
        frame = [CLEAR_SCREEN, CURSOR_HOME]
        frame.extend(ROW_MARKER + LINE_BREAK for _ in range(self.size.rows))
        frame.append(CURSOR_HOME)
        return b"".join(frame)

    def refresh_screen(self) -> None:
        self._write(self.render())

    def process_keypress(self) -> Optional[Command]:
        """Read at most one byte and run its command, if any."""
        byte = self.reader.read_byte()
        if byte is None:
            return None

        command = self.keymap.lookup(byte)
        if command is None:
            return None

        logger.debug("Dispatching %s for byte 0x%02x", command.name, byte)
        if command is Command.QUIT:
            self.quit()
        return command

    def quit(self, exit_code: int = 0) -> None:
        """Leave the screen tidy and stop the loop."""
        self._write(CLEAR_SCREEN + CURSOR_HOME)
        self.exit_code = exit_code
        self.running = False

    def _write(self, data: bytes) -> None:
        self.out.write(data)
        self.out.flush()


def run_editor(
    session: Optional[TerminalSession] = None,
    reader_factory: Callable[[int], KeySource] = ByteReader,
) -> int:
    """Run the editor on the controlling terminal and return its exit status.

    Any terminal failure clears the screen, reports on stderr and exits
    with status 1.
    """
    session = session or TerminalSession()
    try:
        original = session.capture_original()
        # Geometry is probed before any raw-mode mutation
        size = query_dimensions(session.out_fd)
        with session.raw_mode(original):
            app = EditorApp(size, reader_factory(session.in_fd), session.out)
            return app.run()
    except TerminalError as exc:
        session.fail(exc)
