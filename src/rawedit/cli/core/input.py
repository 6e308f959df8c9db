"""Single-byte keyboard input."""

from __future__ import annotations

import errno
import os
import sys
from typing import Optional

from rawedit.cli.core.errors import TerminalReadError


class ByteReader:
    """
    Reads one byte per call straight from the terminal fd.

    Uses os.read() to bypass Python's I/O buffering. In raw mode the terminal
    is configured to return after at most 100 ms, so ``read_byte`` returns
    None when nothing was typed in that window.
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd

    def read_byte(self) -> Optional[int]:
        """Read a single byte, or None if the read timed out."""
        try:
            data = os.read(self._fd, 1)
        except OSError as exc:
            # Some platforms report the VTIME timeout as EAGAIN
            if exc.errno == errno.EAGAIN:
                return None
            raise TerminalReadError("read", exc) from exc
        return data[0] if data else None
