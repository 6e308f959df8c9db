"""Screen geometry probe."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from rawedit.cli.core.errors import GeometryUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


def query_dimensions(fd: int) -> TerminalSize:
    """Ask the terminal behind ``fd`` for its window size.

    A zero-sized answer is treated as a failed query, not a valid terminal.
    """
    try:
        size = os.get_terminal_size(fd)
    except OSError as exc:
        raise GeometryUnavailable("ioctl(TIOCGWINSZ)", exc) from exc

    if size.columns == 0 or size.lines == 0:
        raise GeometryUnavailable(
            "ioctl(TIOCGWINSZ)",
            detail=f"terminal reported {size.lines} rows x {size.columns} columns",
        )

    logger.debug("Terminal size is %dx%d", size.lines, size.columns)
    return TerminalSize(size.lines, size.columns)
