"""
rawedit: scaffold of a terminal screen editor

Puts the controlling terminal into raw mode, repaints a placeholder screen
and dispatches single keystrokes until Ctrl-Q.

Quick Start:
    $ rawedit edit
    $ rawedit keys      # show the byte value of each key pressed
"""

__version__ = "0.1.0"

from rawedit.cli.core.errors import TerminalError
from rawedit.cli.core.terminal import TerminalSession
from rawedit.cli.studio.editor import run_editor

__all__ = [
    "__version__",
    "TerminalError",
    "TerminalSession",
    "run_editor",
]
