"""Core terminal infrastructure - session, geometry, input, commands."""

from rawedit.cli.core.commands import Binding, Command, KeyMap, ctrl_key
from rawedit.cli.core.errors import (
    GeometryUnavailable,
    SessionStateError,
    TerminalConfigureError,
    TerminalError,
    TerminalQueryError,
    TerminalReadError,
)
from rawedit.cli.core.geometry import TerminalSize, query_dimensions
from rawedit.cli.core.input import ByteReader
from rawedit.cli.core.terminal import SessionState, TerminalAttributes, TerminalSession

__all__ = [
    "Binding",
    "Command",
    "KeyMap",
    "ctrl_key",
    "TerminalError",
    "TerminalQueryError",
    "TerminalConfigureError",
    "TerminalReadError",
    "GeometryUnavailable",
    "SessionStateError",
    "TerminalSize",
    "query_dimensions",
    "ByteReader",
    "SessionState",
    "TerminalAttributes",
    "TerminalSession",
]
