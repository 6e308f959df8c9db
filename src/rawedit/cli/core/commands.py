"""Command table: maps single key bytes to editor commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional


class Command(Enum):
    """Commands the editor loop understands."""
    QUIT = auto()


def ctrl_key(letter: str) -> int:
    """Byte produced by holding Ctrl with ``letter`` (Ctrl-Q is 0x11)."""
    return ord(letter) & 0x1F


@dataclass(frozen=True)
class Binding:
    """A key byte bound to a command.

    Attributes:
        byte: Raw byte value read from the terminal
        command: Command dispatched for that byte
        label: Short display form of the key (e.g. "^Q")
        description: What the command does
    """
    byte: int
    command: Command
    label: str
    description: str = ""


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(ctrl_key("q"), Command.QUIT, "^Q", "Clear the screen and exit"),
)


class KeyMap:
    """Byte-to-command lookup. Unbound bytes map to no command."""

    def __init__(self, bindings: tuple[Binding, ...] = DEFAULT_BINDINGS) -> None:
        self._bindings: dict[int, Binding] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: Binding) -> None:
        if not 0 <= binding.byte <= 0xFF:
            raise ValueError(f"key byte out of range: {binding.byte}")
        self._bindings[binding.byte] = binding

    def lookup(self, byte: int) -> Optional[Command]:
        binding = self._bindings.get(byte)
        return binding.command if binding else None

    def __iter__(self) -> Iterator[Binding]:
        return iter(sorted(self._bindings.values(), key=lambda b: b.byte))

    def __len__(self) -> int:
        return len(self._bindings)
