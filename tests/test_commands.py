"""Tests for the key-to-command table."""

import pytest

from rawedit.cli.core.commands import Binding, Command, KeyMap, ctrl_key


class TestCtrlKey:

    def test_ctrl_q(self) -> None:
        assert ctrl_key("q") == 0x11
        assert ctrl_key("Q") == 0x11

    def test_masks_to_control_range(self) -> None:
        assert ctrl_key("a") == 1
        assert ctrl_key("z") == 26


class TestKeyMap:

    def test_quit_binding(self) -> None:
        assert KeyMap().lookup(0x11) is Command.QUIT

    def test_every_other_byte_is_unbound(self) -> None:
        keymap = KeyMap()
        unbound = [b for b in range(256) if b != 0x11 and keymap.lookup(b) is not None]
        assert unbound == []

    def test_bind_extends_table(self) -> None:
        keymap = KeyMap()
        keymap.bind(Binding(ctrl_key("x"), Command.QUIT, "^X"))
        assert keymap.lookup(0x18) is Command.QUIT
        assert len(keymap) == 2
        assert [b.label for b in keymap] == ["^Q", "^X"]

    def test_bind_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            KeyMap().bind(Binding(256, Command.QUIT, "?"))

    def test_empty_keymap(self) -> None:
        keymap = KeyMap(bindings=())
        assert keymap.lookup(0x11) is None
