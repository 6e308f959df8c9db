"""Tests for the key echo probe."""

import io
import sys

import pytest
from rich.console import Console

from rawedit.cli.core.terminal import SessionState, TerminalSession
from rawedit.cli.studio.keys import KeyEchoApp, describe_byte, run_key_probe


class TestDescribeByte:

    @pytest.mark.parametrize("byte, expected", [
        (ord("a"), b"97 ('a')\r\n"),
        (ord("q"), b"113 ('q')\r\n"),
        (ord(" "), b"32 (' ')\r\n"),
        (0x03, b"3\r\n"),
        (0x1B, b"27\r\n"),
        (0x7F, b"127\r\n"),
    ])
    def test_line_format(self, byte, expected) -> None:
        assert describe_byte(byte) == expected


class TestKeyEchoApp:

    def test_echoes_until_q(self, scripted_reader) -> None:
        out = io.BytesIO()
        reader = scripted_reader([None, ord("a"), 0x0D, None, ord("q")])
        assert KeyEchoApp(reader, out).run() == 0
        assert out.getvalue() == b"97 ('a')\r\n13\r\n113 ('q')\r\n"
        assert reader.reads == 5

    def test_ctrl_q_does_not_stop_probe(self, scripted_reader) -> None:
        out = io.BytesIO()
        reader = scripted_reader([0x11, ord("q")])
        KeyEchoApp(reader, out).run()
        assert out.getvalue().startswith(b"17\r\n")


class TestRunKeyProbe:

    def test_restores_terminal(self, session, pty_pair, scripted_reader) -> None:
        before = pty_pair.attributes()
        code = run_key_probe(session, reader_factory=lambda fd: scripted_reader([ord("q")]))
        assert code == 0
        assert session.state is SessionState.RESTORED
        assert pty_pair.attributes() == before

    def test_closed_stdin_fails_cleanly(self, pty_pair, err_output, monkeypatch) -> None:
        monkeypatch.setattr(sys, "stdin", None)
        session = TerminalSession(
            out=io.BytesIO(),
            out_fd=pty_pair.slave,
            err_console=Console(file=err_output, width=200),
        )
        with pytest.raises(SystemExit) as excinfo:
            run_key_probe(session)
        assert excinfo.value.code == 1
        assert "tcgetattr: standard stream is closed" in err_output.getvalue()
