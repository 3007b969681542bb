from __future__ import annotations

import fcntl
import os
import struct
import termios
from pathlib import Path
from typing import Iterator, Tuple

import pytest

from jate.errors import FatalEditorError
from jate.terminal import PosixTerminal, TerminalError, raw_mode
from jate.terminal import escapes

from conftest import ScriptedTerminal


@pytest.fixture
def pty_pair() -> Iterator[Tuple[int, int]]:
    master, slave = os.openpty()
    try:
        yield master, slave
    finally:
        os.close(master)
        os.close(slave)


def test_query_window_size_prefers_direct_size() -> None:
    terminal = ScriptedTerminal(size=(40, 120))

    assert terminal.query_window_size() == (40, 120)
    assert terminal.output == []


def test_query_window_size_falls_back_to_cursor_probe() -> None:
    terminal = ScriptedTerminal(size=None, probe_reply=b"\x1b[37;91R")

    assert terminal.query_window_size() == (37, 91)
    assert terminal.output == [escapes.CURSOR_FAR_CORNER, escapes.CURSOR_POSITION_QUERY]


def test_malformed_cursor_report_is_fatal() -> None:
    terminal = ScriptedTerminal(size=None, probe_reply=b"garbage")

    with pytest.raises(TerminalError) as excinfo:
        terminal.query_window_size()

    assert excinfo.value.operation == "getCursorPosition"
    assert isinstance(excinfo.value, FatalEditorError)


def test_missing_cursor_report_is_fatal() -> None:
    terminal = ScriptedTerminal(size=None)

    with pytest.raises(TerminalError):
        terminal.query_window_size()


def test_parse_position_report() -> None:
    assert escapes.parse_position_report(b"\x1b[24;80") == (24, 80)
    assert escapes.parse_position_report(b"\x1b[24;") is None
    assert escapes.parse_position_report(b"[24;80") is None


def test_raw_mode_restores_on_error() -> None:
    terminal = ScriptedTerminal()

    with pytest.raises(RuntimeError):
        with raw_mode(terminal):
            assert terminal.raw
            raise RuntimeError("boom")

    assert terminal.transitions == ["raw", "restore"]
    assert not terminal.raw


def test_posix_terminal_raw_mode_flags(pty_pair: Tuple[int, int]) -> None:
    _, slave = pty_pair
    terminal = PosixTerminal(slave, slave)
    before = termios.tcgetattr(slave)

    with raw_mode(terminal):
        attrs = termios.tcgetattr(slave)
        assert terminal.raw
        assert attrs[3] & termios.ECHO == 0
        assert attrs[3] & termios.ICANON == 0
        assert attrs[3] & termios.ISIG == 0
        assert attrs[0] & termios.IXON == 0
        assert attrs[1] & termios.OPOST == 0
        assert attrs[6][termios.VMIN] == 0
        assert attrs[6][termios.VTIME] == 1

    assert not terminal.raw
    assert termios.tcgetattr(slave)[3] == before[3]


def test_posix_terminal_restore_is_idempotent(pty_pair: Tuple[int, int]) -> None:
    _, slave = pty_pair
    terminal = PosixTerminal(slave, slave)

    terminal.restore_mode()
    terminal.enter_raw_mode()
    terminal.restore_mode()
    terminal.restore_mode()

    assert not terminal.raw


def test_posix_terminal_reads_and_writes(pty_pair: Tuple[int, int]) -> None:
    master, slave = pty_pair
    terminal = PosixTerminal(slave, slave)

    with raw_mode(terminal):
        os.write(master, b"q")
        assert terminal.read_byte() == ord("q")
        assert terminal.read_byte() is None

        terminal.write(b"hello")
        assert os.read(master, 5) == b"hello"


def test_posix_terminal_direct_window_size(pty_pair: Tuple[int, int]) -> None:
    _, slave = pty_pair
    terminal = PosixTerminal(slave, slave)

    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 30, 100, 0, 0))
    assert terminal.direct_window_size() == (30, 100)

    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
    assert terminal.direct_window_size() is None


def test_posix_terminal_rejects_non_tty(tmp_path: Path) -> None:
    target = tmp_path / "plain.txt"
    target.write_bytes(b"")
    fd = os.open(target, os.O_RDONLY)
    try:
        terminal = PosixTerminal(fd, fd)
        with pytest.raises(TerminalError) as excinfo:
            terminal.enter_raw_mode()
    finally:
        os.close(fd)

    assert excinfo.value.operation == "tcgetattr"
    assert not terminal.raw
