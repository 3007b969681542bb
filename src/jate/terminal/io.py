"""Raw terminal access: mode switching, timed byte reads, and size queries."""

from __future__ import annotations

import errno
import fcntl
import os
import struct
import sys
import termios
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from jate.errors import FatalEditorError
from jate.runtime import telemetry

from . import escapes

WindowSize = Tuple[int, int]  # (rows, cols)

# Longest cursor position report accepted from the terminal.
_REPORT_LIMIT = 31


class TerminalError(FatalEditorError):
    """Unrecoverable failure of a terminal primitive."""


class Terminal(ABC):
    """Capability the editor needs from the controlling terminal.

    Subclasses provide the four primitives; the escape-sequence window size
    probe is shared so every backend gets the same fallback.
    """

    @abstractmethod
    def enter_raw_mode(self) -> None:
        """Disable line buffering, echo, signals and flow control."""

    @abstractmethod
    def restore_mode(self) -> None:
        """Return to the attributes captured by ``enter_raw_mode``."""

    @abstractmethod
    def read_byte(self) -> Optional[int]:
        """Return one byte, or ``None`` when the read timeout expired."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write ``data`` completely."""

    def direct_window_size(self) -> Optional[WindowSize]:
        """Ask the OS for the window size; ``None`` when unavailable."""

        return None

    def query_window_size(self) -> WindowSize:
        size = self.direct_window_size()
        if size is not None:
            return size
        telemetry.record_event("terminal.size_probe", level="debug")
        return self.probe_window_size()

    def probe_window_size(self) -> WindowSize:
        """Push the cursor to the far corner and ask where it ended up."""

        self.write(escapes.CURSOR_FAR_CORNER)
        return self.cursor_position()

    def cursor_position(self) -> WindowSize:
        self.write(escapes.CURSOR_POSITION_QUERY)
        report = bytearray()
        while len(report) < _REPORT_LIMIT:
            byte = self.read_byte()
            if byte is None or byte == ord("R"):
                break
            report.append(byte)

        position = escapes.parse_position_report(bytes(report))
        if position is None:
            raise TerminalError(
                "getCursorPosition", f"unexpected cursor report {bytes(report)!r}"
            )
        return position


class PosixTerminal(Terminal):
    """Terminal backed by termios on a pair of file descriptors."""

    def __init__(
        self,
        fd_in: Optional[int] = None,
        fd_out: Optional[int] = None,
        *,
        read_timeout_ds: int = 1,
    ) -> None:
        self.fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self.fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self.read_timeout_ds = read_timeout_ds
        self._original: Optional[List[object]] = None

    @property
    def raw(self) -> bool:
        return self._original is not None

    def enter_raw_mode(self) -> None:
        try:
            original = termios.tcgetattr(self.fd_in)
        except termios.error as exc:
            raise TerminalError("tcgetattr", _termios_cause(exc)) from exc

        attrs = [list(item) if isinstance(item, list) else item for item in original]
        attrs[0] &= ~(
            termios.BRKINT
            | termios.ICRNL
            | termios.INPCK
            | termios.ISTRIP
            | termios.IXON
        )
        attrs[1] &= ~termios.OPOST
        attrs[2] |= termios.CS8
        attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        attrs[6][termios.VMIN] = 0
        attrs[6][termios.VTIME] = self.read_timeout_ds

        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, attrs)
        except termios.error as exc:
            raise TerminalError("tcsetattr", _termios_cause(exc)) from exc
        self._original = original
        telemetry.record_event("terminal.raw_mode", level="debug", data={"raw": True})

    def restore_mode(self) -> None:
        if self._original is None:
            return
        original, self._original = self._original, None
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, original)
        except termios.error as exc:
            raise TerminalError("tcsetattr", _termios_cause(exc)) from exc
        telemetry.record_event("terminal.raw_mode", level="debug", data={"raw": False})

    def read_byte(self) -> Optional[int]:
        try:
            data = os.read(self.fd_in, 1)
        except OSError as exc:
            if exc.errno in (errno.EAGAIN, errno.EINTR):
                return None
            raise TerminalError("read", exc) from exc
        return data[0] if data else None

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.fd_out, view)
            except OSError as exc:
                if exc.errno == errno.EINTR:
                    continue
                raise TerminalError("write", exc) from exc
            view = view[written:]

    def direct_window_size(self) -> Optional[WindowSize]:
        try:
            packed = fcntl.ioctl(
                self.fd_out, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0)
            )
        except OSError:
            return None
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols == 0:
            return None
        return rows, cols


def _termios_cause(exc: BaseException) -> str:
    args = getattr(exc, "args", ())
    if len(args) >= 2:
        return str(args[1])
    return str(exc)


@contextmanager
def raw_mode(terminal: Terminal) -> Iterator[Terminal]:
    """Hold ``terminal`` in raw mode for the duration of the block."""

    terminal.enter_raw_mode()
    try:
        yield terminal
    finally:
        terminal.restore_mode()


__all__ = [
    "Terminal",
    "PosixTerminal",
    "TerminalError",
    "WindowSize",
    "raw_mode",
]
