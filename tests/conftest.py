from __future__ import annotations

import io
from collections import deque
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

import pytest

from jate.buffer import Document, EditorState, FileStoreError
from jate.modes import ModeBus, ModeContext, ModeResult
from jate.modes.editing_mode import EditingMode
from jate.modes.mode_manager import ModeManager
from jate.modes.prompt_mode import PromptMode
from jate.terminal.io import Terminal, WindowSize
from jate.terminal.keys import KeyEvent, KeyKind

# A pause in scripted input: the next read times out.
PAUSE = None

Chunk = Union[bytes, str, None]


class ExhaustedScript(RuntimeError):
    """The editor kept reading after the scripted input ran out."""


class ScriptedTerminal(Terminal):
    """In-memory terminal fed with a fixed key script.

    ``read_byte`` returns ``None`` for each ``PAUSE`` in the script and once
    the script is consumed, like a real terminal whose read timed out. A test
    that forgets to quit fails with ``ExhaustedScript`` instead of hanging.
    """

    idle_limit = 100

    def __init__(
        self,
        *chunks: Chunk,
        size: Optional[WindowSize] = (24, 80),
        probe_reply: bytes = b"",
    ) -> None:
        self.pending: deque[Optional[int]] = deque()
        self.size = size
        self.probe_reply = probe_reply
        self.output: List[bytes] = []
        self.raw = False
        self.transitions: List[str] = []
        self._idle = 0
        self.feed(*chunks)

    def feed(self, *chunks: Chunk) -> None:
        for chunk in chunks:
            if chunk is None:
                self.pending.append(None)
            elif isinstance(chunk, str):
                self.pending.extend(chunk.encode("ascii"))
            else:
                self.pending.extend(chunk)

    def enter_raw_mode(self) -> None:
        self.raw = True
        self.transitions.append("raw")

    def restore_mode(self) -> None:
        self.raw = False
        self.transitions.append("restore")

    def read_byte(self) -> Optional[int]:
        if self.pending:
            self._idle = 0
            return self.pending.popleft()
        self._idle += 1
        if self._idle > self.idle_limit:
            raise ExhaustedScript("no more scripted input")
        return None

    def write(self, data: bytes) -> None:
        self.output.append(bytes(data))
        if data.endswith(b"\x1b[6n") and self.probe_reply:
            self.feed(self.probe_reply)

    def direct_window_size(self) -> Optional[WindowSize]:
        return self.size

    @property
    def written(self) -> bytes:
        return b"".join(self.output)


class MemoryFileStore:
    """FileStore backed by a dict; ``fail_writes`` makes every write fail."""

    def __init__(
        self,
        files: Optional[Dict[str, bytes]] = None,
        *,
        fail_writes: Optional[str] = None,
    ) -> None:
        self.files: Dict[str, bytes] = dict(files or {})
        self.fail_writes = fail_writes
        self.writes: List[tuple[str, bytes]] = []

    def read_lines(self, filename: str) -> Iterator[str]:
        if filename not in self.files:
            raise FileStoreError(
                filename, FileNotFoundError(2, "No such file or directory")
            )
        text = self.files[filename].decode("utf-8", "surrogateescape")
        return iter(io.StringIO(text, newline="\n"))

    def write(self, filename: str, data: bytes) -> int:
        if self.fail_writes is not None:
            raise FileStoreError(filename, self.fail_writes)
        self.files[filename] = bytes(data)
        self.writes.append((filename, bytes(data)))
        return len(data)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_manager(
    *lines: str,
    filename: Optional[str] = None,
    rows: int = 12,
    store: Optional[MemoryFileStore] = None,
    line_prompt: Optional[Callable[[str], Optional[str]]] = None,
) -> ModeManager:
    document = Document.from_lines(lines, filename=filename)
    state = EditorState.for_window(document, rows, 40, clock=FakeClock())
    extras: Dict[str, Any] = {"line_prompt": line_prompt or (lambda template: None)}
    context = ModeContext(
        state=state, store=store or MemoryFileStore(), bus=ModeBus(), extras=extras
    )
    manager = ModeManager(context)
    manager.register_mode(EditingMode)
    manager.register_mode(PromptMode)
    return manager


def press(manager: ModeManager, *keys: KeyEvent | str | KeyKind) -> List[ModeResult]:
    results = []
    for key in keys:
        if isinstance(key, KeyKind):
            event = KeyEvent.of(key)
        elif isinstance(key, str):
            event = KeyEvent.character(key)
        else:
            event = key
        results.append(manager.handle_key(event))
    return results


def state_of(manager: ModeManager) -> EditorState:
    return manager.context.state


CTRL_Q = b"\x11"
CTRL_S = b"\x13"
CTRL_H = b"\x08"
ENTER = b"\r"
ESC = b"\x1b"
BACKSPACE = b"\x7f"
ARROW_UP = b"\x1b[A"
ARROW_DOWN = b"\x1b[B"
ARROW_RIGHT = b"\x1b[C"
ARROW_LEFT = b"\x1b[D"
DELETE = b"\x1b[3~"
PAGE_UP = b"\x1b[5~"
PAGE_DOWN = b"\x1b[6~"
HOME = b"\x1b[H"
END = b"\x1b[F"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryFileStore:
    return MemoryFileStore()
