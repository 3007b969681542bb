"""Types shared by the editor modes and the actions they dispatch to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from jate.buffer import Document, EditorState, FileStore
from jate.terminal.keys import KeyEvent

Listener = Callable[[object], None]


@dataclass(slots=True)
class ModeResult:
    """What a mode did with a key.

    ``status`` is a short machine-readable outcome (``"insert"``, ``"saved"``,
    ``"quit"``); the editor loop only acts on a few of them. ``switch_to``
    asks the manager to change mode once the key is handled.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Everything a mode or action may touch while handling a key."""

    state: EditorState
    store: FileStore
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def document(self) -> Document:
        return self.state.document


class ModeBus:
    """Synchronous publish/subscribe channel for editor events."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""

        self._listeners.setdefault(event, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for listener in list(self._listeners.get(event, ())):
            listener(payload)


class Mode(ABC):
    """A key handling state registered on the ``ModeManager``."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        """Called after the manager makes this mode active."""

    def on_exit(self, next_mode: Optional[str]) -> None:
        """Called before the manager leaves this mode."""

    @abstractmethod
    def handle_key(self, key: KeyEvent) -> ModeResult:
        """Handle one decoded key."""
