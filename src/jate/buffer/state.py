"""Cursor, viewport, and status message state for an editing session."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from jate.config import EditorConfig

from .document import Cursor, Document

# Rows reserved below the text area for the status and message bars.
BAR_ROWS = 2


@dataclass(slots=True)
class StatusMessage:
    """Transient message shown in the bottom bar."""

    text: str = ""
    timestamp: float = 0.0

    def visible(self, now: float, ttl: float) -> bool:
        return bool(self.text) and now - self.timestamp < ttl


@dataclass(slots=True)
class EditorState:
    """Everything one editing session mutates, passed explicitly to handlers.

    ``cx``/``cy`` index raw characters and document rows; ``rx`` is derived
    from them once per frame; ``rowoff``/``coloff`` locate the window.
    """

    document: Document
    screenrows: int = 0
    screencols: int = 0
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    status: StatusMessage = field(default_factory=StatusMessage)
    config: EditorConfig = field(default_factory=EditorConfig)
    clock: Callable[[], float] = time.time

    @classmethod
    def for_window(
        cls,
        document: Document,
        rows: int,
        cols: int,
        *,
        config: EditorConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> "EditorState":
        """State for a terminal of ``rows`` x ``cols`` including the bars."""

        return cls(
            document=document,
            screenrows=max(rows - BAR_ROWS, 1),
            screencols=max(cols, 1),
            config=config or EditorConfig(),
            clock=clock or time.time,
        )

    @property
    def cursor(self) -> Cursor:
        return (self.cy, self.cx)

    def set_cursor(self, cursor: Cursor) -> None:
        self.cy, self.cx = cursor

    @property
    def line_size(self) -> int:
        """Length of the cursor's line (0 on the virtual line past EOF)."""

        return self.document.line_size(self.cy)

    def set_status_message(self, text: str) -> None:
        self.status = StatusMessage(text=text, timestamp=self.clock())

    def status_visible(self) -> bool:
        return self.status.visible(self.clock(), self.config.message_ttl)


__all__ = ["EditorState", "StatusMessage", "BAR_ROWS"]
