"""Viewport scrolling and frame composition."""

from __future__ import annotations

from jate.buffer.state import EditorState
from jate.runtime import telemetry
from jate.terminal import escapes
from jate.terminal.io import Terminal

from .frame import FrameBuffer

EMPTY_ROW_MARKER = "~"
NO_NAME = "[No Name]"
FILENAME_WIDTH = 20


def scroll(state: EditorState) -> None:
    """Recompute ``rx`` and move the window just enough to show the cursor."""

    state.rx = state.document.render_column(state.cy, state.cx)

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screenrows:
        state.rowoff = state.cy - state.screenrows + 1
    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screencols:
        state.coloff = state.rx - state.screencols + 1


def status_text(state: EditorState) -> tuple[str, str]:
    """Left and right halves of the status bar."""

    document = state.document
    name = (document.filename or NO_NAME)[:FILENAME_WIDTH]
    left = f"{name} - {document.numrows} lines"
    if document.modified:
        left += " (modified)"
    right = f"{state.cy + 1}/{document.numrows}"
    return left, right


class RenderEngine:
    """Draws an ``EditorState`` onto a terminal."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal

    def refresh(self, state: EditorState) -> None:
        scroll(state)
        self.terminal.write(self.compose(state))

    def compose(self, state: EditorState) -> bytes:
        """Full frame for the current (already scrolled) state."""

        with telemetry.span(
            "render::frame",
            component="render",
            metadata={"rowoff": state.rowoff, "coloff": state.coloff},
        ):
            frame = FrameBuffer()
            frame.append(escapes.HIDE_CURSOR)
            frame.append(escapes.CURSOR_HOME)
            self.draw_rows(state, frame)
            self.draw_status_bar(state, frame)
            self.draw_message_bar(state, frame)
            frame.append(
                escapes.cursor_to(
                    state.cy - state.rowoff + 1, state.rx - state.coloff + 1
                )
            )
            frame.append(escapes.SHOW_CURSOR)
            return frame.getvalue()

    def draw_rows(self, state: EditorState, frame: FrameBuffer) -> None:
        document = state.document
        for y in range(state.screenrows):
            filerow = y + state.rowoff
            if filerow < document.numrows:
                frame.text(
                    document.rendered_slice(filerow, state.coloff, state.screencols)
                )
            elif document.numrows == 0 and y == state.screenrows // 3:
                frame.text(self._banner(state))
            else:
                frame.text(EMPTY_ROW_MARKER)
            frame.append(escapes.ERASE_LINE)
            frame.append(escapes.NEWLINE)

    @staticmethod
    def _banner(state: EditorState) -> str:
        welcome = state.config.banner[: state.screencols]
        padding = (state.screencols - len(welcome)) // 2
        if padding:
            return EMPTY_ROW_MARKER + " " * (padding - 1) + welcome
        return welcome

    def draw_status_bar(self, state: EditorState, frame: FrameBuffer) -> None:
        left, right = status_text(state)
        width = state.screencols
        left = left[:width]
        gap = width - len(left)
        if gap >= len(right):
            line = left + " " * (gap - len(right)) + right
        else:
            line = left + " " * gap
        frame.append(escapes.INVERSE_ON)
        frame.text(line)
        frame.append(escapes.STYLE_RESET)
        frame.append(escapes.NEWLINE)

    def draw_message_bar(self, state: EditorState, frame: FrameBuffer) -> None:
        frame.append(escapes.ERASE_LINE)
        if state.status_visible():
            frame.text(state.status.text[: state.screencols])


__all__ = ["RenderEngine", "scroll", "status_text"]
