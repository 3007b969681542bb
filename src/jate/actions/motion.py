"""Cursor motion over the document."""

from __future__ import annotations

from jate.buffer import EditorState
from jate.keymaps import ResolutionMatch
from jate.modes.base_mode import ModeContext, ModeResult


def move_left(state: EditorState) -> None:
    if state.cx > 0:
        state.cx -= 1
    elif state.cy > 0:
        state.cy -= 1
        state.cx = state.line_size
    clamp_column(state)


def move_right(state: EditorState) -> None:
    if state.cy < state.document.numrows:
        if state.cx < state.line_size:
            state.cx += 1
        else:
            state.cy += 1
            state.cx = 0
    clamp_column(state)


def move_up(state: EditorState) -> None:
    if state.cy > 0:
        state.cy -= 1
    clamp_column(state)


def move_down(state: EditorState) -> None:
    if state.cy < state.document.numrows:
        state.cy += 1
    clamp_column(state)


def clamp_column(state: EditorState) -> None:
    """Snap ``cx`` back onto the current line after a move."""

    state.cx = max(0, min(state.cx, state.line_size))


def page_up(state: EditorState) -> None:
    state.cy = state.rowoff
    for _ in range(state.screenrows):
        move_up(state)


def page_down(state: EditorState) -> None:
    state.cy = min(state.rowoff + state.screenrows - 1, state.document.numrows)
    for _ in range(state.screenrows):
        move_down(state)


def cursor_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    move_left(context.state)
    return ModeResult(consumed=True, status="motion")


def cursor_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    move_right(context.state)
    return ModeResult(consumed=True, status="motion")


def cursor_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    move_up(context.state)
    return ModeResult(consumed=True, status="motion")


def cursor_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    move_down(context.state)
    return ModeResult(consumed=True, status="motion")


def line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cx = 0
    return ModeResult(consumed=True, status="motion")


def line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cx = context.state.line_size
    return ModeResult(consumed=True, status="motion")


def page_up_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    page_up(context.state)
    return ModeResult(consumed=True, status="motion")


def page_down_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    page_down(context.state)
    return ModeResult(consumed=True, status="motion")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "clamp_column",
    "page_up",
    "page_down",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "line_start",
    "line_end",
    "page_up_action",
    "page_down_action",
]
