"""Text mutations at the cursor."""

from __future__ import annotations

from jate.keymaps import ResolutionMatch
from jate.modes.base_mode import ModeContext, ModeResult

from .motion import move_right


def insert_character(context: ModeContext, char: str) -> ModeResult:
    """Type ``char`` at the cursor; used for keys with no binding."""

    state = context.state
    state.set_cursor(state.document.insert_char(state.cy, state.cx, char))
    return ModeResult(consumed=True, status="insert")


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    state.set_cursor(state.document.insert_newline(state.cy, state.cx))
    return ModeResult(consumed=True, status="newline")


def delete_back(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    state.set_cursor(state.document.delete_char(state.cy, state.cx))
    return ModeResult(consumed=True, status="delete")


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    move_right(context.state)
    return delete_back(context, match)


__all__ = ["insert_character", "insert_newline", "delete_back", "delete_forward"]
