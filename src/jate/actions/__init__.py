"""High-level editing verbs bound to keys."""

from .core import noop_action
from .edit import delete_back, delete_forward, insert_character, insert_newline
from .file import request_quit, reset_quit_counter, save_document
from .motion import (
    cursor_down,
    cursor_left,
    cursor_right,
    cursor_up,
    line_end,
    line_start,
    page_down_action,
    page_up_action,
)
from .prompt import prompt_backspace, prompt_cancel, prompt_submit

__all__ = [
    "noop_action",
    "insert_character",
    "insert_newline",
    "delete_back",
    "delete_forward",
    "save_document",
    "request_quit",
    "reset_quit_counter",
    "cursor_left",
    "cursor_right",
    "cursor_up",
    "cursor_down",
    "line_start",
    "line_end",
    "page_up_action",
    "page_down_action",
    "prompt_backspace",
    "prompt_cancel",
    "prompt_submit",
]
