"""Built-in keymaps for the editing and prompt modes."""

from __future__ import annotations

from typing import Iterable, Sequence

from jate.actions import core as core_actions
from jate.actions import edit as edit_actions
from jate.actions import file as file_actions
from jate.actions import motion as motion_actions
from jate.actions import prompt as prompt_actions
from jate.terminal.keys import KeyEvent, KeyKind

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.noop",
        handler=core_actions.noop_action,
        description="Ignore the key",
    ),
    ActionRef(
        id="edit.newline",
        handler=edit_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_back",
        handler=edit_actions.delete_back,
        description="Delete the character left of the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=edit_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="file.save",
        handler=file_actions.save_document,
        description="Save the document",
    ),
    ActionRef(
        id="file.quit",
        handler=file_actions.request_quit,
        description="Quit, confirming unsaved changes",
    ),
    ActionRef(
        id="motion.left",
        handler=motion_actions.cursor_left,
        description="Move left, wrapping to the previous line",
    ),
    ActionRef(
        id="motion.right",
        handler=motion_actions.cursor_right,
        description="Move right, wrapping to the next line",
    ),
    ActionRef(
        id="motion.up",
        handler=motion_actions.cursor_up,
        description="Move up one line",
    ),
    ActionRef(
        id="motion.down",
        handler=motion_actions.cursor_down,
        description="Move down one line",
    ),
    ActionRef(
        id="motion.line_start",
        handler=motion_actions.line_start,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="motion.line_end",
        handler=motion_actions.line_end,
        description="Move to the end of the line",
    ),
    ActionRef(
        id="motion.page_up",
        handler=motion_actions.page_up_action,
        description="Move one screen up",
    ),
    ActionRef(
        id="motion.page_down",
        handler=motion_actions.page_down_action,
        description="Move one screen down",
    ),
    ActionRef(
        id="prompt.backspace",
        handler=prompt_actions.prompt_backspace,
        description="Remove the last prompt character",
    ),
    ActionRef(
        id="prompt.cancel",
        handler=prompt_actions.prompt_cancel,
        description="Abandon the prompt",
    ),
    ActionRef(
        id="prompt.submit",
        handler=prompt_actions.prompt_submit,
        description="Accept the prompt input",
    ),
)


def _bind(mode: str, key: KeyEvent, action_id: str, description: str = "") -> Binding:
    name = key.token.lower().replace("+", "_")
    return Binding.for_key(
        f"{mode}.{name}",
        mode=mode,
        key=key,
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("editing", KeyEvent.of(KeyKind.ENTER), "edit.newline"),
    _bind("editing", KeyEvent.ctrl("q"), "file.quit"),
    _bind("editing", KeyEvent.ctrl("s"), "file.save"),
    _bind("editing", KeyEvent.of(KeyKind.HOME), "motion.line_start"),
    _bind("editing", KeyEvent.of(KeyKind.END), "motion.line_end"),
    _bind("editing", KeyEvent.of(KeyKind.BACKSPACE), "edit.delete_back"),
    _bind("editing", KeyEvent.ctrl("h"), "edit.delete_back"),
    _bind("editing", KeyEvent.of(KeyKind.DELETE), "edit.delete_forward"),
    _bind("editing", KeyEvent.of(KeyKind.PAGE_UP), "motion.page_up"),
    _bind("editing", KeyEvent.of(KeyKind.PAGE_DOWN), "motion.page_down"),
    _bind("editing", KeyEvent.of(KeyKind.ARROW_LEFT), "motion.left"),
    _bind("editing", KeyEvent.of(KeyKind.ARROW_RIGHT), "motion.right"),
    _bind("editing", KeyEvent.of(KeyKind.ARROW_UP), "motion.up"),
    _bind("editing", KeyEvent.of(KeyKind.ARROW_DOWN), "motion.down"),
    _bind("editing", KeyEvent.ctrl("l"), "core.noop", "Reserved for redraw"),
    _bind("editing", KeyEvent.of(KeyKind.ESCAPE), "core.noop"),
    _bind("prompt", KeyEvent.of(KeyKind.BACKSPACE), "prompt.backspace"),
    _bind("prompt", KeyEvent.ctrl("h"), "prompt.backspace"),
    _bind("prompt", KeyEvent.of(KeyKind.DELETE), "prompt.backspace"),
    _bind("prompt", KeyEvent.of(KeyKind.ESCAPE), "prompt.cancel"),
    _bind("prompt", KeyEvent.of(KeyKind.ENTER), "prompt.submit"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
