"""Actions that edit and finish the line prompt."""

from __future__ import annotations

from typing import MutableMapping, cast

from jate.keymaps import ResolutionMatch
from jate.modes.base_mode import ModeContext, ModeResult

PROMPT_SUBMIT = "prompt_submit"
PROMPT_CANCEL = "prompt_cancel"


def prompt_state(context: ModeContext) -> MutableMapping[str, str]:
    state = cast(
        MutableMapping[str, str], context.extras.setdefault("prompt_state", {})
    )
    state.setdefault("template", "{}")
    state.setdefault("text", "")
    return state


def begin_prompt(context: ModeContext, template: str) -> None:
    state = prompt_state(context)
    state["template"] = template
    state["text"] = ""
    show_prompt(context)


def show_prompt(context: ModeContext) -> None:
    """Mirror the prompt and its input into the message bar."""

    state = prompt_state(context)
    context.state.set_status_message(state["template"].format(state["text"]))


def append_text(context: ModeContext, text: str) -> ModeResult:
    state = prompt_state(context)
    state["text"] += text
    show_prompt(context)
    return ModeResult(consumed=True, status="editing")


def prompt_backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = prompt_state(context)
    state["text"] = state["text"][:-1]
    show_prompt(context)
    return ModeResult(consumed=True, status="editing")


def prompt_cancel(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = prompt_state(context)
    context.bus.emit("prompt.cancel", state["template"])
    state["text"] = ""
    context.state.set_status_message("")
    return ModeResult(consumed=True, switch_to="editing", status=PROMPT_CANCEL)


def prompt_submit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = prompt_state(context)
    text = state["text"]
    if not text:
        return ModeResult(consumed=True, status="prompt_empty")
    context.bus.emit("prompt.submit", text)
    state["text"] = ""
    context.state.set_status_message("")
    return ModeResult(
        consumed=True, switch_to="editing", status=PROMPT_SUBMIT, message=text
    )


__all__ = [
    "PROMPT_SUBMIT",
    "PROMPT_CANCEL",
    "prompt_state",
    "begin_prompt",
    "show_prompt",
    "append_text",
    "prompt_backspace",
    "prompt_cancel",
    "prompt_submit",
]
