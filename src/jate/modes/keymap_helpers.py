"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Callable, Optional, cast

from jate.keymaps import KeymapResolver, ResolutionMatch
from jate.runtime import telemetry

from .base_mode import ModeContext, ModeResult

LinePrompt = Callable[[str], Optional[str]]


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def require_line_prompt(context: ModeContext) -> LinePrompt:
    prompt = context.extras.get("line_prompt")
    if not callable(prompt):
        raise RuntimeError("ModeContext.extras missing 'line_prompt'")
    return cast(LinePrompt, prompt)


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = [
    "LinePrompt",
    "require_keymap_resolver",
    "require_line_prompt",
    "execute_match",
]
