"""Core action implementations shared across modes."""

from __future__ import annotations

from jate.keymaps import ResolutionMatch
from jate.modes.base_mode import ModeContext, ModeResult


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = ["noop_action"]
