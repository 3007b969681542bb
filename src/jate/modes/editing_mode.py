"""Editing mode: the default key dispatch table."""

from __future__ import annotations

from jate.actions.edit import insert_character
from jate.actions.file import QUIT_PENDING, reset_quit_counter
from jate.runtime import telemetry
from jate.terminal.keys import KeyEvent, KeyKind

from .base_mode import Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class EditingMode(Mode):
    name = "editing"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("jate.modes.editing")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        reset_quit_counter(self.context)

    def handle_key(self, key: KeyEvent) -> ModeResult:
        result = self._resolver.resolve_key(self.name, key)
        if result.match is not None:
            outcome = execute_match(self.context, result.match)
        elif key.kind is KeyKind.CHAR and key.char:
            outcome = insert_character(self.context, key.char)
        else:
            outcome = ModeResult(consumed=False, status="ignored")

        # Only an immediately repeated quit keeps the countdown going.
        if outcome.status != QUIT_PENDING:
            reset_quit_counter(self.context)
        return outcome
