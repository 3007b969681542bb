"""Single-line prompt mode used for questions such as "Save as"."""

from __future__ import annotations

from jate.actions.prompt import append_text, begin_prompt, prompt_state
from jate.runtime import telemetry
from jate.terminal.keys import KeyEvent

from .base_mode import Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class PromptMode(Mode):
    """Collects printable ASCII until Enter (commit) or Escape (cancel)."""

    name = "prompt"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("jate.modes.prompt")
        self._resolver = require_keymap_resolver(context)

    def begin(self, template: str) -> None:
        begin_prompt(self.context, template)

    @property
    def text(self) -> str:
        return prompt_state(self.context)["text"]

    def handle_key(self, key: KeyEvent) -> ModeResult:
        result = self._resolver.resolve_key(self.name, key)
        if result.match is not None:
            return execute_match(self.context, result.match)

        if key.is_printable_ascii and key.char:
            return append_text(self.context, key.char)

        return ModeResult(consumed=False, status="miss", message="unhandled")
