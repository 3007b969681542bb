"""Turns a key in a given mode into the action it should run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from jate.runtime.telemetry import span
from jate.terminal.keys import KeyEvent

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """A binding together with the action it names."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None

    @property
    def matched(self) -> bool:
        return self.match is not None


MISS = ResolutionResult(status="miss")


class KeymapResolver:
    """Read-only view of a ``KeymapRegistry`` used during key dispatch."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve_key(self, mode: str, key: KeyEvent) -> ResolutionResult:
        return self.resolve(mode, key.token)

    def resolve(self, mode: str, token: str) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "key": token},
        ) as handle:
            binding = self._registry.binding_for(mode, token)
            if binding is None:
                handle.add_metadata("status", "miss")
                return MISS
            handle.add_metadata("binding_id", binding.id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(
                    binding=binding,
                    action=self._registry.get_action(binding.action_id),
                ),
            )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "MISS",
]
