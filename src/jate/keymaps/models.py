"""Dataclasses describing keymap bindings and the actions they run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from jate.terminal.keys import KeyEvent


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler invoked when a binding matches."""

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key token (see ``KeyEvent.token``) with an action."""

    id: str
    mode: str
    key: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.key:
            raise ValueError("binding key cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @classmethod
    def for_key(
        cls,
        binding_id: str,
        *,
        mode: str,
        key: KeyEvent | str,
        action_id: str,
        description: str = "",
    ) -> "Binding":
        token = key.token if isinstance(key, KeyEvent) else key
        return cls(
            id=binding_id,
            mode=mode,
            key=token,
            action_id=action_id,
            description=description,
        )


__all__ = ["ActionRef", "Binding"]
