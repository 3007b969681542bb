"""Keymap registry: named actions plus one key table per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from jate.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key already bound in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(f"'{other.id}'" for other in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' wants {binding.mode}:{binding.key}, "
            f"already bound by {taken}"
        )


class KeymapRegistry:
    """Owns action references and the per-mode key tables.

    Each mode maps a key token to at most one binding, so lookups during key
    dispatch are a pair of dict reads. ``revision`` increases whenever the
    tables change.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._tables: Dict[str, Dict[str, Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.key`` in ``binding.mode``.

        With ``replace`` an existing binding with the same id, or on the same
        key, is dropped first; otherwise either case is an error.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' needs unknown action "
                    f"'{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if not replace:
                if conflicts:
                    raise KeymapConflictError(binding, conflicts)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            else:
                previous = self._bindings.get(binding.id)
                dropped = conflicts + ([previous] if previous else [])
                for old in dropped:
                    self._drop(old)
                handle.add_metadata("replaced", len(dropped))

            self._bindings[binding.id] = binding
            self._tables.setdefault(binding.mode, {})[binding.key] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
        else:
            yield from self._tables.get(mode, {}).values()

    def binding_for(self, mode: str, key: str) -> Optional[Binding]:
        return self._tables.get(mode, {}).get(key)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._tables)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Other bindings already holding ``binding``'s key in its mode."""

        current = self.binding_for(binding.mode, binding.key)
        if current is None or current.id == binding.id:
            return []
        return [current]

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        table = self._tables.get(binding.mode)
        if table is None:
            return
        if table.get(binding.key) is binding:
            del table[binding.key]
        if not table:
            del self._tables[binding.mode]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
