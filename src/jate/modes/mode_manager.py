"""Mode manager: owns the mode table and routes keys to the active mode."""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

from jate.keymaps import KeymapRegistry, KeymapResolver
from jate.keymaps.defaults import load_default_keymaps
from jate.runtime import telemetry
from jate.terminal.keys import KeyEvent

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Registers modes, tracks the active one and applies mode switches.

    The keymap registry and resolver are published through ``context.extras``
    so that modes can look bindings up without a reference to the manager.
    Unless a registry is supplied, the built-in keymaps are loaded.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("jate.modes")

        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="jate.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="jate.keymaps"
        )

        extras = self.context.extras
        extras.setdefault("keymap_registry", self.keymap_registry)
        extras.setdefault("keymap_resolver", self.keymap_resolver)
        extras.setdefault("mode_manager", self)

    @property
    def modes(self) -> Tuple[str, ...]:
        return tuple(self._modes)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    def get_mode(self, name: str) -> Mode:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        return self._modes[name]

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        """Instantiate ``mode_cls``; the first mode registered becomes active."""

        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self.get_mode(name)
        previous = self.active_mode
        if previous is target:
            return
        if previous is not None:
            previous.on_exit(name)
        self._active = name
        target.on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.name if previous else "", "to": name},
        )

    def handle_key(self, key: KeyEvent) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
