"""Declarative keymap registry.

Built-in bindings live in ``jate.keymaps.defaults``; it is imported on demand
because the default actions depend on the mode types.
"""

from .models import ActionRef, Binding
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
