"""Editor modes and key dispatch.

Concrete modes live in ``editing_mode`` and ``prompt_mode``; the coordinator is
``mode_manager.ModeManager``. Only the shared base types are re-exported here
so that action modules can depend on them without pulling in the keymaps.
"""

from .base_mode import Mode, ModeBus, ModeContext, ModeResult

__all__ = [
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
