"""Jate: a small raw-mode terminal text editor."""

__all__ = [
    "actions",
    "buffer",
    "keymaps",
    "modes",
    "render",
    "runtime",
    "terminal",
]

__version__ = "0.0.1"
