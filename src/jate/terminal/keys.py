"""Logical key events produced by the decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(str, Enum):
    """Closed set of keys the editor understands."""

    ARROW_UP = "ARROW_UP"
    ARROW_DOWN = "ARROW_DOWN"
    ARROW_LEFT = "ARROW_LEFT"
    ARROW_RIGHT = "ARROW_RIGHT"
    HOME = "HOME"
    END = "END"
    DELETE = "DELETE"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    BACKSPACE = "BACKSPACE"
    ENTER = "ENTER"
    ESCAPE = "ESC"
    CTRL = "CTRL"
    CHAR = "CHAR"


def ctrl_key(letter: str) -> int:
    """Byte a terminal sends for ``Ctrl+<letter>``."""

    return ord(letter) & 0x1F


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """One decoded key.

    ``char`` carries the character for ``CHAR`` keys and the lower-case letter
    for ``CTRL`` keys; it is ``None`` for every other kind.
    """

    kind: KeyKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        needs_char = self.kind in (KeyKind.CHAR, KeyKind.CTRL)
        if needs_char and not self.char:
            raise ValueError(f"{self.kind.value} key requires a character")
        if not needs_char and self.char is not None:
            raise ValueError(f"{self.kind.value} key cannot carry a character")

    @classmethod
    def of(cls, kind: KeyKind) -> "KeyEvent":
        return cls(kind)

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(KeyKind.CTRL, letter.lower())

    @property
    def token(self) -> str:
        """Name used by keymap bindings (``ctrl+q``, ``ENTER``, ``x``)."""

        if self.kind is KeyKind.CTRL:
            return f"ctrl+{self.char}"
        if self.kind is KeyKind.CHAR:
            return str(self.char)
        return self.kind.value

    @property
    def is_printable_ascii(self) -> bool:
        return (
            self.kind is KeyKind.CHAR
            and self.char is not None
            and len(self.char) == 1
            and 32 <= ord(self.char) < 127
        )


__all__ = ["KeyKind", "KeyEvent", "ctrl_key"]
