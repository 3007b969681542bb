"""Byte stream to key event translation."""

from __future__ import annotations

from typing import Dict, Optional

from jate.config import ESCAPE_LOOKAHEAD

from .io import Terminal
from .keys import KeyEvent, KeyKind

ESC_BYTE = 0x1B
ENTER_BYTE = 0x0D
TAB_BYTE = 0x09
BACKSPACE_BYTE = 0x7F

# ``ESC [ <letter>`` and ``ESC O <letter>``.
CSI_LETTERS: Dict[str, KeyKind] = {
    "A": KeyKind.ARROW_UP,
    "B": KeyKind.ARROW_DOWN,
    "C": KeyKind.ARROW_RIGHT,
    "D": KeyKind.ARROW_LEFT,
    "H": KeyKind.HOME,
    "F": KeyKind.END,
}
SS3_LETTERS: Dict[str, KeyKind] = {
    "H": KeyKind.HOME,
    "F": KeyKind.END,
}
# ``ESC [ <digit> ~``.
CSI_TILDE_DIGITS: Dict[str, KeyKind] = {
    "1": KeyKind.HOME,
    "3": KeyKind.DELETE,
    "4": KeyKind.END,
    "5": KeyKind.PAGE_UP,
    "6": KeyKind.PAGE_DOWN,
    "7": KeyKind.HOME,
    "8": KeyKind.END,
}


def decode_byte(byte: int) -> KeyEvent:
    """Key for a byte that does not start an escape sequence."""

    if byte == ENTER_BYTE:
        return KeyEvent.of(KeyKind.ENTER)
    if byte == BACKSPACE_BYTE:
        return KeyEvent.of(KeyKind.BACKSPACE)
    if byte == ESC_BYTE:
        return KeyEvent.of(KeyKind.ESCAPE)
    if byte == TAB_BYTE:
        return KeyEvent.character("\t")
    if byte < 0x20:
        # Terminals send Ctrl+<letter> as the letter with its top bits cleared.
        return KeyEvent.ctrl(chr(byte | 0x60))
    if byte >= 0x80:
        return KeyEvent.character(bytes([byte]).decode("utf-8", "surrogateescape"))
    return KeyEvent.character(chr(byte))


def decode_escape(sequence: bytes) -> KeyEvent:
    """Key for the bytes following ``ESC``; unknown sequences are ``ESCAPE``."""

    text = sequence.decode("ascii", "replace")
    if len(text) < 2:
        return KeyEvent.of(KeyKind.ESCAPE)
    lead, second = text[0], text[1]
    kind: Optional[KeyKind] = None
    if lead == "[":
        if second.isdigit():
            if text[2:3] == "~":
                kind = CSI_TILDE_DIGITS.get(second)
        else:
            kind = CSI_LETTERS.get(second)
    elif lead == "O":
        kind = SS3_LETTERS.get(second)
    return KeyEvent.of(kind or KeyKind.ESCAPE)


class KeyDecoder:
    """Reads bytes from a terminal and yields one logical key at a time."""

    def __init__(
        self, terminal: Terminal, *, lookahead: int = ESCAPE_LOOKAHEAD
    ) -> None:
        self.terminal = terminal
        self.lookahead = lookahead

    def read_key(self) -> KeyEvent:
        """Block until a key arrives."""

        byte = self.terminal.read_byte()
        while byte is None:
            byte = self.terminal.read_byte()
        if byte != ESC_BYTE:
            return decode_byte(byte)
        return decode_escape(self._read_sequence())

    def _read_sequence(self) -> bytes:
        """Collect escape sequence bytes; each read may time out."""

        sequence = bytearray()
        while len(sequence) < self.lookahead:
            byte = self.terminal.read_byte()
            if byte is None:
                break
            sequence.append(byte)
            if not self._expects_more(sequence):
                break
        return bytes(sequence)

    @staticmethod
    def _expects_more(sequence: bytearray) -> bool:
        if len(sequence) < 2:
            return True
        return sequence[0] == ord("[") and chr(sequence[1]).isdigit()


__all__ = ["KeyDecoder", "decode_byte", "decode_escape"]
