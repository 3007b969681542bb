"""Output accumulator so each frame reaches the terminal in one write."""

from __future__ import annotations

from jate.buffer.store import ENCODING, ENCODING_ERRORS


class FrameBuffer:
    """Growable byte buffer for a single screen refresh."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def append(self, chunk: bytes) -> None:
        self._data += chunk

    def text(self, value: str) -> None:
        self._data += value.encode(ENCODING, ENCODING_ERRORS)

    def getvalue(self) -> bytes:
        return bytes(self._data)


__all__ = ["FrameBuffer"]
