"""Core document data structure: an ordered list of lines."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from jate.config import TAB_STOP
from jate.runtime import telemetry

from .line import Line
from .store import ENCODING, ENCODING_ERRORS, FileStore

Cursor = Tuple[int, int]  # (row, column)


class Document:
    """Lines of a file plus a dirty counter and the bound filename.

    Every editing operation takes an explicit ``(row, col)`` and returns the
    cursor position that follows the edit, leaving cursor bookkeeping to the
    caller. ``dirty`` increases on every mutation and only drops back to zero
    through ``mark_saved`` or a fresh load.
    """

    def __init__(
        self, *, filename: Optional[str] = None, tab_stop: int = TAB_STOP
    ) -> None:
        self._lines: List[Line] = []
        self.filename = filename
        self.tab_stop = tab_stop
        self.dirty = 0

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        filename: Optional[str] = None,
        tab_stop: int = TAB_STOP,
    ) -> "Document":
        document = cls(filename=filename, tab_stop=tab_stop)
        for raw in lines:
            document.insert_row(document.numrows, raw.rstrip("\r\n"))
        document.dirty = 0
        return document

    @classmethod
    def load(
        cls, store: FileStore, filename: str, *, tab_stop: int = TAB_STOP
    ) -> "Document":
        with telemetry.span(
            "document::load", component="document", metadata={"file": filename}
        ) as handle:
            document = cls.from_lines(
                store.read_lines(filename), filename=filename, tab_stop=tab_stop
            )
            handle.add_metadata("rows", document.numrows)
        return document

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def numrows(self) -> int:
        return len(self._lines)

    @property
    def modified(self) -> bool:
        return self.dirty > 0

    def snapshot(self) -> Sequence[str]:
        """Return the raw text of every line without exposing the Lines."""

        return tuple(line.content for line in self._lines)

    def line_text(self, row: int) -> str:
        return self._lines[row].content

    def line_size(self, row: int) -> int:
        """Length of ``row``; rows past the end count as empty."""

        if 0 <= row < self.numrows:
            return self._lines[row].size
        return 0

    def render_column(self, row: int, col: int) -> int:
        if 0 <= row < self.numrows:
            return self._lines[row].to_render_column(col)
        return 0

    def rendered_slice(self, row: int, start: int, width: int) -> str:
        """Visible part of ``row`` for a window ``width`` columns wide."""

        rendered = self._lines[row].rendered
        return rendered[start : start + width] if start < len(rendered) else ""

    def insert_row(self, at: int, text: str = "") -> bool:
        if at < 0 or at > self.numrows:
            return False
        self._lines.insert(at, Line(text, tab_stop=self.tab_stop))
        self._touch()
        return True

    def delete_row(self, at: int) -> bool:
        if at < 0 or at >= self.numrows:
            return False
        del self._lines[at]
        self._touch()
        return True

    def insert_char(self, row: int, col: int, char: str) -> Cursor:
        if row == self.numrows:
            self.insert_row(self.numrows, "")
        if row < 0 or row >= self.numrows:
            return (row, col)
        line = self._lines[row]
        at = col if 0 <= col <= line.size else line.size
        line.insert(at, char)
        self._touch()
        return (row, at + len(char))

    def insert_newline(self, row: int, col: int) -> Cursor:
        with self._edit("insert_newline", row, col):
            if col == 0 or row >= self.numrows:
                self.insert_row(row, "")
            else:
                tail = self._lines[row].split(col)
                self.insert_row(row + 1, tail)
        return (row + 1, 0)

    def delete_char(self, row: int, col: int) -> Cursor:
        if row < 0 or row >= self.numrows:
            return (row, col)
        if row == 0 and col == 0:
            return (row, col)

        line = self._lines[row]
        if col > 0:
            if line.delete(col - 1):
                self._touch()
                return (row, col - 1)
            return (row, col)

        with self._edit("join_lines", row, col):
            previous = self._lines[row - 1]
            join_at = previous.size
            previous.append(line.content)
            self._touch()
            self.delete_row(row)
        return (row - 1, join_at)

    def serialize(self) -> bytes:
        """On-disk form: every line followed by a newline."""

        text = "".join(f"{line.content}\n" for line in self._lines)
        return text.encode(ENCODING, ENCODING_ERRORS)

    def mark_saved(self) -> None:
        self.dirty = 0

    def _touch(self) -> None:
        self.dirty += 1

    @contextmanager
    def _edit(self, label: str, row: int, col: int) -> Iterator[None]:
        with telemetry.span(
            f"document::{label}",
            component="document",
            metadata={"row": row, "col": col},
        ):
            yield


__all__ = ["Document", "Cursor"]
