"""Single editable line with its tab-expanded rendering."""

from __future__ import annotations

from jate.config import TAB_STOP


def render_tabs(text: str, tab_stop: int = TAB_STOP) -> str:
    """Expand every tab to the next multiple of ``tab_stop`` columns."""

    if "\t" not in text:
        return text
    chunks: list[str] = []
    column = 0
    for char in text:
        if char == "\t":
            width = tab_stop - (column % tab_stop)
            chunks.append(" " * width)
            column += width
        else:
            chunks.append(char)
            column += 1
    return "".join(chunks)


def render_column(text: str, col: int, tab_stop: int = TAB_STOP) -> int:
    """Rendered column of raw column ``col`` in ``text``."""

    rx = 0
    for char in text[:col]:
        if char == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


class Line:
    """Raw ``content`` plus the ``rendered`` form derived from it.

    Assigning ``content`` is the only way to change the text, and it refreshes
    ``rendered`` immediately, so the two never drift apart.
    """

    __slots__ = ("_content", "_rendered", "tab_stop")

    def __init__(self, content: str = "", *, tab_stop: int = TAB_STOP) -> None:
        self.tab_stop = tab_stop
        self._content = ""
        self._rendered = ""
        self.content = content

    def __repr__(self) -> str:
        return f"Line({self._content!r})"

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._content = value
        self._rendered = render_tabs(value, self.tab_stop)

    @property
    def rendered(self) -> str:
        return self._rendered

    @property
    def size(self) -> int:
        return len(self._content)

    @property
    def rsize(self) -> int:
        return len(self._rendered)

    def to_render_column(self, col: int) -> int:
        return render_column(self._content, col, self.tab_stop)

    def insert(self, at: int, text: str) -> None:
        if at < 0 or at > self.size:
            at = self.size
        self.content = self._content[:at] + text + self._content[at:]

    def append(self, text: str) -> None:
        self.content = self._content + text

    def delete(self, at: int) -> bool:
        if at < 0 or at >= self.size:
            return False
        self.content = self._content[:at] + self._content[at + 1 :]
        return True

    def split(self, at: int) -> str:
        """Cut the line at ``at`` and return the removed tail."""

        tail = self._content[at:]
        self.content = self._content[:at]
        return tail


__all__ = ["Line", "render_tabs", "render_column"]
