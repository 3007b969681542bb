"""VT100 escape sequences produced by the editor."""

from __future__ import annotations

import re
from typing import Optional, Tuple

ESC = b"\x1b"

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
ERASE_LINE = b"\x1b[K"
INVERSE_ON = b"\x1b[7m"
STYLE_RESET = b"\x1b[m"
CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_QUERY = b"\x1b[6n"
NEWLINE = b"\r\n"

_POSITION_REPORT = re.compile(rb"^\x1b\[(\d+);(\d+)$")


def cursor_to(row: int, col: int) -> bytes:
    """Absolute cursor move; ``row`` and ``col`` are 1-based."""

    return f"\x1b[{row};{col}H".encode("ascii")


def reset_screen() -> bytes:
    return CLEAR_SCREEN + CURSOR_HOME


def parse_position_report(report: bytes) -> Optional[Tuple[int, int]]:
    """Parse ``ESC[<rows>;<cols>`` (the trailing ``R`` already stripped)."""

    match = _POSITION_REPORT.match(report)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


__all__ = [
    "ESC",
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "ERASE_LINE",
    "INVERSE_ON",
    "STYLE_RESET",
    "CURSOR_FAR_CORNER",
    "CURSOR_POSITION_QUERY",
    "NEWLINE",
    "cursor_to",
    "reset_screen",
    "parse_position_report",
]
