"""Terminal access and key decoding."""

from .decoder import KeyDecoder, decode_byte, decode_escape
from .io import PosixTerminal, Terminal, TerminalError, WindowSize, raw_mode
from .keys import KeyEvent, KeyKind, ctrl_key

__all__ = [
    "KeyDecoder",
    "decode_byte",
    "decode_escape",
    "KeyEvent",
    "KeyKind",
    "ctrl_key",
    "PosixTerminal",
    "Terminal",
    "TerminalError",
    "WindowSize",
    "raw_mode",
]
