"""Editor configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "JATE_"

VERSION = "0.0.1"
TAB_STOP = 8
QUIT_TIMES = 3
MESSAGE_TTL = 5.0
ESCAPE_LOOKAHEAD = 3


@dataclass(frozen=True)
class EditorConfig:
    """Tunables for a single editor session."""

    tab_stop: int = TAB_STOP
    quit_times: int = QUIT_TIMES
    message_ttl: float = MESSAGE_TTL
    escape_lookahead: int = ESCAPE_LOOKAHEAD
    version: str = VERSION

    def __post_init__(self) -> None:
        if self.tab_stop <= 0:
            raise ValueError("tab_stop must be positive")
        if self.quit_times < 0:
            raise ValueError("quit_times cannot be negative")
        if self.escape_lookahead < 2:
            raise ValueError("escape_lookahead must allow at least two bytes")

    @property
    def banner(self) -> str:
        return f"Jate editor -- version {self.version}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config from ``JATE_*`` variables, ignoring unusable values."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tab_stop=_env_int(env, "TAB_STOP", defaults.tab_stop, minimum=1),
            quit_times=_env_int(env, "QUIT_TIMES", defaults.quit_times, minimum=0),
            message_ttl=_env_float(env, "MESSAGE_TTL", defaults.message_ttl),
        )

    def describe(self) -> dict[str, object]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def _env_int(
    env: Mapping[str, str], key: str, fallback: int, *, minimum: int
) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed >= minimum else fallback


def _env_float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


__all__ = [
    "EditorConfig",
    "VERSION",
    "TAB_STOP",
    "QUIT_TIMES",
    "MESSAGE_TTL",
    "ESCAPE_LOOKAHEAD",
]
