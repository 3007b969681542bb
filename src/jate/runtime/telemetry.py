"""Telemetry services built directly on telelog.

The rest of the editor uses four entry points:

``configure(...)`` -- choose where logs go (settings, preset or raw config)
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- profile a block and optionally track it as a component

The editor owns the terminal while it runs, so console output stays off unless
``JATE_LOG_CONSOLE`` asks for it; logs normally go to ``JATE_LOG_FILE``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import (
    Any,
    Dict,
    Iterator,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    cast,
)

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "JATE_"
DEFAULT_LOGGER_NAME = "jate"
DEFAULT_BUFFER_SIZE = 2048
_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True)
class TelemetrySettings:
    """Plain description of a logging setup, translated to ``tl.Config``."""

    level: str = "INFO"
    log_file: Optional[str] = None
    console: bool = False
    colored: bool = False
    json: bool = False
    buffered: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return env.get(f"{ENV_PREFIX}{name}", "").lower() in _TRUTHY

        console = flag("LOG_CONSOLE")
        try:
            buffer_size = int(env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", ""))
        except ValueError:
            buffer_size = DEFAULT_BUFFER_SIZE
        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper() or "INFO",
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            console=console,
            colored=console and not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            buffered=flag("LOG_BUFFERED"),
            buffer_size=buffer_size if buffer_size > 0 else DEFAULT_BUFFER_SIZE,
        )

    def with_overrides(
        self, *, log_file: Optional[str] = None, level: Optional[str] = None
    ) -> "TelemetrySettings":
        """Apply command line overrides; ``None`` keeps the current value."""

        return replace(
            self,
            log_file=log_file or self.log_file,
            level=(level or self.level).upper(),
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        # Span timings are the main reason to turn logging on at all.
        config.with_profiling(True)
        return config


def preset_settings(
    preset: str, environ: Optional[Mapping[str, str]] = None
) -> TelemetrySettings:
    """Named setups; the file target still honours ``JATE_LOG_FILE``."""

    base = TelemetrySettings.from_env(environ)
    key = preset.lower()
    if key == "development":
        # Only useful when stderr is redirected away from the editing terminal.
        return replace(base, level="DEBUG", console=True, colored=False, json=False)
    if key == "production":
        return replace(
            base,
            level="INFO",
            console=False,
            log_file=base.log_file or "jate.log",
            buffered=True,
        )
    if key in {"performance", "performance_analysis"}:
        return replace(
            base,
            level="DEBUG",
            console=False,
            json=True,
            log_file=base.log_file or "jate-performance.log",
            buffered=True,
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
    log_file: Optional[str] = None,
    level: Optional[str] = None,
) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    settings:
        Explicit ``TelemetrySettings``; defaults to ``TelemetrySettings.from_env``.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
    config:
        Ready-made ``tl.Config`` adopted as is.
    log_file, level:
        Command line overrides layered on top of the settings or preset.

    Only one of ``settings``, ``preset`` and ``config`` may be given.
    """

    global _ACTIVE_CONFIG
    if sum(item is not None for item in (settings, preset, config)) > 1:
        raise ValueError("Provide only one of `settings`, `preset` or `config`.")

    if config is None:
        if preset is not None:
            settings = preset_settings(preset)
        settings = (settings or TelemetrySettings.from_env()).with_overrides(
            log_file=log_file, level=level
        )
        config = settings.build()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = TelemetrySettings.from_env().build()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` configured for the editor."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    """Logger method for ``level`` and whether it takes structured pairs."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, [(str(key), _stringify(val)) for key, val in payload.items()])
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` log line."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching results to the span."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def _logger_context(logger: Any, values: Mapping[str, str]) -> Iterator[None]:
    for key, value in values.items():
        logger.add_context(key, value)
    try:
        yield
    finally:
        for key in values:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block of editor work.

    ``component=True`` also tracks the block as a component named ``name``; a
    string names the component explicitly. ``metadata`` is attached as logger
    context for the duration of the block. Exceptions are logged as
    ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        stack.enter_context(_logger_context(log, context))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "TelemetrySettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
