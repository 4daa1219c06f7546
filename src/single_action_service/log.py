"""Terminal diagnostics for service configuration.

Only configuration is ever logged: outcome type creation and reuse, and
suspicious error declarations. Each line is prefixed with the outcome type it
concerns, e.g. ``[DivisionResult] created with errors divide_by_zero``.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LOG_LEVEL_ENV = "SINGLE_ACTION_SERVICE_LOG_LEVEL"
NO_COLOR_ENV = "SINGLE_ACTION_SERVICE_NO_COLOR"


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARNING = 40


# level name -> (level, message style); INFO is the quiet default threshold
_LEVELS = {
    "trace": (LogLevel.TRACE, "dim"),
    "debug": (LogLevel.DEBUG, "cyan"),
    "info": (LogLevel.INFO, ""),
    "warning": (LogLevel.WARNING, "yellow"),
}
_STYLES = {level: style for level, style in _LEVELS.values()}
_configured_level: LogLevel | None = None


def _parse_level(value: str | None) -> LogLevel:
    entry = _LEVELS.get((value or "").strip().lower())
    return entry[0] if entry else LogLevel.INFO


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _parse_level(os.environ.get(LOG_LEVEL_ENV))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level; ``None`` re-reads the environment lazily."""
    global _configured_level
    _configured_level = None if value is None else _parse_level(value)


def _line(level: LogLevel, context: str, message: str) -> Text:
    return Text.assemble((f"[{context}] ", "bold"), (message, _STYLES[level]))


def _emit(level: LogLevel, context: str, message: str) -> None:
    if level < configured_level():
        return
    console = Console(
        file=sys.stderr if level >= LogLevel.WARNING else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=bool(os.environ.get("NO_COLOR") or os.environ.get(NO_COLOR_ENV)),
    )
    console.print(_line(level, context, message))


def trace(context: str, message: str) -> None:
    _emit(LogLevel.TRACE, context, message)


def debug(context: str, message: str) -> None:
    _emit(LogLevel.DEBUG, context, message)


def warning(context: str, message: str) -> None:
    _emit(LogLevel.WARNING, context, message)
