"""Terminal diagnostics for the hook.

Git relays whatever a hook prints while the commit is being made, so every
line goes to stderr and carries a ``changemark:`` prefix, the same way git
prefixes its own ``hint:`` and ``warning:`` lines. Nothing below WARNING is
shown unless ``--log-level`` or ``CHANGEMARK_LOG_LEVEL`` asks for it.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

PREFIX = "changemark"


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


_LEVEL_BY_NAME = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}
LEVEL_NAMES: tuple[str, ...] = tuple(_LEVEL_BY_NAME)
_DEFAULT_LEVEL = LogLevel.INFO
_LABELS = {LogLevel.WARNING: "warning", LogLevel.ERROR: "error"}
_STYLES = {LogLevel.DEBUG: "cyan", LogLevel.WARNING: "yellow", LogLevel.ERROR: "bold red"}

_configured_level: LogLevel | None = None
_no_color_override: bool | None = None


def _normalize_level(value: str | None) -> LogLevel:
    if value is None:
        return _DEFAULT_LEVEL
    return _LEVEL_BY_NAME.get(value.strip().lower(), _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _normalize_level(os.environ.get("CHANGEMARK_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level from a name such as ``debug``."""
    global _configured_level
    _configured_level = _normalize_level(value)


def set_no_color(value: bool) -> None:
    """Force colour output off (or back to environment detection)."""
    global _no_color_override
    _no_color_override = True if value else None


def _no_color() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return bool(os.environ.get("NO_COLOR") or os.environ.get("CHANGEMARK_NO_COLOR"))


def render(level: LogLevel, message: str) -> Text:
    """Build the styled line for ``message``.

    Example:
        >>> render(LogLevel.WARNING, "commit title is 90 characters long").plain
        'changemark: warning: commit title is 90 characters long'
        >>> render(LogLevel.DEBUG, "added Change-Id").plain
        'changemark: added Change-Id'
    """
    style = _STYLES.get(level, "")
    label = _LABELS.get(level)
    text = Text(f"{PREFIX}: ", style="dim")
    if label:
        text.append(f"{label}: ", style=style)
    text.append(message, style=style if level is LogLevel.DEBUG else "")
    return text


def emit(level: LogLevel, message: str) -> None:
    if level < configured_level():
        return
    console = Console(file=sys.stderr, soft_wrap=True, highlight=False, no_color=_no_color())
    console.print(render(level, message))


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
