"""
Structured console logger for site rating calculations.
Writes colourised, key/value annotated lines to stderr and keeps an
ANSI-stripped copy of every line in memory.

The in-memory buffer lives in a ``contextvars.ContextVar`` so that
scoring calls running in separate threads or async tasks each see
their own log lines.
"""

from __future__ import annotations

import contextvars
import re
import sys
from datetime import UTC, datetime

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")

_log_buffer_var: contextvars.ContextVar[list[str]] = contextvars.ContextVar("_log_buffer_var")


def _get_log_buffer() -> list[str]:
    """Return the per-context log buffer, creating it on first access."""
    try:
        return _log_buffer_var.get()
    except LookupError:
        buf: list[str] = []
        _log_buffer_var.set(buf)
        return buf


def get_log_buffer() -> list[str]:
    """Return a copy of the buffered log lines (ANSI-stripped)."""
    return list(_get_log_buffer())


def clear_log_buffer() -> None:
    """Drop every buffered log line for the current context."""
    _get_log_buffer().clear()


# ============================================================================
# Formatting
# ============================================================================

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_GRAY = "\033[90m"

# level -> (colour, symbol)
_LEVELS: dict[str, tuple[str, str]] = {
    "info": (_CYAN, "ℹ"),
    "success": (_GREEN, "✓"),
    "warn": (_YELLOW, "⚠"),
    "error": (_RED, "✗"),
    "debug": (_GRAY, "•"),
}

_MAX_STRING = 200


def _paint(colour: str, text: str) -> str:
    return f"{colour}{text}{_RESET}"


def _get_timestamp() -> str:
    """Return the current UTC time as HH:MM:SS.mmm."""
    now = datetime.now(UTC)
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def _format_value(value: object) -> str:
    """Render one logged value, coloured by type."""
    match value:
        case None:
            return _paint(_DIM, "None")
        case bool():
            return _paint(_GREEN, "True") if value else _paint(_RED, "False")
        case int() | float():
            return _paint(_YELLOW, str(value))
        case str():
            if len(value) > _MAX_STRING:
                value = value[: _MAX_STRING - 3] + "..."
            return _paint(_GREEN, f'"{value}"')
        case list() | tuple():
            return _paint(_CYAN, f"[{len(value)} items]")
        case dict():
            return _paint(_CYAN, f"{{{len(value)} keys}}")
        case _:
            return str(value)


def _format_data(data: dict[str, object]) -> str:
    return " ".join(f"{_DIM}{key}={_RESET}{_format_value(value)}" for key, value in data.items())


# ============================================================================
# Logger Class
# ============================================================================


class Logger:
    """Structured logger with a context prefix."""

    def __init__(self, context: str = "SiteRating") -> None:
        """Create a logger that prefixes messages with *context*."""
        self._context = context

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        colour, symbol = _LEVELS[level]
        parts = [
            _paint(_GRAY, f"[{_get_timestamp()}]"),
            _paint(colour, symbol),
            _paint(_BOLD, f"[{self._context}]"),
            message,
        ]
        if data:
            parts.append(_format_data(data))
        line = " ".join(parts)

        print(line, file=sys.stderr)
        _get_log_buffer().append(_ANSI_RE.sub("", line))

    def info(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("info", message, data)

    def success(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("success", message, data)

    def warn(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("warn", message, data)

    def error(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("error", message, data)

    def debug(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("debug", message, data)


def create_logger(context: str) -> Logger:
    """Create a logger for a specific module."""
    return Logger(context)
