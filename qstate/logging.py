"""Logging utilities for qstate.

Every engine module obtains its logger through :func:`get_logger` so that the
whole package shares one handler layout and one level switch.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_format = _DEFAULT_FORMAT
_stream: Optional[object] = None

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package root logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from qstate.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("applying gate")
    """
    if name is None:
        name = "qstate"

    logger_name = name if name == "qstate" or name.startswith("qstate.") else f"qstate.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(_stream or sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_format))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def set_log_level(level: int | str) -> None:
    """Set the logging level for all qstate loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ...) or its name
            (``"DEBUG"``, ``"INFO"``, ...).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for qstate.

    Replaces the handlers of every logger created so far and sets the default
    used for loggers created later. Typically called once at startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL, _format, _stream
    level = _coerce_level(level)

    _format = format_string or _DEFAULT_FORMAT
    _stream = stream
    if stream is None:
        stream = sys.stderr
    formatter = logging.Formatter(_format)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
