"""Logging utilities for the EbookAI toolkit.

This module provides standardized logging functionality for estimator,
scoring and generation operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

ROOT_LOGGER_NAME = "ebookai"
LOG_FORMAT = "%(name)s: %(message)s"


class LogLevel(int, Enum):
    """Log levels for the toolkit."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for toolkit logging."""

    PRICING = "pricing"
    COST_ESTIMATE = "cost_estimate"
    CONTENT_SCORING = "content_scoring"
    VARIATIONS = "variations"
    GENERATION = "generation"
    JOB_POLLING = "job_polling"
    RAG_SESSION = "rag_session"


_callback: Optional[LogCallback] = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_logger = get_logger("events")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Route every log event to ``callback`` in addition to :mod:`logging`.

    Args:
        callback: Function receiving ``(level, event, data)``, or None to
            remove a previously installed callback
    """
    global _callback
    _callback = callback


def configure_logging(level: Union[str, int] = "WARNING") -> None:
    """Configure the package root logger.

    Args:
        level: Level name (e.g. ``"DEBUG"``) or numeric level
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)
    if not root.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    _logger.log(int(level), "[%s] %s", event.value, message, extra={"event": event.value, "data": data})
    if _callback is None:
        return
    payload = {"message": message, **data}
    try:
        _callback(level, event.value, payload)
    except Exception as e:
        # callback failures never propagate
        _logger.error("Log callback failed: %s (event=%s, payload=%r)", e, event.value, payload)


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _emit(LogLevel.ERROR, event, message, data)
