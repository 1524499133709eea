"""CLI utilities package."""

from .helpers import (
    ExitCode,
    get_ebookai_env_vars,
    handle_error,
    load_pricing,
    read_content,
    resolve_format,
    resolve_log_level,
)

__all__ = [
    "ExitCode",
    "resolve_format",
    "resolve_log_level",
    "handle_error",
    "load_pricing",
    "read_content",
    "get_ebookai_env_vars",
]
