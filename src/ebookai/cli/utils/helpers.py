"""Helper functions for CLI operations."""

import os
import sys
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import click

from ...config_paths import ENV_PRICING_PATH
from ...errors import ConfigurationError
from ...pricing import PricingTable


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    DATA_SOURCE_ERROR = 4


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def resolve_log_level(verbose: int = 0, quiet: int = 0, debug: bool = False) -> str:
    """Map verbosity flags to a logging level name."""
    if debug:
        return "DEBUG"
    if verbose > quiet:
        return "DEBUG" if verbose >= 2 else "INFO"
    if quiet > verbose:
        return "CRITICAL" if quiet >= 2 else "ERROR"
    return "WARNING"


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> NoReturn:
    """Print ``error`` to stderr and exit with ``exit_code``.

    Configuration errors name the pricing file they refer to.
    """
    message = str(error)
    path = getattr(error, "path", None)
    if isinstance(error, ConfigurationError) and path and path not in message:
        message = f"{message} ({path})"
    click.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def load_pricing(ctx_obj: Dict[str, Any]) -> PricingTable:
    """Load the pricing table selected by ``--pricing-file`` or the defaults.

    Exits with :attr:`ExitCode.DATA_SOURCE_ERROR` if it cannot be loaded.
    """
    path = ctx_obj.get("pricing_path")
    try:
        if path:
            return PricingTable.load(path)
        return PricingTable.get_default()
    except ConfigurationError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)


def read_content(path: str) -> str:
    """Read content from a file path, or from stdin when ``path`` is ``-``."""
    if path == "-":
        return click.get_text_stream("stdin").read()
    return Path(path).read_text(encoding="utf-8")


def get_ebookai_env_vars() -> Dict[str, Optional[str]]:
    """Get EBOOKAI_* environment variables, including unset well-known ones."""
    env_vars: Dict[str, Optional[str]] = {
        key: value for key, value in os.environ.items() if key.startswith("EBOOKAI_")
    }
    env_vars.setdefault(ENV_PRICING_PATH, None)
    return env_vars
