"""Content scoring commands for the ebookai CLI."""

import click

from ...scoring import score_content, suggest_improvements
from ..formatters import (
    create_console,
    format_json,
    format_metrics_json,
    format_metrics_table,
    format_suggestions_json,
    format_suggestions_table,
)
from ..utils import ExitCode, handle_error, read_content


@click.group()
def content() -> None:
    """Score generated content."""
    pass


def _read(path: str) -> str:
    try:
        return read_content(path)
    except (OSError, UnicodeDecodeError) as e:
        handle_error(e, ExitCode.INVALID_USAGE)


@content.command()
@click.argument("path", type=click.Path(allow_dash=True))
@click.pass_context
def score(ctx: click.Context, path: str) -> None:
    """Score readability and structure of the content in PATH ('-' for stdin)."""
    metrics = score_content(_read(path))
    if ctx.obj["format"] == "json":
        format_json(format_metrics_json(metrics))
    else:
        format_metrics_table(metrics, create_console(no_color=ctx.obj["no_color"]))


@content.command()
@click.argument("path", type=click.Path(allow_dash=True))
@click.pass_context
def suggest(ctx: click.Context, path: str) -> None:
    """List improvement suggestions for the content in PATH."""
    text = _read(path)
    suggestions = suggest_improvements(text, score_content(text))
    if ctx.obj["format"] == "json":
        format_json(format_suggestions_json(suggestions))
    else:
        format_suggestions_table(suggestions, create_console(no_color=ctx.obj["no_color"]))
