"""Variation comparison commands for the ebookai CLI."""

from typing import Tuple

import click

from ...variations import build_variations, rank_variations
from ..formatters import create_console, format_json, format_variations_json, format_variations_table
from ..utils import ExitCode, handle_error, read_content


@click.group()
def variations() -> None:
    """Compare A/B content variations."""
    pass


@variations.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.pass_context
def rank(ctx: click.Context, paths: Tuple[str, ...]) -> None:
    """Score each file as a variation (A, B, C… in argument order) and rank them."""
    try:
        contents = [read_content(p) for p in paths]
    except (OSError, UnicodeDecodeError) as e:
        handle_error(e, ExitCode.INVALID_USAGE)

    batch = build_variations(contents)
    ranking = rank_variations(batch)
    if ctx.obj["format"] == "json":
        format_json(format_variations_json(batch, ranking))
    else:
        format_variations_table(batch, ranking, create_console(no_color=ctx.obj["no_color"]))
