"""Main CLI application for the EbookAI toolkit."""

from typing import Optional

import click
import rich_click as rich_click

from ..logging import configure_logging
from .utils import resolve_format, resolve_log_level

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(invoke_without_command=True)
@click.option(
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option(
    "--pricing-file",
    type=click.Path(dir_okay=False),
    help="Pricing YAML to use. Takes precedence over EBOOKAI_PRICING_PATH.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option("--version", is_flag=True, is_eager=True, help="Print version information.")
@click.pass_context
def app(
    ctx: click.Context,
    format: Optional[str] = None,
    pricing_file: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
    version: bool = False,
) -> None:
    """EbookAI toolkit - estimate generation costs and score generated content.

    Examples:
      # Price a 6 chapter outline with 4 topics per chapter
      ebookai cost estimate --provider openai --model gpt-4 --chapters 6 --topics 4

      # Score a generated topic
      ebookai content score topic.html

      # Compare three variations
      ebookai variations rank a.html b.html c.html
    """
    if version:
        from .. import __version__

        click.echo(f"ebookai version: {__version__}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    configure_logging(resolve_log_level(verbose, quiet, debug))

    ctx.obj = {
        "format": resolve_format(format),
        "pricing_path": pricing_file,
        "no_color": no_color,
    }


from .commands import content, cost, pricing, variations  # noqa: E402

app.add_command(pricing.pricing)
app.add_command(cost.cost)
app.add_command(content.content)
app.add_command(variations.variations)


if __name__ == "__main__":
    app()
