"""Cost estimation commands for the ebookai CLI."""

from typing import Any, Dict, Optional

import click

from ...estimator import (
    cost_per_thousand_words,
    cost_tier,
    estimate_cost,
    estimate_job,
    estimated_completion_minutes,
    is_high_cost,
)
from ..formatters import create_console, format_breakdown_table, format_json
from ..utils import ExitCode, handle_error, load_pricing


@click.group()
def cost() -> None:
    """Estimate generation costs."""
    pass


@cost.command()
@click.option("--provider", required=True, help="Provider key in the pricing table.")
@click.option("--model", required=True, help="Model key under the provider.")
@click.option("--tokens", type=click.FloatRange(min=0), help="Total tokens for the job.")
@click.option("--chapters", type=click.IntRange(min=0), help="Number of chapters in the outline.")
@click.option("--topics", type=click.IntRange(min=0), help="Topics per chapter.")
@click.option("--images", type=click.IntRange(min=0), help="Images to generate (default: one per chapter).")
@click.option("--rag", is_flag=True, help="Include retrieval-augmented generation overhead.")
@click.pass_context
def estimate(
    ctx: click.Context,
    provider: str,
    model: str,
    tokens: Optional[float],
    chapters: Optional[int],
    topics: Optional[int],
    images: Optional[int],
    rag: bool,
) -> None:
    """Estimate cost from a token count or from an outline size.

    Examples:
      ebookai cost estimate --provider openai --model gpt-4 --tokens 10000 --images 5

      ebookai cost estimate --provider anthropic --model claude-3-haiku --chapters 6 --topics 4 --rag
    """
    if (tokens is None) == (chapters is None):
        handle_error(click.UsageError("Pass exactly one of --tokens or --chapters."), ExitCode.INVALID_USAGE)

    table = load_pricing(ctx.obj)
    if table.get_model_pricing(provider, model) is None:
        click.echo(f"Warning: no text pricing for {provider}/{model}; text cost counts as zero.", err=True)

    details: Dict[str, Any] = {}
    if chapters is not None:
        job = estimate_job([{"topics": [None] * (topics or 0)} for _ in range(chapters)])
        breakdown = estimate_cost(
            provider,
            model,
            text_tokens=job.total_tokens,
            images=job.total_images if images is None else images,
            rag_enabled=rag,
            total_words=job.total_words,
            pricing=table,
        )
        details["completion_minutes"] = estimated_completion_minutes(chapters * (topics or 0))
    else:
        breakdown = estimate_cost(
            provider, model, text_tokens=tokens or 0.0, images=images or 0, rag_enabled=rag, pricing=table
        )

    details["cost_per_1000_words"] = cost_per_thousand_words(breakdown)
    details["tier"] = cost_tier(breakdown.total_cost)
    details["high_cost_alert"] = is_high_cost(breakdown)

    if ctx.obj["format"] == "json":
        format_json({"provider": provider, "model": model, **breakdown.to_dict(), **details})
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        console.print(f"[bold]{provider}[/bold] • {model}{' • RAG Enhanced' if rag else ''}")
        format_breakdown_table(breakdown, details, console)
