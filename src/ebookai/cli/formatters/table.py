"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...estimator import CostBreakdown, cost_tier
from ...pricing import PricingTable
from ...scoring import ContentMetrics, Suggestion, score_band
from ...variations import Variation, VariationRanking

_TIER_STYLES = {"low": "green", "moderate": "yellow", "high": "red"}
_BAND_STYLES = {"good": "green", "fair": "yellow", "poor": "red"}
_PRIORITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "dim"}


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    return Console(file=output, no_color=no_color)


def _money(value: float) -> Text:
    return Text(f"${value:.4f}", style=_TIER_STYLES[cost_tier(value)])


def _score(value: int) -> Text:
    return Text(f"{value}/100", style=_BAND_STYLES[score_band(value)])


def format_providers_table(table: PricingTable, console: Optional[Console] = None) -> None:
    """Format providers as a Rich table."""
    if console is None:
        console = create_console()

    out = Table(title="Pricing Providers", show_header=True, header_style="bold magenta")
    out.add_column("Provider", style="cyan")
    out.add_column("Text\nModels", justify="right")
    out.add_column("Image\nModel")

    for name in table.list_providers():
        image_pricing = table.get_image_pricing(name)
        out.add_row(name, str(len(table.list_models(name))), image_pricing.name if image_pricing else "N/A")

    console.print(out)


def format_pricing_table(table: PricingTable, provider: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Format model rates as a Rich table.

    Args:
        table: Pricing table
        provider: Only show this provider when given
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    out = Table(title=f"Model Pricing ({table.currency})", show_header=True, header_style="bold magenta")
    out.add_column("Provider", style="cyan", no_wrap=True)
    out.add_column("Model", no_wrap=True)
    out.add_column("Input\n/1K", justify="right")
    out.add_column("Output\n/1K", justify="right")
    out.add_column("Per\nImage", justify="right")

    providers = [provider.lower()] if provider else table.list_providers()
    for name in providers:
        for model in table.list_models(name):
            rates = table.get_model_pricing(name, model)
            if rates is None:
                continue
            out.add_row(name, model, f"${rates.input_per_1k}", f"${rates.output_per_1k}", "")
        image_pricing = table.get_image_pricing(name)
        if image_pricing is not None:
            out.add_row(name, image_pricing.name, "", "", f"${image_pricing.per_image}")

    console.print(out)


def format_breakdown_table(breakdown: CostBreakdown, details: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format a cost breakdown plus derived details."""
    if console is None:
        console = create_console()

    out = Table(title="Estimated Generation Cost", show_header=True, header_style="bold magenta")
    out.add_column("Item", style="cyan")
    out.add_column("Cost", justify="right")

    out.add_row("Text Generation", _money(breakdown.text_cost))
    out.add_row("Image Generation", _money(breakdown.image_cost))
    if breakdown.meta.rag_enabled:
        out.add_row("RAG Overhead (included)", _money(breakdown.rag_cost))
    out.add_row(Text("Total Estimated Cost", style="bold"), _money(breakdown.total_cost))
    console.print(out)

    per_1k = details.get("cost_per_1000_words")
    console.print(f"[bold]Estimated Words:[/bold] {breakdown.meta.total_words:,}")
    console.print(f"[bold]Estimated Tokens:[/bold] {breakdown.meta.total_tokens:,.0f}")
    console.print(f"[bold]Images to Generate:[/bold] {breakdown.meta.total_images}")
    console.print(f"[bold]Cost per 1,000 words:[/bold] {'N/A' if per_1k is None else f'${per_1k:.4f}'}")
    if details.get("completion_minutes") is not None:
        console.print(f"[bold]Estimated completion time:[/bold] {details['completion_minutes']} minutes")
    if details.get("high_cost_alert"):
        console.print(
            "[bold yellow]High Cost Alert:[/bold yellow] this generation will cost more than $10. "
            "Consider fewer topics or a less expensive model."
        )


def format_metrics_table(metrics: ContentMetrics, console: Optional[Console] = None) -> None:
    """Format content metrics as a Rich table."""
    if console is None:
        console = create_console()

    out = Table(title="Content Quality", show_header=True, header_style="bold magenta")
    out.add_column("Metric", style="cyan")
    out.add_column("Value", justify="right")

    out.add_row("Words", str(metrics.word_count))
    out.add_row("Readability", _score(metrics.readability_score))
    out.add_row("Structure", _score(metrics.structure_score))
    out.add_row(Text("Overall", style="bold"), _score(metrics.overall_score))
    console.print(out)


def format_suggestions_table(suggestions: List[Suggestion], console: Optional[Console] = None) -> None:
    """Format improvement suggestions as a Rich table."""
    if console is None:
        console = create_console()

    if not suggestions:
        console.print("[dim]No suggestions[/dim]")
        return

    out = Table(title="Improvement Suggestions", show_header=True, header_style="bold magenta")
    out.add_column("Priority", justify="center")
    out.add_column("Suggestion")

    for suggestion in suggestions:
        priority = suggestion.priority.value
        out.add_row(Text(priority, style=_PRIORITY_STYLES[priority]), suggestion.message)
    console.print(out)


def format_variations_table(
    variations: List[Variation], ranking: VariationRanking, console: Optional[Console] = None
) -> None:
    """Format a variation comparison and the best-of categories."""
    if console is None:
        console = create_console()

    out = Table(title="Variation Comparison", show_header=True, header_style="bold magenta")
    out.add_column("Variation", style="cyan")
    out.add_column("Style")
    out.add_column("Temp", justify="right")
    out.add_column("Words", justify="right")
    out.add_column("Readability", justify="right")
    out.add_column("Structure", justify="right")
    out.add_column("Overall", justify="right")

    for variation in variations:
        out.add_row(
            variation.label,
            variation.style.value,
            f"{variation.temperature:.1f}",
            str(variation.metrics.word_count),
            _score(variation.metrics.readability_score),
            _score(variation.metrics.structure_score),
            _score(variation.metrics.overall_score),
        )
    console.print(out)

    for category, best in (
        ("Best Overall", ranking.best_overall),
        ("Most Readable", ranking.most_readable),
        ("Best Structure", ranking.best_structured),
    ):
        console.print(f"[bold]{category}:[/bold] {best.label if best else 'N/A'}")
