"""Pricing table inspection commands for the ebookai CLI."""

import click

from ...config_paths import get_pricing_path, get_pricing_path_source
from ..formatters import (
    create_console,
    format_json,
    format_pricing_json,
    format_pricing_table,
    format_providers_json,
    format_providers_table,
)
from ..utils import ExitCode, get_ebookai_env_vars, handle_error, load_pricing


@click.group()
def pricing() -> None:
    """Inspect the provider pricing table."""
    pass


@pricing.command()
@click.pass_context
def providers(ctx: click.Context) -> None:
    """List providers with pricing data."""
    table = load_pricing(ctx.obj)
    if ctx.obj["format"] == "json":
        format_json(format_providers_json(table))
    else:
        format_providers_table(table, create_console(no_color=ctx.obj["no_color"]))


@pricing.command(name="list")
@click.option("--provider", type=str, help="Only show models for this provider.")
@click.pass_context
def list_models(ctx: click.Context, provider: str) -> None:
    """List per-model rates."""
    table = load_pricing(ctx.obj)
    if provider and table.get_provider(provider) is None:
        handle_error(
            click.BadParameter(f"Unknown provider '{provider}'. Known: {', '.join(table.list_providers())}"),
            ExitCode.INVALID_USAGE,
        )

    if ctx.obj["format"] == "json":
        format_json(format_pricing_json(table, provider))
    else:
        format_pricing_table(table, provider, create_console(no_color=ctx.obj["no_color"]))


@pricing.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Show which pricing file is in effect and why."""
    resolved = ctx.obj.get("pricing_path") or get_pricing_path()
    source = "CLI flag (--pricing-file)" if ctx.obj.get("pricing_path") else get_pricing_path_source()

    if ctx.obj["format"] == "json":
        format_json({"path": resolved, "source": source, "environment_variables": get_ebookai_env_vars()})
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        console.print(f"[bold]Pricing file:[/bold] {resolved}")
        console.print(f"[bold]Source:[/bold] {source}")
        console.print("\n[bold]Resolution Precedence:[/bold]")
        console.print("  1. CLI flag (--pricing-file)")
        console.print("  2. Environment variable (EBOOKAI_PRICING_PATH)")
        console.print("  3. User config directory")
        console.print("  4. Bundled package data")
