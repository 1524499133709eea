"""CLI formatters package."""

from .json import (
    format_json,
    format_metrics_json,
    format_pricing_json,
    format_providers_json,
    format_suggestions_json,
    format_variations_json,
)
from .table import (
    create_console,
    format_breakdown_table,
    format_metrics_table,
    format_pricing_table,
    format_providers_table,
    format_suggestions_table,
    format_variations_table,
)

__all__ = [
    "format_json",
    "format_providers_json",
    "format_pricing_json",
    "format_metrics_json",
    "format_suggestions_json",
    "format_variations_json",
    "create_console",
    "format_providers_table",
    "format_pricing_table",
    "format_breakdown_table",
    "format_metrics_table",
    "format_suggestions_table",
    "format_variations_table",
]
