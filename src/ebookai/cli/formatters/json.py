"""JSON output for the ebookai CLI."""

import dataclasses
import json
import sys
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

from ...pricing import PricingTable
from ...scoring import ContentMetrics, Suggestion, score_band
from ...variations import Variation, VariationRanking


def _default_serializer(obj: Any) -> Any:
    """Serialize toolkit objects that ``json`` cannot handle.

    Result types expose ``to_dict``; other dataclasses are flattened, enums
    become their value and dates ISO 8601 strings.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Write ``data`` as sorted, indented JSON followed by a newline.

    Args:
        data: Mapping, list or toolkit result object
        output: Stream to write to; stdout when omitted
        indent: Indentation width
    """
    stream = output if output is not None else sys.stdout
    json.dump(data, stream, indent=indent, ensure_ascii=False, sort_keys=True, default=_default_serializer)
    stream.write("\n")


def format_providers_json(table: PricingTable) -> Dict[str, Any]:
    """Format providers for JSON output."""
    providers = []
    for name in table.list_providers():
        image_pricing = table.get_image_pricing(name)
        providers.append(
            {
                "name": name,
                "models": len(table.list_models(name)),
                "image_model": image_pricing.name if image_pricing else None,
            }
        )
    return {"providers": providers, "count": len(providers)}


def format_pricing_json(table: PricingTable, provider: Optional[str] = None) -> Dict[str, Any]:
    """Format the pricing table (optionally one provider) for JSON output."""
    data = table.to_dict()
    if provider is not None:
        data["providers"] = {k: v for k, v in data["providers"].items() if k == provider.lower()}
    data["source"] = table.source
    return data


def format_metrics_json(metrics: ContentMetrics) -> Dict[str, Any]:
    """Format content metrics with their quality band."""
    return {**metrics.to_dict(), "band": score_band(metrics.overall_score)}


def format_suggestions_json(suggestions: List[Suggestion]) -> Dict[str, Any]:
    return {"suggestions": list(suggestions), "count": len(suggestions)}


def format_variations_json(variations: List[Variation], ranking: VariationRanking) -> Dict[str, Any]:
    """Format a variation batch and its ranking for JSON output."""
    return {
        "variations": [v.to_dict() for v in variations],
        "ranking": ranking.to_dict(),
        "count": len(variations),
    }
