"""Cost estimation for book generation jobs.

Estimates are computed before a job is submitted and are purely
arithmetic: no network calls and no exceptions. Unknown providers or
models contribute zero to the estimate instead of failing, and so does
every term when the pricing file cannot be loaded.

With RAG enabled the surcharge applies to text and image cost alike, so
the reported ``rag_cost`` includes an image share whenever images are
requested.

Typical usage:

    from ebookai.estimator import estimate_cost

    breakdown = estimate_cost("openai", "gpt-4", text_tokens=10_000, images=5)
    print(breakdown.total_cost)
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from .errors import ConfigurationError
from .logging import LogEvent, log_debug, log_warning
from .pricing import PricingTable, get_pricing_table

# Share of job tokens spent on prompts/context versus generated output.
INPUT_TOKEN_SHARE = 0.3
OUTPUT_TOKEN_SHARE = 0.7

# Flat surcharge modelling extra retrieval context when RAG is enabled.
RAG_OVERHEAD = 0.2

WORDS_PER_TOPIC = 800
TOKENS_PER_WORD = 1.3
IMAGES_PER_CHAPTER = 1
MINUTES_PER_TOPIC = 2

LOW_COST_LIMIT = 1.0
MODERATE_COST_LIMIT = 5.0
HIGH_COST_ALERT = 10.0

Chapter = Union[Mapping[str, Any], Any]


@dataclass(frozen=True)
class CostMeta:
    """Volume figures an estimate was computed from."""

    total_words: int
    total_tokens: float
    total_images: int
    rag_enabled: bool


@dataclass(frozen=True)
class CostBreakdown:
    """Dollar estimate for a generation job.

    ``rag_cost`` is informational: it is already included in ``text_cost``,
    so ``total_cost == text_cost + image_cost`` always holds. It is 20% of
    text plus image cost, so it carries an image share when images > 0.
    """

    text_cost: float
    image_cost: float
    rag_cost: float
    total_cost: float
    meta: CostMeta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text_cost": self.text_cost,
            "image_cost": self.image_cost,
            "rag_cost": self.rag_cost,
            "total_cost": self.total_cost,
            "meta": {
                "total_words": self.meta.total_words,
                "total_tokens": self.meta.total_tokens,
                "total_images": self.meta.total_images,
                "rag_enabled": self.meta.rag_enabled,
            },
        }


@dataclass(frozen=True)
class JobEstimate:
    """Expected output volume of a book outline."""

    total_topics: int
    total_words: int
    total_tokens: int
    total_images: int


def _topics_of(chapter: Chapter) -> Sequence[Any]:
    if isinstance(chapter, Mapping):
        topics = chapter.get("topics")
    else:
        topics = getattr(chapter, "topics", None)
    return topics or []


def estimate_job(chapters: Iterable[Chapter]) -> JobEstimate:
    """Estimate words, tokens and images for a chapter/topic outline.

    Args:
        chapters: Chapters as mappings or objects with an optional ``topics``
            sequence

    Returns:
        JobEstimate with one image per chapter and a fixed word count per topic
    """
    chapter_list = list(chapters)
    total_topics = sum(len(_topics_of(chapter)) for chapter in chapter_list)
    total_words = total_topics * WORDS_PER_TOPIC
    return JobEstimate(
        total_topics=total_topics,
        total_words=total_words,
        total_tokens=math.ceil(total_words * TOKENS_PER_WORD),
        total_images=len(chapter_list) * IMAGES_PER_CHAPTER,
    )


def _default_table() -> PricingTable:
    try:
        return get_pricing_table()
    except ConfigurationError as e:
        log_warning(
            LogEvent.COST_ESTIMATE,
            "Pricing unavailable, counting every cost term as zero",
            path=e.path,
            error=str(e),
        )
        return PricingTable({})


def estimate_cost(
    provider: str,
    model: str,
    text_tokens: float,
    images: int = 0,
    rag_enabled: bool = False,
    total_words: int = 0,
    pricing: Optional[PricingTable] = None,
) -> CostBreakdown:
    """Estimate the dollar cost of a generation job.

    Args:
        provider: Provider key into the pricing table
        model: Model key under ``provider``
        text_tokens: Total tokens expected for the job
        images: Number of images to generate
        rag_enabled: Whether retrieval context is added to prompts
        total_words: Word volume the token count was derived from
        pricing: Pricing table; defaults to :func:`get_pricing_table`

    Returns:
        A new CostBreakdown
    """
    table = pricing if pricing is not None else _default_table()

    text_cost = 0.0
    model_pricing = table.get_model_pricing(provider, model)
    if model_pricing is None:
        log_debug(
            LogEvent.COST_ESTIMATE,
            "No text pricing for model, counting text cost as zero",
            provider=provider,
            model=model,
        )
    else:
        input_tokens = text_tokens * INPUT_TOKEN_SHARE
        output_tokens = text_tokens * OUTPUT_TOKEN_SHARE
        text_cost = (input_tokens / 1000) * model_pricing.input_per_1k + (
            output_tokens / 1000
        ) * model_pricing.output_per_1k

    image_cost = 0.0
    image_pricing = table.get_image_pricing(provider)
    if image_pricing is not None:
        image_cost = images * image_pricing.per_image

    rag_cost = 0.0
    if rag_enabled:
        # surcharge covers image cost too
        rag_cost = (text_cost + image_cost) * RAG_OVERHEAD
        text_cost += rag_cost

    return CostBreakdown(
        text_cost=text_cost,
        image_cost=image_cost,
        rag_cost=rag_cost,
        total_cost=text_cost + image_cost,
        meta=CostMeta(
            total_words=total_words,
            total_tokens=text_tokens,
            total_images=images,
            rag_enabled=rag_enabled,
        ),
    )


def estimate_book_cost(
    provider: str,
    model: str,
    chapters: Iterable[Chapter],
    rag_enabled: bool = False,
    pricing: Optional[PricingTable] = None,
) -> CostBreakdown:
    """Estimate the cost of generating a whole outline."""
    job = estimate_job(chapters)
    return estimate_cost(
        provider,
        model,
        text_tokens=job.total_tokens,
        images=job.total_images,
        rag_enabled=rag_enabled,
        total_words=job.total_words,
        pricing=pricing,
    )


def cost_per_thousand_words(breakdown: CostBreakdown) -> Optional[float]:
    """Return cost per 1,000 words, or None when no words are expected."""
    if breakdown.meta.total_words == 0:
        return None
    return breakdown.total_cost / breakdown.meta.total_words * 1000


def cost_tier(cost: float) -> str:
    """Classify a dollar amount as ``low``, ``moderate`` or ``high``."""
    if cost < LOW_COST_LIMIT:
        return "low"
    if cost < MODERATE_COST_LIMIT:
        return "moderate"
    return "high"


def is_high_cost(breakdown: CostBreakdown) -> bool:
    """Whether the estimate crosses the high cost alert threshold."""
    return breakdown.total_cost > HIGH_COST_ALERT


def estimated_completion_minutes(total_topics: int) -> int:
    """Rough wall-clock minutes to generate ``total_topics`` topics."""
    return math.ceil(total_topics * MINUTES_PER_TOPIC)
