"""Tests for cost estimation."""

from pathlib import Path
from typing import Any, Dict, List

import pytest

from ebookai.config_paths import ENV_PRICING_PATH
from ebookai.estimator import (
    CostBreakdown,
    cost_per_thousand_words,
    cost_tier,
    estimate_book_cost,
    estimate_cost,
    estimate_job,
    estimated_completion_minutes,
    is_high_cost,
)
from ebookai.pricing import PricingTable


def _outline(chapters: int, topics_per_chapter: int) -> List[Dict[str, Any]]:
    return [{"title": f"Chapter {i}", "topics": [{"title": "t"}] * topics_per_chapter} for i in range(chapters)]


def test_worked_example(pricing_table: PricingTable) -> None:
    """gpt-4 with 10,000 tokens and 5 images costs $0.71."""
    breakdown = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5, pricing=pricing_table)
    assert breakdown.text_cost == pytest.approx(0.51)
    assert breakdown.image_cost == pytest.approx(0.20)
    assert breakdown.rag_cost == 0.0
    assert breakdown.total_cost == pytest.approx(0.71)
    assert breakdown.meta.total_tokens == 10000
    assert breakdown.meta.total_images == 5
    assert breakdown.meta.rag_enabled is False


def test_uses_default_table() -> None:
    """Without an explicit table the bundled pricing is used."""
    breakdown = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5)
    assert breakdown.total_cost == pytest.approx(0.71)


def test_unreadable_pricing_file_counts_as_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    broken = tmp_path / "pricing.yml"
    broken.write_text("providers: [unclosed")
    monkeypatch.setenv(ENV_PRICING_PATH, str(broken))
    PricingTable._default_instance = None

    breakdown = estimate_cost("openai", "gpt-4", text_tokens=1000, images=2, rag_enabled=True)

    assert breakdown.total_cost == 0.0
    assert breakdown.meta.total_tokens == 1000


def test_rag_multiplies_total(pricing_table: PricingTable) -> None:
    """RAG adds a 20% surcharge over the whole estimate."""
    plain = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5, pricing=pricing_table)
    rag = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5, rag_enabled=True, pricing=pricing_table)
    assert rag.total_cost == pytest.approx(plain.total_cost * 1.2)
    assert rag.rag_cost == pytest.approx(plain.total_cost * 0.2)
    assert rag.meta.rag_enabled is True


def test_rag_cost_folded_into_text_cost(pricing_table: PricingTable) -> None:
    rag = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5, rag_enabled=True, pricing=pricing_table)
    assert rag.image_cost == pytest.approx(0.20)
    assert rag.text_cost == pytest.approx(0.51 + rag.rag_cost)
    assert rag.total_cost == pytest.approx(rag.text_cost + rag.image_cost)


def test_rag_cost_includes_image_share(pricing_table: PricingTable) -> None:
    rag = estimate_cost("openai", "gpt-4", text_tokens=10000, images=5, rag_enabled=True, pricing=pricing_table)
    assert rag.rag_cost == pytest.approx((0.51 + 0.20) * 0.2)


def test_rag_without_images_matches_text_surcharge(pricing_table: PricingTable) -> None:
    plain = estimate_cost("openai", "gpt-4", text_tokens=10000, pricing=pricing_table)
    rag = estimate_cost("openai", "gpt-4", text_tokens=10000, rag_enabled=True, pricing=pricing_table)
    assert rag.rag_cost == pytest.approx(plain.text_cost * 0.2)


@pytest.mark.parametrize("tokens", [0, 1, 999.5, 10000, 2_500_000])
def test_text_cost_non_negative(pricing_table: PricingTable, tokens: float) -> None:
    breakdown = estimate_cost("anthropic", "claude-3-haiku", text_tokens=tokens, pricing=pricing_table)
    assert breakdown.text_cost >= 0
    assert breakdown.total_cost == breakdown.text_cost + breakdown.image_cost


def test_unknown_model_contributes_zero_text_cost(pricing_table: PricingTable) -> None:
    """Missing pricing under-reports rather than failing."""
    breakdown = estimate_cost("openai", "gpt-99", text_tokens=10000, images=2, pricing=pricing_table)
    assert breakdown.text_cost == 0.0
    assert breakdown.image_cost == pytest.approx(0.08)


def test_unknown_provider_is_all_zero(pricing_table: PricingTable) -> None:
    breakdown = estimate_cost("nobody", "whatever", text_tokens=10000, images=3, rag_enabled=True, pricing=pricing_table)
    assert breakdown.total_cost == 0.0
    assert breakdown.rag_cost == 0.0


def test_provider_without_image_model(pricing_table: PricingTable) -> None:
    breakdown = estimate_cost("anthropic", "claude-3-haiku", text_tokens=1000, images=10, pricing=pricing_table)
    assert breakdown.image_cost == 0.0


def test_breakdown_is_frozen(pricing_table: PricingTable) -> None:
    breakdown = estimate_cost("openai", "gpt-4", text_tokens=100, pricing=pricing_table)
    with pytest.raises(AttributeError):
        breakdown.total_cost = 0.0  # type: ignore[misc]


def test_to_dict(pricing_table: PricingTable) -> None:
    data = estimate_cost("openai", "gpt-4", text_tokens=100, total_words=77, pricing=pricing_table).to_dict()
    assert set(data) == {"text_cost", "image_cost", "rag_cost", "total_cost", "meta"}
    assert data["meta"]["total_words"] == 77


def test_estimate_job() -> None:
    job = estimate_job(_outline(chapters=3, topics_per_chapter=4))
    assert job.total_topics == 12
    assert job.total_words == 9600
    assert job.total_tokens == 12480
    assert job.total_images == 3


def test_estimate_job_accepts_objects_and_missing_topics() -> None:
    class Chapter:
        def __init__(self, topics: Any) -> None:
            self.topics = topics

    job = estimate_job([Chapter(["a", "b"]), Chapter(None), {"title": "no topics"}])
    assert job.total_topics == 2
    assert job.total_images == 3


def test_estimate_book_cost(pricing_table: PricingTable) -> None:
    breakdown = estimate_book_cost("openai", "gpt-4", _outline(2, 5), pricing=pricing_table)
    assert breakdown.meta.total_words == 8000
    assert breakdown.meta.total_tokens == 10400
    assert breakdown.meta.total_images == 2
    # 3120 input tokens at 0.03/1k + 7280 output tokens at 0.06/1k, plus 2 images
    assert breakdown.total_cost == pytest.approx(0.0936 + 0.4368 + 0.08)


def test_zero_topics(pricing_table: PricingTable) -> None:
    """An empty outline costs nothing and has no per-word cost."""
    breakdown = estimate_book_cost("openai", "gpt-4", [], pricing=pricing_table)
    assert breakdown.total_cost == 0.0
    assert breakdown.meta.total_words == 0
    assert cost_per_thousand_words(breakdown) is None


def test_cost_per_thousand_words(pricing_table: PricingTable) -> None:
    breakdown = estimate_book_cost("openai", "gpt-4", _outline(1, 5), pricing=pricing_table)
    assert cost_per_thousand_words(breakdown) == pytest.approx(breakdown.total_cost / 4000 * 1000)


@pytest.mark.parametrize(
    "cost, tier",
    [(0.0, "low"), (0.99, "low"), (1.0, "moderate"), (4.99, "moderate"), (5.0, "high"), (50.0, "high")],
)
def test_cost_tier(cost: float, tier: str) -> None:
    assert cost_tier(cost) == tier


def test_high_cost_alert(pricing_table: PricingTable) -> None:
    cheap = estimate_cost("openai", "gpt-4", text_tokens=1000, pricing=pricing_table)
    pricey = CostBreakdown(text_cost=10.5, image_cost=0.0, rag_cost=0.0, total_cost=10.5, meta=cheap.meta)
    assert not is_high_cost(cheap)
    assert is_high_cost(pricey)


def test_estimated_completion_minutes() -> None:
    assert estimated_completion_minutes(0) == 0
    assert estimated_completion_minutes(12) == 24
