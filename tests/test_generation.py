"""Tests for provider fallback and generation results."""

import json
from typing import List, Optional

import pytest

from ebookai.errors import GenerationError
from ebookai.generation import (
    CONTENT_GENERATION,
    TOC_GENERATION,
    ContentGenerator,
    GenerationResult,
    GenerationSource,
    demo_content,
    generate_content,
)
from ebookai.scoring import score_content


class FakeGenerator:
    """Generator returning canned content or raising."""

    def __init__(self, name: str, content: Optional[str] = None, error: Optional[Exception] = None):
        self.name = name
        self.content = content
        self.error = error
        self.calls: List[float] = []

    def generate(self, prompt: str, *, temperature: float = 0.7) -> str:
        self.calls.append(temperature)
        if self.error is not None:
            raise self.error
        return self.content or f"{self.name}: {prompt}"


def test_fake_generator_satisfies_protocol() -> None:
    assert isinstance(FakeGenerator("x"), ContentGenerator)


def test_first_generator_wins() -> None:
    first = FakeGenerator("openai", content="from openai")
    second = FakeGenerator("anthropic", content="from anthropic")

    result = generate_content("Write", [first, second], temperature=0.3)

    assert result.ok
    assert result.source is GenerationSource.PROVIDER
    assert result.provider == "openai"
    assert result.unwrap() == "from openai"
    assert first.calls == [0.3]
    assert second.calls == []


def test_falls_through_to_next_generator() -> None:
    broken = FakeGenerator("openai", error=RuntimeError("rate limited"))
    working = FakeGenerator("anthropic", content="from anthropic")

    result = generate_content("Write", [broken, working])

    assert result.ok
    assert result.provider == "anthropic"
    assert result.content == "from anthropic"


def test_all_fail_without_fallback() -> None:
    result = generate_content(
        "Write",
        [
            FakeGenerator("openai", error=RuntimeError("down")),
            FakeGenerator("anthropic", error=GenerationError("quota exceeded")),
        ],
    )

    assert not result.ok
    assert result.source is GenerationSource.NONE
    assert result.content is None
    assert result.error is not None
    assert result.error.provider == "anthropic"
    with pytest.raises(GenerationError, match="quota exceeded"):
        result.unwrap()


def test_non_generation_errors_are_wrapped() -> None:
    result = generate_content("Write", [FakeGenerator("openai", error=ValueError("bad key"))])
    assert isinstance(result.error, GenerationError)
    assert result.error.provider == "openai"
    assert "bad key" in str(result.error)


def test_fallback_is_flagged() -> None:
    """Fallback content is returned but never reported as provider output."""
    result = generate_content(
        "Write",
        [FakeGenerator("openai", error=RuntimeError("down"))],
        fallback=lambda prompt: f"demo for {prompt}",
    )

    assert result.used_fallback
    assert not result.ok
    assert result.content == "demo for Write"
    assert result.provider is None
    assert result.error is not None
    with pytest.raises(GenerationError):
        result.unwrap()


def test_no_generators() -> None:
    result = generate_content("Write", [])
    assert result.source is GenerationSource.NONE
    assert str(result.error) == "No content generators configured"


def test_no_generators_with_fallback() -> None:
    result = generate_content("Write", [], fallback=lambda prompt: "demo")
    assert result.used_fallback
    assert result.content == "demo"


def test_result_constructors() -> None:
    error = GenerationError("boom", provider="openai")
    assert GenerationResult.success("text", "openai").ok
    assert GenerationResult.fallback("text", error).error is error
    failure = GenerationResult.failure(error)
    assert failure.content is None
    assert not failure.used_fallback


def test_demo_outline_is_json() -> None:
    outline = json.loads(demo_content(TOC_GENERATION))
    assert len(outline["chapters"]) == 3
    assert all(chapter["topics"] for chapter in outline["chapters"])


def test_demo_topic_is_structured() -> None:
    content = demo_content(CONTENT_GENERATION, topic_title="Soil Health")
    assert "<h2>Soil Health</h2>" in content
    assert "soil health" in content
    assert score_content(content).structure_score == 100
