"""Content generation results.

Generators are supplied by the caller (one per configured provider). The
helpers here try them in order and return an explicit
:class:`GenerationResult`, so callers can tell real provider output from
canned demo content instead of receiving indistinguishable strings.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from .errors import GenerationError
from .logging import LogEvent, log_info, log_warning

DEFAULT_TEMPERATURE = 0.7

TOC_GENERATION = "toc-generation"
CONTENT_GENERATION = "content-generation"


@runtime_checkable
class ContentGenerator(Protocol):
    """A provider capable of turning a prompt into content."""

    name: str

    def generate(self, prompt: str, *, temperature: float = DEFAULT_TEMPERATURE) -> str:
        """Return generated content or raise on failure."""
        ...


class GenerationSource(str, Enum):
    """Where the content of a result came from."""

    PROVIDER = "provider"
    FALLBACK = "fallback"
    NONE = "none"


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation attempt.

    Attributes:
        content: Generated or fallback content, None on failure
        source: Whether the content came from a provider or a fallback
        provider: Name of the generator that produced the content
        error: The last provider error, set on fallback and failure
    """

    content: Optional[str]
    source: GenerationSource
    provider: Optional[str] = None
    error: Optional[GenerationError] = None

    @classmethod
    def success(cls, content: str, provider: str) -> "GenerationResult":
        return cls(content=content, source=GenerationSource.PROVIDER, provider=provider)

    @classmethod
    def fallback(cls, content: str, error: GenerationError) -> "GenerationResult":
        return cls(content=content, source=GenerationSource.FALLBACK, error=error)

    @classmethod
    def failure(cls, error: GenerationError) -> "GenerationResult":
        return cls(content=None, source=GenerationSource.NONE, error=error)

    @property
    def ok(self) -> bool:
        """True only for real provider output."""
        return self.source is GenerationSource.PROVIDER

    @property
    def used_fallback(self) -> bool:
        return self.source is GenerationSource.FALLBACK

    def unwrap(self) -> str:
        """Return provider content or raise the carried error.

        Raises:
            GenerationError: If the result is a fallback or a failure
        """
        if self.ok and self.content is not None:
            return self.content
        raise self.error or GenerationError("No content was generated")


def generate_content(
    prompt: str,
    generators: Sequence[ContentGenerator],
    temperature: float = DEFAULT_TEMPERATURE,
    fallback: Optional[Callable[[str], str]] = None,
) -> GenerationResult:
    """Try each generator in order and return the first success.

    Args:
        prompt: Prompt passed to every generator
        generators: Generators in preference order
        temperature: Sampling temperature
        fallback: Optional callable producing substitute content from the
            prompt when every generator fails

    Returns:
        A success, fallback or failure result
    """
    error = GenerationError("No content generators configured")
    for generator in generators:
        try:
            content = generator.generate(prompt, temperature=temperature)
        except Exception as e:
            error = e if isinstance(e, GenerationError) else GenerationError(str(e), provider=generator.name)
            if error.provider is None:
                error.provider = generator.name
            log_warning(
                LogEvent.GENERATION,
                "Generator failed, trying next",
                provider=generator.name,
                error=str(e),
            )
            continue
        return GenerationResult.success(content, generator.name)

    if fallback is not None:
        log_info(LogEvent.GENERATION, "All generators failed, using fallback content", error=str(error))
        return GenerationResult.fallback(fallback(prompt), error)
    return GenerationResult.failure(error)


_DEMO_OUTLINE = {
    "chapters": [
        {
            "title": "Introduction and Foundations",
            "description": "Setting the groundwork for understanding the subject",
            "topics": [
                {
                    "title": "Welcome and Overview",
                    "objectives": "Understand the scope and goals of this book",
                    "estimated_words": 1200,
                },
                {
                    "title": "Core Concepts and Terminology",
                    "objectives": "Master the fundamental vocabulary and concepts",
                    "estimated_words": 1800,
                },
            ],
        },
        {
            "title": "Fundamental Principles",
            "description": "Deep dive into the core principles and theories",
            "topics": [
                {
                    "title": "Theoretical Framework",
                    "objectives": "Understand the underlying theoretical foundation",
                    "estimated_words": 2000,
                },
                {
                    "title": "Best Practices and Standards",
                    "objectives": "Discover industry best practices and standards",
                    "estimated_words": 1600,
                },
            ],
        },
        {
            "title": "Practical Applications",
            "description": "Real-world implementation and case studies",
            "topics": [
                {
                    "title": "Implementation Strategies",
                    "objectives": "Learn how to apply concepts in practice",
                    "estimated_words": 2200,
                },
                {
                    "title": "Case Studies and Examples",
                    "objectives": "Analyze real-world examples and success stories",
                    "estimated_words": 1900,
                },
            ],
        },
    ]
}

_DEMO_TOPIC_HTML = """\
<h2>{title}</h2>
<h3>Introduction</h3>
<p>This section provides an overview of {title_lower} for readers at all levels. \
It introduces the ideas that the rest of the chapter builds on.</p>
<h3>Key Concepts</h3>
<ul>
  <li>Core principles and the vocabulary used throughout the book</li>
  <li>How the principles relate to each other in practice</li>
</ul>
<h3>Research Insights</h3>
<blockquote><p>Success requires a combination of theoretical knowledge and practical experience.</p></blockquote>
"""


def demo_content(kind: str = CONTENT_GENERATION, topic_title: str = "This Topic") -> str:
    """Return canned demo content.

    Args:
        kind: ``toc-generation`` for a JSON outline, anything else for topic HTML
        topic_title: Title substituted into topic HTML
    """
    if kind == TOC_GENERATION:
        return json.dumps(_DEMO_OUTLINE, indent=2)
    return _DEMO_TOPIC_HTML.format(title=topic_title, title_lower=topic_title.lower())
