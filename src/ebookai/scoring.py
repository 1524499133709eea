"""Static quality scoring for generated chapter and topic content.

Scores are reproducible heuristics so that several generated variations
can be ranked without human review:

- readability from the average sentence length band
- structure from the presence of headings, lists and callouts
- overall as the rounded mean of the two

Both HTML and Markdown markup are recognized.
"""

import html
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging import LogEvent, log_debug

IDEAL_BAND = (15.0, 20.0)
ACCEPTABLE_BAND = (10.0, 25.0)
IDEAL_READABILITY = 90
ACCEPTABLE_READABILITY = 75
PENALIZED_READABILITY = 60
# Pinned readability for content without any words.
EMPTY_READABILITY_SCORE = 0

STRUCTURE_BASE = 50
H2_BONUS = 15
H3_BONUS = 15
LIST_BONUS = 10
CALLOUT_BONUS = 10
MAX_SCORE = 100

MIN_WORDS = 300
SUGGESTION_THRESHOLD = 70

_TAG_RE = re.compile(r"<[^>]+>")
_MD_BLOCK_MARKER_RE = re.compile(r"^[ \t]*(?:#{1,6}|>|[-*+]|\d+[.)])[ \t]+", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

_H2_RE = re.compile(r"<h2[\s>]|^[ \t]*##[ \t]+\S", re.IGNORECASE | re.MULTILINE)
_H3_RE = re.compile(r"<h3[\s>]|^[ \t]*###[ \t]+\S", re.IGNORECASE | re.MULTILINE)
_LIST_RE = re.compile(
    r"<(?:ul|ol|li)[\s>]|^[ \t]*(?:[-*+]|\d+[.)])[ \t]+\S",
    re.IGNORECASE | re.MULTILINE,
)
_CALLOUT_RE = re.compile(
    r"<(?:blockquote|aside)[\s>]|class=[\"'][^\"']*callout|^[ \t]*>[ \t]*\S",
    re.IGNORECASE | re.MULTILINE,
)


class SuggestionPriority(str, Enum):
    """How urgently a suggestion should be acted on."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ContentMetrics:
    """Quality metrics for one piece of content."""

    word_count: int
    readability_score: int
    structure_score: int
    overall_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word_count": self.word_count,
            "readability_score": self.readability_score,
            "structure_score": self.structure_score,
            "overall_score": self.overall_score,
        }


@dataclass(frozen=True)
class Suggestion:
    """An advisory improvement; never affects scores."""

    code: str
    message: str
    priority: SuggestionPriority

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "priority": self.priority.value}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, low: int = 0, high: int = MAX_SCORE) -> int:
    return max(low, min(high, value))


def plain_text(content: str) -> str:
    """Strip markup from ``content``, leaving prose for counting."""
    text = _TAG_RE.sub(" ", content or "")
    text = html.unescape(text)
    return _MD_BLOCK_MARKER_RE.sub("", text)


def count_words(content: str) -> int:
    """Count whitespace-delimited words in the prose of ``content``."""
    return len(plain_text(content).split())


def count_sentences(content: str) -> int:
    """Count sentences in ``content``; never less than one."""
    segments = _SENTENCE_SPLIT_RE.split(plain_text(content))
    return max(1, sum(1 for segment in segments if segment.strip()))


def readability_score(content: str) -> int:
    """Score readability from the average number of words per sentence."""
    words = count_words(content)
    if words == 0:
        return EMPTY_READABILITY_SCORE

    avg = words / count_sentences(content)
    if IDEAL_BAND[0] <= avg <= IDEAL_BAND[1]:
        return IDEAL_READABILITY
    if ACCEPTABLE_BAND[0] <= avg <= ACCEPTABLE_BAND[1]:
        return ACCEPTABLE_READABILITY
    return PENALIZED_READABILITY


def has_h2(content: str) -> bool:
    return bool(_H2_RE.search(content or ""))


def has_h3(content: str) -> bool:
    return bool(_H3_RE.search(content or ""))


def has_list(content: str) -> bool:
    return bool(_LIST_RE.search(content or ""))


def has_callout(content: str) -> bool:
    return bool(_CALLOUT_RE.search(content or ""))


def structure_score(content: str) -> int:
    """Score structure from the headings, lists and callouts present."""
    score = STRUCTURE_BASE
    if has_h2(content):
        score += H2_BONUS
    if has_h3(content):
        score += H3_BONUS
    if has_list(content):
        score += LIST_BONUS
    if has_callout(content):
        score += CALLOUT_BONUS
    return _clamp(score)


def score_content(content: str) -> ContentMetrics:
    """Compute :class:`ContentMetrics` for a block of text or HTML.

    Args:
        content: Generated content; may be empty

    Returns:
        Metrics with every score in ``0..100``
    """
    readability = _clamp(readability_score(content))
    structure = structure_score(content)
    metrics = ContentMetrics(
        word_count=count_words(content),
        readability_score=readability,
        structure_score=structure,
        overall_score=_clamp(_round_half_up((readability + structure) / 2)),
    )
    log_debug(LogEvent.CONTENT_SCORING, "Scored content", **metrics.to_dict())
    return metrics


def suggest_improvements(content: str, metrics: Optional[ContentMetrics] = None) -> List[Suggestion]:
    """List improvement suggestions for ``content`` in a fixed order.

    Args:
        content: The scored content
        metrics: Metrics for ``content``; computed when omitted

    Returns:
        Suggestions ordered: length, readability, structure, subsections
    """
    if metrics is None:
        metrics = score_content(content)

    suggestions: List[Suggestion] = []
    if metrics.word_count < MIN_WORDS:
        suggestions.append(
            Suggestion(
                code="expand_content",
                message="Expand the content with more detail, examples and practical applications.",
                priority=SuggestionPriority.HIGH,
            )
        )
    if metrics.readability_score < SUGGESTION_THRESHOLD:
        suggestions.append(
            Suggestion(
                code="improve_readability",
                message="Shorten long sentences and simplify vocabulary.",
                priority=SuggestionPriority.MEDIUM,
            )
        )
    if metrics.structure_score < SUGGESTION_THRESHOLD:
        suggestions.append(
            Suggestion(
                code="improve_structure",
                message="Add headings, bullet lists or callouts to organize the content.",
                priority=SuggestionPriority.MEDIUM,
            )
        )
    if not has_h3(content):
        suggestions.append(
            Suggestion(
                code="add_subsections",
                message="Break the content into subsections with descriptive subheadings.",
                priority=SuggestionPriority.LOW,
            )
        )
    return suggestions


def score_band(score: int) -> str:
    """Classify a score as ``good``, ``fair`` or ``poor``."""
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"
