"""Tests for content scoring and suggestions."""

import pytest

from ebookai.scoring import (
    ContentMetrics,
    SuggestionPriority,
    count_sentences,
    count_words,
    plain_text,
    readability_score,
    score_band,
    score_content,
    structure_score,
    suggest_improvements,
)


def sentence(words: int) -> str:
    return " ".join(["word"] * words) + ". "


def test_worked_example() -> None:
    """h2, h3 and a list over 15-word sentences score 90 across the board."""
    content = "<h2>Overview</h2><h3>Details</h3><p>" + sentence(18) * 4 + "</p><ul><li>Point</li></ul>"
    metrics = score_content(content)
    assert metrics == ContentMetrics(word_count=75, readability_score=90, structure_score=90, overall_score=90)


def test_empty_content() -> None:
    metrics = score_content("")
    assert metrics.word_count == 0
    assert metrics.readability_score == 0
    assert metrics.structure_score == 50
    assert metrics.overall_score == 25


def test_markup_only_content_counts_no_words() -> None:
    metrics = score_content("<h2></h2><ul><li></li></ul>")
    assert metrics.word_count == 0
    assert metrics.readability_score == 0
    assert metrics.structure_score == 75


def test_plain_text_strips_tags_and_entities() -> None:
    assert plain_text("<p>caf&eacute; &amp; tea</p>").split() == ["café", "&", "tea"]
    assert count_words("<p>Hello <b>bold</b> world</p>") == 3


def test_markdown_markers_do_not_count_as_words() -> None:
    content = "## Title\n\n- one\n- two\n\n> quoted text\n"
    assert count_words(content) == 5


def test_count_sentences_is_at_least_one() -> None:
    assert count_sentences("") == 1
    assert count_sentences("no terminator here") == 1
    assert count_sentences("One. Two! Three?") == 3
    assert count_sentences("Wait... what?!") == 2


@pytest.mark.parametrize(
    "words_per_sentence, expected",
    [(15, 90), (18, 90), (20, 90), (10, 75), (12, 75), (25, 75), (5, 60), (9, 60), (30, 60)],
)
def test_readability_bands(words_per_sentence: int, expected: int) -> None:
    content = sentence(words_per_sentence) * 3
    assert readability_score(content) == expected


@pytest.mark.parametrize(
    "content, expected",
    [
        ("plain text", 50),
        ("<h2>A</h2>", 65),
        ("<h3>A</h3>", 65),
        ("<ul><li>a</li></ul>", 60),
        ("<blockquote>a</blockquote>", 60),
        ('<div class="callout tip">a</div>', 60),
        ("<h2>A</h2><h3>B</h3><ol><li>c</li></ol><aside>d</aside>", 100),
        ("## A\n\n### B\n\n1. c\n\n> d\n", 100),
    ],
)
def test_structure_score(content: str, expected: int) -> None:
    assert structure_score(content) == expected


def test_h3_does_not_count_as_markdown_h2() -> None:
    assert structure_score("### Only a subsection\n") == 65


def test_overall_rounds_half_up() -> None:
    """A 75 readability with no structure averages 62.5 and rounds to 63."""
    metrics = score_content(sentence(12))
    assert metrics.readability_score == 75
    assert metrics.structure_score == 50
    assert metrics.overall_score == 63


def test_scores_are_bounded() -> None:
    content = "<h2>a</h2><h2>b</h2><h3>c</h3><h3>d</h3><ul></ul><ol></ol><blockquote></blockquote>" + sentence(16)
    metrics = score_content(content)
    for value in (metrics.readability_score, metrics.structure_score, metrics.overall_score):
        assert 0 <= value <= 100


def test_scoring_is_deterministic() -> None:
    content = "<h2>Title</h2>" + sentence(17) * 5
    assert score_content(content) == score_content(content)


def test_suggestions_for_empty_content() -> None:
    suggestions = suggest_improvements("")
    assert [s.code for s in suggestions] == [
        "expand_content",
        "improve_readability",
        "improve_structure",
        "add_subsections",
    ]
    assert [s.priority for s in suggestions] == [
        SuggestionPriority.HIGH,
        SuggestionPriority.MEDIUM,
        SuggestionPriority.MEDIUM,
        SuggestionPriority.LOW,
    ]


def test_no_suggestions_for_good_content() -> None:
    content = "<h3></h3><ul><li></li></ul>" + sentence(18) * 20
    metrics = score_content(content)
    assert metrics.word_count == 360
    assert metrics.readability_score == 90
    assert metrics.structure_score == 75
    assert suggest_improvements(content, metrics) == []


def test_only_subsection_suggestion() -> None:
    content = "<h2></h2><ul><li></li></ul>" + sentence(18) * 20
    assert [s.code for s in suggest_improvements(content)] == ["add_subsections"]


def test_suggestions_use_supplied_metrics() -> None:
    """Precomputed metrics are trusted as given."""
    metrics = ContentMetrics(word_count=1000, readability_score=50, structure_score=90, overall_score=70)
    codes = [s.code for s in suggest_improvements("<h3>x</h3>", metrics)]
    assert codes == ["improve_readability"]


def test_suggestion_to_dict() -> None:
    data = suggest_improvements("")[0].to_dict()
    assert data["code"] == "expand_content"
    assert data["priority"] == "high"
    assert data["message"]


@pytest.mark.parametrize("score, band", [(100, "good"), (80, "good"), (79, "fair"), (60, "fair"), (59, "poor"), (0, "poor")])
def test_score_band(score: int, band: str) -> None:
    assert score_band(score) == band
