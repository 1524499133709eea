"""Variation batches for A/B content testing.

A batch holds several generations of the same topic under different
sampling configurations. Variations are labelled A, B, C… in generation
order and ranked by their :class:`~ebookai.scoring.ContentMetrics`.
"""

import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import InvalidStateTransitionError
from .generation import ContentGenerator, GenerationResult, generate_content
from .logging import LogEvent, log_debug, log_info
from .scoring import ContentMetrics, score_content


class VariationStyle(str, Enum):
    """Writing style requested for a variation."""

    DETAILED = "detailed"
    CONCISE = "concise"


@dataclass(frozen=True)
class VariationSpec:
    """Sampling configuration for one variation slot."""

    style: VariationStyle
    temperature: float


DEFAULT_VARIATION_SPECS = (
    VariationSpec(VariationStyle.DETAILED, 0.3),
    VariationSpec(VariationStyle.CONCISE, 0.9),
    VariationSpec(VariationStyle.DETAILED, 0.7),
)


@dataclass(frozen=True)
class Variation:
    """One scored candidate generation."""

    id: str
    label: str
    style: VariationStyle
    temperature: float
    content: str
    metrics: ContentMetrics
    generation: Optional[GenerationResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "style": self.style.value,
            "temperature": self.temperature,
            "metrics": self.metrics.to_dict(),
            "used_fallback": bool(self.generation and self.generation.used_fallback),
        }


@dataclass(frozen=True)
class VariationRanking:
    """Best variation per metric; None for an empty batch."""

    best_overall: Optional[Variation]
    most_readable: Optional[Variation]
    best_structured: Optional[Variation]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "best_overall": self.best_overall.label if self.best_overall else None,
            "most_readable": self.most_readable.label if self.most_readable else None,
            "best_structured": self.best_structured.label if self.best_structured else None,
        }


def variation_label(index: int) -> str:
    """Return the spreadsheet-style label for a zero-based slot index."""
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def _spec_for(specs: Sequence[VariationSpec], index: int) -> VariationSpec:
    return specs[index % len(specs)]


def _require_specs(specs: Sequence[VariationSpec]) -> None:
    if not specs:
        raise ValueError("At least one variation spec is required")


def build_variations(
    contents: Sequence[str],
    specs: Sequence[VariationSpec] = DEFAULT_VARIATION_SPECS,
    results: Optional[Sequence[GenerationResult]] = None,
) -> List[Variation]:
    """Label and score generated contents in generation order.

    Args:
        contents: Generated contents, one per slot
        specs: Slot configurations; reused cyclically if shorter than ``contents``
        results: Optional generation results matching ``contents``

    Raises:
        ValueError: If ``contents`` is non-empty and ``specs`` is empty
    """
    if contents:
        _require_specs(specs)
    variations = []
    for index, content in enumerate(contents):
        spec = _spec_for(specs, index)
        variations.append(
            Variation(
                id=uuid.uuid4().hex,
                label=variation_label(index),
                style=spec.style,
                temperature=spec.temperature,
                content=content,
                metrics=score_content(content),
                generation=results[index] if results is not None else None,
            )
        )
    return variations


def _best_by(variations: Sequence[Variation], metric: Callable[[ContentMetrics], int]) -> Optional[Variation]:
    best: Optional[Variation] = None
    for variation in variations:
        if best is None or metric(variation.metrics) > metric(best.metrics):
            best = variation
    return best


def rank_variations(variations: Sequence[Variation]) -> VariationRanking:
    """Pick the best variation for each metric.

    Each category is a strict maximum; ties go to the earliest variation.
    """
    return VariationRanking(
        best_overall=_best_by(variations, lambda m: m.overall_score),
        most_readable=_best_by(variations, lambda m: m.readability_score),
        best_structured=_best_by(variations, lambda m: m.structure_score),
    )


def generate_variations(
    prompt: str,
    generators: Sequence[ContentGenerator],
    specs: Sequence[VariationSpec] = DEFAULT_VARIATION_SPECS,
    fallback: Optional[Callable[[str], str]] = None,
    max_workers: Optional[int] = None,
) -> List[Variation]:
    """Generate one variation per spec concurrently and score them.

    Generation runs on a thread pool; results keep slot order regardless of
    completion order. Slots that produce no content are scored as empty.
    """

    def _run(spec: VariationSpec) -> GenerationResult:
        return generate_content(prompt, generators, temperature=spec.temperature, fallback=fallback)

    with ThreadPoolExecutor(max_workers=max_workers or max(1, len(specs))) as executor:
        results = list(executor.map(_run, specs))

    log_info(
        LogEvent.VARIATIONS,
        "Generated variation batch",
        count=len(results),
        fallbacks=sum(1 for r in results if r.used_fallback),
    )
    return build_variations([r.content or "" for r in results], specs, results)


class BatchState(str, Enum):
    """Lifecycle of a variation batch."""

    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    SELECTED = "selected"
    DISCARDED = "discarded"


_TRANSITIONS = {
    BatchState.IDLE: {BatchState.GENERATING},
    BatchState.GENERATING: {BatchState.READY, BatchState.DISCARDED},
    BatchState.READY: {BatchState.SELECTED, BatchState.DISCARDED},
    BatchState.SELECTED: set(),
    BatchState.DISCARDED: set(),
}


class VariationBatch:
    """A batch of variations moving through ``idle → generating → ready``.

    A ready batch ends either ``selected`` (one variation feeds the topic
    content) or ``discarded`` (the user asked for a fresh batch first).
    """

    def __init__(self, specs: Sequence[VariationSpec] = DEFAULT_VARIATION_SPECS):
        self.specs = tuple(specs)
        _require_specs(self.specs)
        self._state = BatchState.IDLE
        self._variations: List[Variation] = []
        self._selected: Optional[Variation] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def variations(self) -> List[Variation]:
        return list(self._variations)

    @property
    def selected(self) -> Optional[Variation]:
        return self._selected

    @property
    def is_finished(self) -> bool:
        return not _TRANSITIONS[self._state]

    def _transition(self, target: BatchState) -> None:
        with self._lock:
            if target not in _TRANSITIONS[self._state]:
                raise InvalidStateTransitionError(
                    f"Cannot move variation batch from '{self._state.value}' to '{target.value}'",
                    current=self._state.value,
                    target=target.value,
                )
            log_debug(LogEvent.VARIATIONS, "Batch state change", current=self._state.value, target=target.value)
            self._state = target

    def start(self) -> None:
        """Mark generation as started."""
        self._transition(BatchState.GENERATING)

    def complete(self, variations: Sequence[Variation]) -> None:
        """Attach generated variations and mark the batch ready."""
        with self._lock:
            self._transition(BatchState.READY)
            self._variations = list(variations)

    def complete_contents(self, contents: Sequence[str]) -> None:
        """Score raw contents with this batch's specs and mark it ready."""
        self.complete(build_variations(contents, self.specs))

    def generate(
        self,
        prompt: str,
        generators: Sequence[ContentGenerator],
        fallback: Optional[Callable[[str], str]] = None,
    ) -> List[Variation]:
        """Run :func:`generate_variations` through the batch lifecycle.

        If generation raises, the batch is discarded and the error propagates.
        """
        self.start()
        try:
            variations = generate_variations(prompt, generators, self.specs, fallback=fallback)
        except Exception:
            with self._lock:
                if self._state is BatchState.GENERATING:
                    self.discard()
            raise
        with self._lock:
            if self._state is BatchState.DISCARDED:
                return []
            self.complete(variations)
        return variations

    def ranking(self) -> VariationRanking:
        return rank_variations(self._variations)

    def get(self, key: str) -> Optional[Variation]:
        """Find a variation by id or label."""
        for variation in self._variations:
            if key in (variation.id, variation.label):
                return variation
        return None

    def select(self, key: str) -> Variation:
        """Select a variation by id or label.

        Raises:
            InvalidStateTransitionError: If the batch is not ready
            KeyError: If no variation matches ``key``
        """
        with self._lock:
            if self._state is not BatchState.READY:
                raise InvalidStateTransitionError(
                    f"Cannot select from a batch in state '{self._state.value}'",
                    current=self._state.value,
                    target=BatchState.SELECTED.value,
                )
            variation = self.get(key)
            if variation is None:
                raise KeyError(key)
            self._transition(BatchState.SELECTED)
            self._selected = variation
            return variation

    def discard(self) -> None:
        """Abandon the batch; its variations are dropped."""
        with self._lock:
            self._transition(BatchState.DISCARDED)
            self._variations = []


def next_batch(
    current: Optional[VariationBatch],
    specs: Sequence[VariationSpec] = DEFAULT_VARIATION_SPECS,
) -> VariationBatch:
    """Return a fresh batch, discarding ``current`` if it is still open."""
    if current is not None and current.state in (BatchState.GENERATING, BatchState.READY):
        current.discard()
    return VariationBatch(specs)
