"""Cost estimation and content quality scoring for EbookAI book generation.

This package prices generation jobs against a provider pricing table, scores
generated content for readability and structure, and ranks A/B variations
of the same topic. Helpers for provider fallback, vendor job polling and
per-book RAG sessions sit around that core.
"""

# Version of the package
try:
    from importlib.metadata import PackageNotFoundError, version as _version

    __version__ = _version("ebookai-toolkit")
except PackageNotFoundError:
    # Running from a source checkout that was never installed
    __version__ = "0.0.0"

# Import main components for easier access
from .errors import (
    ConfigFileNotFoundError,
    ConfigurationError,
    EbookAIError,
    GenerationError,
    InvalidConfigFormatError,
    InvalidStateTransitionError,
    JobCancelledError,
    JobError,
    JobFailedError,
    JobTimeoutError,
    SessionError,
    SessionExistsError,
    SessionNotFoundError,
)
from .estimator import (
    CostBreakdown,
    CostMeta,
    JobEstimate,
    cost_per_thousand_words,
    estimate_book_cost,
    estimate_cost,
    estimate_job,
)
from .generation import ContentGenerator, GenerationResult, GenerationSource, generate_content
from .polling import BackoffPolicy, CancellationToken, JobHandle, JobRunner, JobState, JobStatus, run_job, wait_for_job
from .pricing import ImagePricing, ModelPricing, PricingTable, ProviderPricing, get_pricing_table
from .scoring import ContentMetrics, Suggestion, SuggestionPriority, score_content, suggest_improvements
from .sessions import RagSession, RagSessionManager
from .variations import (
    BatchState,
    Variation,
    VariationBatch,
    VariationRanking,
    VariationSpec,
    VariationStyle,
    build_variations,
    generate_variations,
    rank_variations,
)

# Define public API
__all__ = [
    # Pricing
    "PricingTable",
    "ProviderPricing",
    "ModelPricing",
    "ImagePricing",
    "get_pricing_table",
    # Cost estimation
    "CostBreakdown",
    "CostMeta",
    "JobEstimate",
    "estimate_cost",
    "estimate_book_cost",
    "estimate_job",
    "cost_per_thousand_words",
    # Scoring
    "ContentMetrics",
    "Suggestion",
    "SuggestionPriority",
    "score_content",
    "suggest_improvements",
    # Variations
    "Variation",
    "VariationSpec",
    "VariationStyle",
    "VariationRanking",
    "VariationBatch",
    "BatchState",
    "build_variations",
    "generate_variations",
    "rank_variations",
    # Generation
    "ContentGenerator",
    "GenerationResult",
    "GenerationSource",
    "generate_content",
    # Polling
    "BackoffPolicy",
    "CancellationToken",
    "JobHandle",
    "JobRunner",
    "JobState",
    "JobStatus",
    "run_job",
    "wait_for_job",
    # Sessions
    "RagSession",
    "RagSessionManager",
    # Errors
    "EbookAIError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidConfigFormatError",
    "GenerationError",
    "JobError",
    "JobFailedError",
    "JobTimeoutError",
    "JobCancelledError",
    "SessionError",
    "SessionExistsError",
    "SessionNotFoundError",
    "InvalidStateTransitionError",
]
