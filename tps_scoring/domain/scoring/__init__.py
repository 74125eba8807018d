"""Trait aggregation, scoring overrides and their validation."""

from .aggregator import aggregate, analyze_cusps, dominant_trait, dominant_traits, domain_scores
from .overrides import (
    DEFAULT_OVERRIDES,
    FRAMEWORKS,
    DimensionWeights,
    ScoringOverrides,
    parse_overrides,
    resolve_overrides,
)
from .validation import (
    ScoringValidator,
    ValidationResult,
    WeightValidationOptions,
    auto_fix_weights,
    validate_complete_overrides,
    validate_effective_overrides,
    validate_framework_weights,
    validate_mbti_weights,
    validate_trait_mappings,
)
from .weights import calculate_confidence, rank, trait_value, weighted_score

__all__ = [
    "aggregate",
    "analyze_cusps",
    "dominant_trait",
    "dominant_traits",
    "domain_scores",
    "DEFAULT_OVERRIDES",
    "FRAMEWORKS",
    "DimensionWeights",
    "ScoringOverrides",
    "parse_overrides",
    "resolve_overrides",
    "ScoringValidator",
    "ValidationResult",
    "WeightValidationOptions",
    "auto_fix_weights",
    "validate_complete_overrides",
    "validate_effective_overrides",
    "validate_framework_weights",
    "validate_mbti_weights",
    "validate_trait_mappings",
    "calculate_confidence",
    "rank",
    "trait_value",
    "weighted_score",
]
