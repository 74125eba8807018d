"""Domain value objects."""

from .traits import (
    DOMAINS,
    MAX_RESPONSE,
    MIN_RESPONSE,
    NEUTRAL_SCORE,
    QUESTION_COUNT,
    TRAIT_MAPPINGS,
    TRAITS,
    domain_traits,
    iter_triads,
)
from .responses import validate_responses

__all__ = [
    "DOMAINS",
    "MAX_RESPONSE",
    "MIN_RESPONSE",
    "NEUTRAL_SCORE",
    "QUESTION_COUNT",
    "TRAIT_MAPPINGS",
    "TRAITS",
    "domain_traits",
    "iter_triads",
    "validate_responses",
]
