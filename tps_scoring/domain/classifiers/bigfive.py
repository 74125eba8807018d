"""Big Five dimensions in [0, 1]."""

from typing import Mapping, Optional

from ..entities.results import BigFiveResult
from ..scoring.overrides import DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import weighted_score

DIMENSIONS = ("Openness", "Conscientiousness", "Extraversion", "Agreeableness", "Neuroticism")


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> BigFiveResult:
    config = overrides.framework("bigfive") or DEFAULT_OVERRIDES.bigfive
    dimensions = {
        name: round(weighted_score(trait_scores, config.get(name) or DEFAULT_OVERRIDES.bigfive[name]) / 10, 3)
        for name in DIMENSIONS
    }
    return BigFiveResult(dimensions=dimensions)
