"""Holland (RIASEC) code."""

from typing import Mapping, Optional

from ..entities.results import HollandResult
from ..scoring.overrides import DEFAULT_OVERRIDES, HOLLAND_THRESHOLD, ScoringOverrides
from ..scoring.weights import calculate_confidence, rank, weighted_score

TYPE_NAMES = {
    "R": "Realistic",
    "I": "Investigative",
    "A": "Artistic",
    "S": "Social",
    "E": "Enterprising",
    "C": "Conventional",
}

CODE_LENGTH = 3


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> HollandResult:
    config = overrides.framework("holland") or DEFAULT_OVERRIDES.holland

    scores = {}
    thresholds = {}
    for letter in TYPE_NAMES:
        dimension = config.get(letter) or DEFAULT_OVERRIDES.holland[letter]
        scores[letter] = weighted_score(trait_scores, dimension)
        thresholds[letter] = dimension.threshold if dimension.threshold is not None else HOLLAND_THRESHOLD

    ranked = rank(scores)
    code = "".join(
        letter for letter, score in ranked if score > thresholds[letter]
    )[:CODE_LENGTH]
    if not code:
        code = ranked[0][0]

    return HollandResult(
        code=code,
        scores={letter: round(score, 2) for letter, score in scores.items()},
        primary_type=ranked[0][0],
        secondary_type=ranked[1][0],
        confidence=round(calculate_confidence(ranked[0][1] - ranked[1][1], 1.0), 1),
    )
