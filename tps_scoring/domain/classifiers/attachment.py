"""Attachment style."""

from typing import Mapping, Optional

from ..entities.results import AttachmentResult
from ..scoring.overrides import DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import calculate_confidence, rank, weighted_score

STYLES = {
    "secure": {
        "description": "Comfortable with intimacy and independence, trusts others and self",
        "characteristics": [
            "Balances closeness and autonomy",
            "Communicates needs directly",
            "Recovers from conflict without lasting distress",
        ],
    },
    "anxious-preoccupied": {
        "description": "Seeks closeness and reassurance, sensitive to signs of rejection",
        "characteristics": [
            "Worries about the availability of partners",
            "Seeks frequent reassurance",
            "Strong emotional reactions to distance",
        ],
    },
    "dismissive-avoidant": {
        "description": "Values independence highly and keeps emotional distance",
        "characteristics": [
            "Prefers self-reliance",
            "Uncomfortable with emotional dependence",
            "Minimises the importance of relationships",
        ],
    },
    "fearful-avoidant": {
        "description": "Wants closeness but fears being hurt, mixed approach and withdrawal",
        "characteristics": [
            "Ambivalent about intimacy",
            "Difficulty trusting others",
            "Alternates between seeking and avoiding closeness",
        ],
    },
}


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> AttachmentResult:
    config = overrides.framework("attachment") or DEFAULT_OVERRIDES.attachment
    scores = {
        style: weighted_score(trait_scores, config.get(style) or DEFAULT_OVERRIDES.attachment[style])
        for style in STYLES
    }
    ranked = rank(scores)
    style, score = ranked[0]

    return AttachmentResult(
        style=style,
        score=round(score, 2),
        scores={name: round(value, 2) for name, value in scores.items()},
        confidence=round(calculate_confidence(score - ranked[1][1], 1.0), 1),
        description=STYLES[style]["description"],
        characteristics=list(STYLES[style]["characteristics"]),
    )
