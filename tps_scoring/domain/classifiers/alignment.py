"""D&D style alignment on an ethical and a moral axis."""

from typing import Dict, Mapping, Optional, Tuple

from ..entities.results import AlignmentAxis, AlignmentResult
from ..scoring.overrides import ALIGNMENT_MARGIN, DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import calculate_confidence, weighted_score

ETHICAL_AXIS = (("lawful", "Lawful"), ("neutral_ethical", None), ("chaotic", "Chaotic"))
MORAL_AXIS = (("good", "Good"), ("neutral_moral", None), ("evil", "Evil"))


def _resolve_axis(scores: Dict[str, float], thresholds: Dict[str, float], axis) -> Tuple[str, float]:
    """Pick a pole only when it beats both other positions by more than its margin."""
    neutral_key = axis[1][0]
    for key, label in (axis[0], axis[2]):
        others = [scores[k] for k, _ in axis if k != key]
        margin = scores[key] - max(others)
        if margin > thresholds[key]:
            return label, margin

    closest = max(scores[axis[0][0]], scores[axis[2][0]])
    return "Neutral", scores[neutral_key] - closest


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> AlignmentResult:
    config = overrides.framework("alignment") or DEFAULT_OVERRIDES.alignment

    scores: Dict[str, float] = {}
    thresholds: Dict[str, float] = {}
    for key, _ in ETHICAL_AXIS + MORAL_AXIS:
        dimension = config.get(key) or DEFAULT_OVERRIDES.alignment[key]
        scores[key] = weighted_score(trait_scores, dimension)
        thresholds[key] = dimension.threshold if dimension.threshold is not None else ALIGNMENT_MARGIN

    ethical, ethical_margin = _resolve_axis(scores, thresholds, ETHICAL_AXIS)
    moral, moral_margin = _resolve_axis(scores, thresholds, MORAL_AXIS)

    if ethical == "Neutral" and moral == "Neutral":
        alignment = "True Neutral"
    else:
        alignment = f"{ethical} {moral}"

    confidence = (
        calculate_confidence(ethical_margin, ALIGNMENT_MARGIN)
        + calculate_confidence(moral_margin, ALIGNMENT_MARGIN)
    ) / 2

    return AlignmentResult(
        alignment=alignment,
        ethical=AlignmentAxis(
            position=ethical,
            scores={key: round(scores[key], 2) for key, _ in ETHICAL_AXIS},
            margin=round(ethical_margin, 2),
        ),
        moral=AlignmentAxis(
            position=moral,
            scores={key: round(scores[key], 2) for key, _ in MORAL_AXIS},
            margin=round(moral_margin, 2),
        ),
        confidence=round(confidence, 1),
    )
