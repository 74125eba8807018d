"""MBTI type from trait scores."""

from typing import Dict, List, Mapping, Optional

from ..entities.results import CognitiveFunction, MBTIDimension, MBTIResult
from ..scoring.overrides import DEFAULT_OVERRIDES, MBTI_THRESHOLD, ScoringOverrides
from ..scoring.weights import calculate_confidence, weighted_score

# dimension -> (letter above threshold, letter below threshold)
DIMENSION_LETTERS = {
    "EI": ("E", "I"),
    "SN": ("N", "S"),
    "TF": ("T", "F"),
    "JP": ("J", "P"),
}

POSITIONS = ("dominant", "auxiliary", "tertiary", "inferior")


def resolve_letter(dimension: str, score: float, threshold: float) -> str:
    """Letter for one dimension; a score exactly on the threshold takes the lower letter (I, S, F, P)."""
    high, low = DIMENSION_LETTERS[dimension]
    return high if score > threshold else low


def function_stack(mbti_type: str) -> List[str]:
    """Dominant, auxiliary, tertiary and inferior functions of a four-letter type."""
    extravert = mbti_type[0] == "E"
    perceiving = mbti_type[1]
    judging = mbti_type[2]
    judging_first_outward = mbti_type[3] == "J"

    # The J/P letter names the function shown to the outer world
    if judging_first_outward:
        outer, inner = judging, perceiving
    else:
        outer, inner = perceiving, judging

    if extravert:
        dominant, auxiliary = f"{outer}e", f"{inner}i"
    else:
        dominant, auxiliary = f"{inner}i", f"{outer}e"

    tertiary = f"{_opposite(auxiliary[0])}{dominant[1]}"
    inferior = f"{_opposite(dominant[0])}{auxiliary[1]}"
    return [dominant, auxiliary, tertiary, inferior]


def _opposite(function: str) -> str:
    return {"T": "F", "F": "T", "S": "N", "N": "S"}[function]


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> MBTIResult:
    config = overrides.framework("mbti") or DEFAULT_OVERRIDES.framework("mbti")
    dimensions: Dict[str, MBTIDimension] = {}

    for key in DIMENSION_LETTERS:
        dimension = config.get(key) or DEFAULT_OVERRIDES.mbti[key]
        threshold = dimension.threshold if dimension.threshold is not None else MBTI_THRESHOLD
        score = weighted_score(trait_scores, dimension)
        distance = score - threshold

        dimensions[key] = MBTIDimension(
            letter=resolve_letter(key, score, threshold),
            score=round(score, 2),
            threshold=threshold,
            strength=round(abs(distance), 2),
            confidence=round(calculate_confidence(distance, 1.0), 1),
        )

    mbti_type = "".join(dimensions[key].letter for key in DIMENSION_LETTERS)

    functions = overrides.framework("socionics") or DEFAULT_OVERRIDES.framework("socionics")
    stack = [
        CognitiveFunction(
            function=name,
            position=position,
            strength=round(weighted_score(trait_scores, functions.get(name)), 2),
        )
        for name, position in zip(function_stack(mbti_type), POSITIONS)
    ]

    confidence = sum(d.confidence for d in dimensions.values()) / len(dimensions)

    return MBTIResult(
        type=mbti_type,
        dimensions=dimensions,
        cognitive_functions=stack,
        confidence=round(confidence, 1),
    )
