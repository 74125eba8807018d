"""Helpers shared by the typology classifiers."""

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..value_objects.traits import NEUTRAL_SCORE
from .overrides import DimensionWeights


def trait_value(trait_scores: Mapping[str, Any], trait: str) -> float:
    """Trait score, reading missing or non-finite values as neutral."""
    value = trait_scores.get(trait) if trait_scores else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return NEUTRAL_SCORE
    if math.isnan(value) or math.isinf(value):
        return NEUTRAL_SCORE
    return float(value)


def weighted_score(trait_scores: Mapping[str, Any], dimension: Optional[DimensionWeights]) -> float:
    """Weighted trait sum normalised by total weight, then scaled and clamped."""
    if dimension is None or not dimension.traits:
        return NEUTRAL_SCORE

    total_weight = 0.0
    total = 0.0
    for trait, weight in dimension.traits.items():
        if weight is None or weight <= 0:
            continue
        total += trait_value(trait_scores, trait) * weight
        total_weight += weight

    if total_weight <= 0:
        return NEUTRAL_SCORE

    score = total / total_weight
    if dimension.scaling is not None and dimension.scaling > 0:
        score *= dimension.scaling
    return max(0.0, min(10.0, score))


def framework_scores(trait_scores: Mapping[str, Any], dimensions: Mapping[str, DimensionWeights]) -> Dict[str, float]:
    return {key: weighted_score(trait_scores, dim) for key, dim in dimensions.items()}


def rank(scores: Mapping[str, float]) -> List[Tuple[str, float]]:
    """Sort by score descending, then label ascending."""
    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


def calculate_confidence(distance: float, threshold: float = 1.5) -> float:
    """Map a distance from a decision boundary onto a 50-100 confidence."""
    if threshold <= 0:
        return 100.0
    return min(100.0, max(50.0, abs(distance) / threshold * 50 + 50))


def mean(values) -> float:
    values = list(values)
    return sum(values) / len(values) if values else NEUTRAL_SCORE
