"""Enneagram type, wing and tritype from trait scores."""

from typing import Dict, List, Mapping, Optional

from ..entities.results import EnneagramResult, InstinctualVariant
from ..scoring.overrides import DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import calculate_confidence, mean, rank, trait_value, weighted_score

TYPE_NAMES = {
    1: "The Reformer",
    2: "The Helper",
    3: "The Achiever",
    4: "The Individualist",
    5: "The Investigator",
    6: "The Loyalist",
    7: "The Enthusiast",
    8: "The Challenger",
    9: "The Peacemaker",
}

CENTERS = {
    "heart": [2, 3, 4],
    "head": [5, 6, 7],
    "gut": [8, 9, 1],
}

INSTINCTUAL_VARIANTS: Dict[int, Dict[str, List[str]]] = {
    1: {"self-preservation": ["Structured", "Physical", "Pessimistic"], "social": ["Lawful", "Social", "Diplomatic"], "sexual": ["Self-Mastery", "Direct", "Assertive"]},
    2: {"self-preservation": ["Passive", "Social", "Structured"], "social": ["Communal Navigate", "Diplomatic", "Extrinsic"], "sexual": ["Assertive", "Dynamic", "Direct"]},
    3: {"self-preservation": ["Pragmatic", "Self-Mastery", "Structured"], "social": ["Social", "Extrinsic", "Dynamic"], "sexual": ["Assertive", "Dynamic", "Direct"]},
    4: {"self-preservation": ["Self-Aware", "Pessimistic", "Physical"], "social": ["Social", "Turbulent", "Responsive"], "sexual": ["Dynamic", "Assertive", "Self-Principled"]},
    5: {"self-preservation": ["Physical", "Structured", "Pessimistic"], "social": ["Social", "Analytical", "Universal"], "sexual": ["Assertive", "Self-Principled", "Direct"]},
    6: {"self-preservation": ["Structured", "Pessimistic", "Physical"], "social": ["Social", "Lawful", "Responsive Regulation"], "sexual": ["Assertive", "Direct", "Dynamic"]},
    7: {"self-preservation": ["Self-Indulgent", "Physical", "Pragmatic"], "social": ["Social", "Optimistic", "Dynamic"], "sexual": ["Dynamic", "Assertive", "Self-Principled"]},
    8: {"self-preservation": ["Physical", "Pragmatic", "Structured"], "social": ["Social", "Assertive", "Direct"], "sexual": ["Assertive", "Direct", "Dynamic"]},
    9: {"self-preservation": ["Passive", "Physical", "Static"], "social": ["Social", "Diplomatic", "Mixed Navigate"], "sexual": ["Responsive", "Dynamic", "Optimistic"]},
}

HEALTH_LEVELS: Dict[int, Dict[str, List[str]]] = {
    1: {"healthy": ["Self-Mastery", "Diplomatic", "Responsive"], "average": ["Lawful", "Structured", "Stoic"], "unhealthy": ["Pessimistic", "Direct", "Turbulent"]},
    2: {"healthy": ["Diplomatic", "Responsive", "Optimistic"], "average": ["Communal Navigate", "Social", "Passive"], "unhealthy": ["Passive", "Pessimistic", "Turbulent"]},
    3: {"healthy": ["Optimistic", "Dynamic", "Responsive"], "average": ["Assertive", "Pragmatic", "Extrinsic"], "unhealthy": ["Self-Indulgent", "Pessimistic", "Turbulent"]},
    4: {"healthy": ["Self-Aware", "Intuitive", "Universal"], "average": ["Self-Principled", "Independent", "Turbulent"], "unhealthy": ["Pessimistic", "Self-Indulgent", "Passive"]},
    5: {"healthy": ["Analytical", "Universal", "Self-Mastery"], "average": ["Independent Navigate", "Stoic", "Intrinsic"], "unhealthy": ["Pessimistic", "Passive", "Static"]},
    6: {"healthy": ["Lawful", "Social", "Responsive Regulation"], "average": ["Ambivalent", "Pessimistic", "Structured"], "unhealthy": ["Pessimistic", "Passive", "Turbulent"]},
    7: {"healthy": ["Optimistic", "Dynamic", "Varied"], "average": ["Self-Indulgent", "Independent", "Intuitive"], "unhealthy": ["Self-Indulgent", "Turbulent", "Pessimistic"]},
    8: {"healthy": ["Assertive", "Self-Principled", "Stoic"], "average": ["Direct", "Independent", "Physical"], "unhealthy": ["Turbulent", "Pessimistic", "Self-Indulgent"]},
    9: {"healthy": ["Optimistic", "Diplomatic", "Responsive"], "average": ["Passive", "Ambivalent", "Mixed Navigate"], "unhealthy": ["Passive", "Pessimistic", "Static"]},
}


def _group_means(trait_scores: Mapping[str, float], groups: Mapping[str, List[str]]) -> Dict[str, float]:
    return {name: mean(trait_value(trait_scores, t) for t in traits) for name, traits in groups.items()}


def _center_of(type_id: int) -> str:
    return next(center for center, types in CENTERS.items() if type_id in types)


def _top_in(types: List[int], scores: Mapping[int, float]) -> int:
    # Lowest type number wins exact ties
    return min(types, key=lambda type_id: (-scores[type_id], type_id))


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> EnneagramResult:
    config = overrides.framework("enneagram") or DEFAULT_OVERRIDES.enneagram
    scores = {
        type_id: weighted_score(trait_scores, config.get(str(type_id)) or DEFAULT_OVERRIDES.enneagram[str(type_id)])
        for type_id in TYPE_NAMES
    }

    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    primary = ranked[0][0]

    left = 9 if primary == 1 else primary - 1
    right = 1 if primary == 9 else primary + 1
    wing = _top_in([left, right], scores)
    wing_influence = scores[wing] / scores[primary] if scores[primary] else 0.0

    primary_center = _center_of(primary)
    tritype = str(primary) + "".join(
        str(_top_in(types, scores))
        for center, types in CENTERS.items()
        if center != primary_center
    )

    variants = rank(_group_means(trait_scores, INSTINCTUAL_VARIANTS[primary]))
    health = rank(_group_means(trait_scores, HEALTH_LEVELS[primary]))

    separation = ranked[0][1] - ranked[1][1]

    return EnneagramResult(
        type=primary,
        wing=wing,
        tritype=tritype,
        scores={str(t): round(s, 2) for t, s in scores.items()},
        instinctual_variant=InstinctualVariant(primary=variants[0][0], secondary=variants[1][0]),
        health_level=health[0][0],
        wing_influence=round(wing_influence, 3),
        confidence=round(calculate_confidence(separation, 0.5), 1),
    )
