"""Integral development level.

Levels can be projected from trait scores (part of every profile) or scored
from the dedicated questionnaire, optionally refined by a Socratic stage.
Both paths end in ``build_integral_detail``.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..entities.results import IntegralDetail, IntegralLevelInfo, RealityTriadMapping
from ..scoring.overrides import DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import calculate_confidence, mean, rank, trait_value, weighted_score
from ..value_objects.integral_questions import INTEGRAL_QUESTIONS, LEVEL_KEYS, PRIMARY_WEIGHT, get_question

SECONDARY_CLOSENESS = 1.5

INTEGRAL_LEVELS: Dict[str, Dict[str, Any]] = {
    "red": {
        "number": 2,
        "color": "Red",
        "name": "Power/Control",
        "cognitive_stage": "Preoperational to early Concrete",
        "worldview": "Egocentric, immediate gratification",
        "thinking_pattern": "Impulsive, power-based, here-and-now",
        "growth_edge": ["Develop impulse control", "Learn rule-following", "Consider others' needs"],
        "typical_concerns": ["Survival", "Power", "Respect", "Freedom from constraint"],
        "complexity": 2,
    },
    "amber": {
        "number": 3,
        "color": "Amber",
        "name": "Order/Belong",
        "cognitive_stage": "Concrete Operational",
        "worldview": "Ethnocentric, rule-based order",
        "thinking_pattern": "Rule-based, hierarchical, conformist",
        "growth_edge": ["Question rigid rules when appropriate", "Develop critical thinking", "Consider multiple perspectives"],
        "typical_concerns": ["Order", "Tradition", "Belonging", "Moral righteousness"],
        "complexity": 3,
    },
    "orange": {
        "number": 4,
        "color": "Orange",
        "name": "Achieve",
        "cognitive_stage": "Early Formal Operational",
        "worldview": "World-centric, rational, achievement-focused",
        "thinking_pattern": "Strategic, analytical, goal-oriented",
        "growth_edge": ["Integrate emotional intelligence", "Consider community impact", "Develop systems thinking"],
        "typical_concerns": ["Success", "Achievement", "Rational progress", "Individual excellence"],
        "complexity": 5,
    },
    "green": {
        "number": 5,
        "color": "Green",
        "name": "Understand",
        "cognitive_stage": "Formal Operational",
        "worldview": "World-centric, pluralistic, community-focused",
        "thinking_pattern": "Relativistic, consensus-seeking, inclusive",
        "growth_edge": ["Integrate healthy hierarchy", "Develop discernment skills", "Move beyond group-think"],
        "typical_concerns": ["Equality", "Community", "Relationships", "Cultural sensitivity"],
        "complexity": 6,
    },
    "teal": {
        "number": 6,
        "color": "Teal",
        "name": "Harmonize",
        "cognitive_stage": "Post-Formal/Integral",
        "worldview": "Integral, systematic, holistic",
        "thinking_pattern": "Integrative, systematic, paradox-comfortable",
        "growth_edge": ["Deepen spiritual understanding", "Expand cosmic perspective", "Integrate body-mind-spirit"],
        "typical_concerns": ["Integration", "Systems health", "Global sustainability"],
        "complexity": 8,
    },
    "turquoise": {
        "number": 7,
        "color": "Turquoise",
        "name": "Sanctify",
        "cognitive_stage": "Meta-Systematic/Transpersonal",
        "worldview": "Kosmo-centric, holistic, transpersonal",
        "thinking_pattern": "Holistic, transpersonal, cosmic",
        "growth_edge": ["Deepen cosmic consciousness", "Integrate higher spiritual states", "Embody universal compassion"],
        "typical_concerns": ["Cosmic harmony", "Universal consciousness", "Ecological wholeness"],
        "complexity": 10,
    },
}

COMPLEXITY_MODIFIERS = {
    "Varied": 0.20,
    "Intuitive": 0.20,
    "Self-Aware": 0.15,
    "Analytical": 0.15,
    "Universal": 0.15,
    "Ambivalent": 0.15,
}

REALITY_TRIAD_WEIGHTS = {
    "physical": {"Physical": 0.4, "Structured": 0.2, "Lawful": 0.2, "Self-Indulgent": 0.1, "Direct": 0.1},
    "social": {"Social": 0.4, "Diplomatic": 0.2, "Analytical": 0.15, "Communal Navigate": 0.15, "Responsive": 0.1},
    "universal": {"Universal": 0.4, "Intuitive": 0.2, "Self-Aware": 0.15, "Varied": 0.15, "Intrinsic": 0.1},
}

# Level pairs that stand in for the reality triad when no trait scores exist
REALITY_TRIAD_LEVELS = {
    "physical": ("red", "amber"),
    "social": ("orange", "green"),
    "universal": ("teal", "turquoise"),
}


def score_questionnaire(answers: Mapping[Any, Any]) -> Tuple[Dict[str, float], int]:
    """Accumulate raw level scores from ``{question_id: option_index}``.

    Unknown questions and option indices are skipped. Returns the raw scores
    and the number of answers that counted.
    """
    scores = {key: 0.0 for key in LEVEL_KEYS}
    answered = 0

    for question_id, option_index in answers.items():
        try:
            question = get_question(int(question_id))
            option_index = int(option_index)
        except (TypeError, ValueError):
            continue
        if question is None or not 0 <= option_index < len(question.options):
            continue

        for level, value in question.options[option_index].scores.items():
            scores[level] += value
        answered += 1

    return scores, answered


def normalize_level_scores(raw_scores: Mapping[str, float], answered: int) -> Dict[str, float]:
    """Scale raw questionnaire sums onto 0-10."""
    if answered <= 0:
        return {key: 0.0 for key in LEVEL_KEYS}
    ceiling = PRIMARY_WEIGHT * answered
    return {
        key: round(min(10.0, 10.0 * raw_scores.get(key, 0.0) / ceiling), 2)
        for key in LEVEL_KEYS
    }


def validate_level_scores(scores: Mapping[str, Any]) -> Tuple[Dict[str, float], List[str]]:
    """Return cleaned level scores plus a list of issues found."""
    issues = []
    cleaned = {}

    for key in scores:
        if key not in LEVEL_KEYS:
            issues.append(f"Unknown integral level: {key}")

    for key in LEVEL_KEYS:
        value = scores.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            issues.append(f"Invalid score for {key}: {value!r}")
            value = 0.0
        elif value < 0:
            issues.append(f"Negative score for {key}: {value}")
            value = 0.0
        cleaned[key] = float(value)

    if not any(cleaned.values()):
        issues.append("All integral level scores are zero")

    return cleaned, issues


def explain_level_scores(level_scores: Mapping[str, float]) -> str:
    """One-line summary of the three strongest levels."""
    top = rank({key: level_scores.get(key, 0.0) for key in LEVEL_KEYS})[:3]
    parts = [f"{INTEGRAL_LEVELS[key]['color']} ({score:.1f})" for key, score in top]
    return "Strongest levels: " + ", ".join(parts)


def _level_info(key: str, score: float) -> IntegralLevelInfo:
    level = INTEGRAL_LEVELS[key]
    return IntegralLevelInfo(
        color=level["color"],
        number=level["number"],
        name=level["name"],
        cognitive_stage=level["cognitive_stage"],
        worldview=level["worldview"],
        thinking_pattern=level["thinking_pattern"],
        score=round(score, 2),
    )


def cognitive_complexity(primary: str, trait_scores: Optional[Mapping[str, float]] = None) -> float:
    base = INTEGRAL_LEVELS[primary]["complexity"]
    modifiers = sum(
        trait_value(trait_scores or {}, trait) * weight
        for trait, weight in COMPLEXITY_MODIFIERS.items()
    )
    return round(max(0.0, min(10.0, base + (modifiers - 5) * 0.5)), 2)


def reality_triad(
    level_scores: Mapping[str, float],
    trait_scores: Optional[Mapping[str, float]] = None,
) -> RealityTriadMapping:
    if trait_scores:
        values = {
            axis: sum(trait_value(trait_scores, t) * w for t, w in weights.items())
            for axis, weights in REALITY_TRIAD_WEIGHTS.items()
        }
    else:
        values = {
            axis: mean(level_scores.get(key, 0.0) for key in keys)
            for axis, keys in REALITY_TRIAD_LEVELS.items()
        }
    return RealityTriadMapping(**{axis: round(value, 2) for axis, value in values.items()})


def developmental_edge(primary: str, secondary: Optional[str]) -> str:
    primary_level = INTEGRAL_LEVELS[primary]
    if secondary is None:
        return f"Focus on integrating {primary_level['growth_edge'][0]}"

    if LEVEL_KEYS.index(secondary) > LEVEL_KEYS.index(primary):
        secondary_level = INTEGRAL_LEVELS[secondary]
        return f"Developing toward {secondary_level['name']}: {secondary_level['growth_edge'][0]}"
    return f"Strengthening current level while preparing for next: {primary_level['growth_edge'][0]}"


def build_integral_detail(
    level_scores: Mapping[str, float],
    trait_scores: Optional[Mapping[str, float]] = None,
    closeness: float = SECONDARY_CLOSENESS,
) -> IntegralDetail:
    """Turn 0-10 level scores into an ``IntegralDetail``."""
    scores = {key: float(level_scores.get(key, 0.0)) for key in LEVEL_KEYS}
    ranked = rank(scores)
    (primary, primary_score), (runner_up, runner_up_score) = ranked[0], ranked[1]

    gap = primary_score - runner_up_score
    secondary = runner_up if gap <= closeness else None

    return IntegralDetail(
        primary_level=_level_info(primary, primary_score),
        secondary_level=_level_info(secondary, runner_up_score) if secondary else None,
        confidence=round(calculate_confidence(gap, 0.5), 1),
        cognitive_complexity=cognitive_complexity(primary, trait_scores),
        reality_triad_mapping=reality_triad(scores, trait_scores),
        developmental_edge=developmental_edge(primary, secondary),
        level_scores={key: round(value, 2) for key, value in scores.items()},
    )


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> IntegralDetail:
    config = overrides.framework("integral") or DEFAULT_OVERRIDES.integral
    level_scores = {
        key: weighted_score(trait_scores, config.get(key) or DEFAULT_OVERRIDES.integral[key])
        for key in LEVEL_KEYS
    }
    return build_integral_detail(level_scores, trait_scores)


__all__ = [
    "INTEGRAL_LEVELS",
    "INTEGRAL_QUESTIONS",
    "LEVEL_KEYS",
    "build_integral_detail",
    "classify",
    "cognitive_complexity",
    "developmental_edge",
    "explain_level_scores",
    "normalize_level_scores",
    "reality_triad",
    "score_questionnaire",
    "validate_level_scores",
]
