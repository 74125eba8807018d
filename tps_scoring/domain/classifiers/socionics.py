"""Socionics type projected from information element strengths."""

from typing import Mapping, Optional

from ..entities.results import SocionicsResult
from ..scoring.overrides import DEFAULT_OVERRIDES, ScoringOverrides
from ..scoring.weights import calculate_confidence, rank, weighted_score

ELEMENTS = ("Ne", "Se", "Te", "Fe", "Ni", "Si", "Ti", "Fi")

# label -> (code, leading element, creative element)
TYPES = {
    "INTp": ("ILI", "Ni", "Te"),
    "INTj": ("LII", "Ti", "Ne"),
    "ENTj": ("LIE", "Te", "Ni"),
    "ENTp": ("ILE", "Ne", "Ti"),
    "INFp": ("IEI", "Ni", "Fe"),
    "INFj": ("EII", "Fi", "Ne"),
    "ENFj": ("EIE", "Fe", "Ni"),
    "ENFp": ("IEE", "Ne", "Fi"),
    "ISTp": ("SLI", "Si", "Te"),
    "ISFp": ("SEI", "Si", "Fe"),
    "ESTj": ("LSE", "Te", "Si"),
    "ESFj": ("ESE", "Fe", "Si"),
    "ISTj": ("LSI", "Ti", "Se"),
    "ISFj": ("ESI", "Fi", "Se"),
    "ESTp": ("SLE", "Se", "Ti"),
    "ESFp": ("SEE", "Se", "Fi"),
}

LEADING_WEIGHT = 0.6
CREATIVE_WEIGHT = 0.4


def classify(
    trait_scores: Mapping[str, float],
    domain_scores: Optional[Mapping[str, float]] = None,
    overrides: ScoringOverrides = DEFAULT_OVERRIDES,
) -> SocionicsResult:
    config = overrides.framework("socionics") or DEFAULT_OVERRIDES.socionics
    elements = {
        element: weighted_score(trait_scores, config.get(element) or DEFAULT_OVERRIDES.socionics[element])
        for element in ELEMENTS
    }

    type_scores = {
        label: LEADING_WEIGHT * elements[leading] + CREATIVE_WEIGHT * elements[creative]
        for label, (_, leading, creative) in TYPES.items()
    }
    ranked = rank(type_scores)
    label = ranked[0][0]
    code, leading, creative = TYPES[label]

    return SocionicsResult(
        type=f"{label} ({code})",
        code=code,
        leading=leading,
        creative=creative,
        element_scores={element: round(score, 2) for element, score in elements.items()},
        confidence=round(calculate_confidence(ranked[0][1] - ranked[1][1], 0.5), 1),
    )
