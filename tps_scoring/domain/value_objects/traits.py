"""Canonical TPS trait catalogue: 36 traits, 12 triads, 4 domains."""

from typing import Dict, List, Tuple

QUESTION_COUNT = 108
MIN_RESPONSE = 1.0
MAX_RESPONSE = 10.0
NEUTRAL_SCORE = 5.0

# Trait -> 1-based question indices
TRAIT_MAPPINGS: Dict[str, List[int]] = {
    # External domain
    "Structured": [1, 4, 7, 10, 13, 16],
    "Ambivalent": [2, 5, 8, 11, 14, 17],
    "Independent": [3, 6, 9, 12, 15, 18],
    "Passive": [19, 22, 25, 28, 31, 34],
    "Diplomatic": [20, 23, 26, 29, 32, 35],
    "Assertive": [21, 24, 27, 30, 33, 36],
    "Lawful": [37, 40, 43, 46, 49, 52],
    "Pragmatic": [38, 41, 44, 47, 50, 53],
    "Self-Principled": [39, 42, 45, 48, 51, 54],

    # Internal domain
    "Self-Indulgent": [55, 58, 61, 64, 67, 70],
    "Self-Aware": [56, 59, 62, 65, 68, 71],
    "Self-Mastery": [57, 60, 63, 66, 69, 72],
    "Intrinsic": [73, 76, 79, 82, 85, 88],
    "Responsive": [74, 77, 80, 83, 86, 89],
    "Extrinsic": [75, 78, 81, 84, 87, 90],
    "Pessimistic": [91, 94, 97, 100, 103, 106],
    "Realistic": [92, 95, 98, 101, 104, 107],
    "Optimistic": [93, 96, 99, 102, 105, 108],

    # Interpersonal domain
    "Independent Navigate": [1, 7, 13, 19, 25, 31],
    "Mixed Navigate": [2, 8, 14, 20, 26, 32],
    "Communal Navigate": [3, 9, 15, 21, 27, 33],
    "Direct": [4, 10, 16, 22, 28, 34],
    "Mixed Communication": [5, 11, 17, 23, 29, 35],
    "Passive Communication": [6, 12, 18, 24, 30, 36],
    "Dynamic": [37, 43, 49, 55, 61, 67],
    "Modular": [38, 44, 50, 56, 62, 68],
    "Static": [39, 45, 51, 57, 63, 69],

    # Processing domain
    "Analytical": [40, 46, 52, 58, 64, 70],
    "Varied": [41, 47, 53, 59, 65, 71],
    "Intuitive": [42, 48, 54, 60, 66, 72],
    "Turbulent": [73, 79, 85, 91, 97, 103],
    "Responsive Regulation": [74, 80, 86, 92, 98, 104],
    "Stoic": [75, 81, 87, 93, 99, 105],
    "Physical": [76, 82, 88, 94, 100, 106],
    "Social": [77, 83, 89, 95, 101, 107],
    "Universal": [78, 84, 90, 96, 102, 108],
}

# Domain -> ordered (triad, [trait, trait, trait])
DOMAINS: Dict[str, List[Tuple[str, List[str]]]] = {
    "External": [
        ("Control", ["Structured", "Ambivalent", "Independent"]),
        ("Will", ["Passive", "Diplomatic", "Assertive"]),
        ("Design", ["Lawful", "Pragmatic", "Self-Principled"]),
    ],
    "Internal": [
        ("Self-Focus", ["Self-Indulgent", "Self-Aware", "Self-Mastery"]),
        ("Motivation", ["Intrinsic", "Responsive", "Extrinsic"]),
        ("Behavior", ["Pessimistic", "Realistic", "Optimistic"]),
    ],
    "Interpersonal": [
        ("Navigate", ["Independent Navigate", "Mixed Navigate", "Communal Navigate"]),
        ("Communication", ["Direct", "Mixed Communication", "Passive Communication"]),
        ("Stimulation", ["Dynamic", "Modular", "Static"]),
    ],
    "Processing": [
        ("Cognitive", ["Analytical", "Varied", "Intuitive"]),
        ("Regulation", ["Turbulent", "Responsive Regulation", "Stoic"]),
        ("Reality", ["Physical", "Social", "Universal"]),
    ],
}

TRAITS: List[str] = list(TRAIT_MAPPINGS.keys())


def domain_traits(domain: str) -> List[str]:
    """All nine traits of a domain, in triad order."""
    return [trait for _, traits in DOMAINS[domain] for trait in traits]


def iter_triads():
    """Yield ``(domain, triad, traits)`` for all twelve triads."""
    for domain, triads in DOMAINS.items():
        for triad, traits in triads:
            yield domain, triad, traits
