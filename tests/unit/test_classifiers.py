"""
Unit Tests: Typology Classifiers

Covers:
- MBTI letters, threshold ties and the cognitive function stack
- Enneagram wing and tritype
- Holland code and its fallback
- Alignment axes
- Socionics, Big Five and attachment projections
- Overrides threaded through a classifier call
- Every classifier total over extreme and random trait maps
"""

import random

import pytest

from tps_scoring.domain.classifiers import (
    CLASSIFIERS,
    alignment,
    attachment,
    bigfive,
    enneagram,
    holland,
    mbti,
    socionics,
)
from tps_scoring.domain.scoring import aggregate, domain_scores, resolve_overrides
from tps_scoring.domain.value_objects import TRAITS


@pytest.fixture
def alternating_traits(alternating_responses):
    return aggregate(alternating_responses)


def _with(base, value, traits):
    scores = dict(base)
    scores.update({t: value for t in traits})
    return scores


# ============================================================================
# MBTI
# ============================================================================

def test_mbti_alternating_answers_are_intj(alternating_traits):
    result = mbti.classify(alternating_traits, domain_scores(alternating_traits))

    assert result.framework == "mbti"
    assert result.type == "INTJ"
    assert result.dimensions["EI"].score == pytest.approx(3.0)
    assert result.dimensions["SN"].score == pytest.approx(8.0)
    assert all(d.score != d.threshold for d in result.dimensions.values())


def test_mbti_threshold_tie_takes_lower_letter(neutral_traits):
    result = mbti.classify(neutral_traits)

    assert result.type == "ISFP"
    assert all(d.strength == 0 for d in result.dimensions.values())
    assert result.confidence == pytest.approx(50.0)


@pytest.mark.parametrize("dimension,score,expected", [
    ("EI", 5.01, "E"),
    ("EI", 4.99, "I"),
    ("EI", 5.0, "I"),
    ("SN", 5.0, "S"),
    ("TF", 5.0, "F"),
    ("JP", 5.0, "P"),
    ("JP", 4.0, "P"),
])
def test_resolve_letter(dimension, score, expected):
    assert mbti.resolve_letter(dimension, score, 5.0) == expected


@pytest.mark.parametrize("mbti_type,stack", [
    ("INTJ", ["Ni", "Te", "Fi", "Se"]),
    ("ENFP", ["Ne", "Fi", "Te", "Si"]),
    ("ISTJ", ["Si", "Te", "Fi", "Ne"]),
    ("ESFP", ["Se", "Fi", "Te", "Ni"]),
])
def test_function_stack(mbti_type, stack):
    assert mbti.function_stack(mbti_type) == stack


def test_mbti_cognitive_functions_follow_type(alternating_traits):
    result = mbti.classify(alternating_traits)

    assert [f.function for f in result.cognitive_functions] == ["Ni", "Te", "Fi", "Se"]
    assert [f.position for f in result.cognitive_functions] == list(mbti.POSITIONS)


def test_mbti_threshold_override(alternating_traits):
    overrides = resolve_overrides({"mbti": {"EI": {"threshold": 2.0}}})

    result = mbti.classify(alternating_traits, None, overrides)

    assert result.type == "ENTJ"
    assert result.dimensions["EI"].threshold == 2.0


def test_mbti_trait_weight_override(alternating_traits):
    overrides = resolve_overrides({"mbti": {"EI": {"traits": {"Mixed Navigate": 1.0}}}})

    assert mbti.classify(alternating_traits, None, overrides).type == "ENTJ"


def test_missing_traits_read_as_neutral():
    assert mbti.classify({}).type == "ISFP"


# ============================================================================
# ENNEAGRAM
# ============================================================================

def test_enneagram_neutral_resolves_ties_by_type_order(neutral_traits):
    result = enneagram.classify(neutral_traits)

    assert result.type == 1
    assert result.label == "Type 1"
    # equal neighbours 9 and 2: the lower type number wins
    assert result.wing == 2
    assert result.tritype == "125"
    assert result.confidence == pytest.approx(50.0)


def test_enneagram_strong_type_eight(neutral_traits):
    traits = _with(neutral_traits, 9.5, ["Assertive", "Direct", "Independent"])

    result = enneagram.classify(traits)

    assert result.type == 8
    assert result.wing in (7, 9)
    assert result.tritype[0] == "8"
    assert len(result.tritype) == 3
    assert result.instinctual_variant.primary != result.instinctual_variant.secondary


# ============================================================================
# HOLLAND
# ============================================================================

def test_holland_falls_back_to_top_type(neutral_traits):
    result = holland.classify(neutral_traits)

    assert result.code == "A"
    assert result.primary_type == "A"
    assert result.secondary_type == "C"


def test_holland_code_is_capped_at_three_letters():
    result = holland.classify({t: 9.0 for t in TRAITS})

    assert result.code == "ACE"


def test_holland_investigative(neutral_traits):
    traits = _with(neutral_traits, 9.0, ["Analytical", "Intrinsic", "Independent", "Universal"])

    result = holland.classify(traits)

    assert result.code[0] == "I"
    assert result.primary_type == "I"


# ============================================================================
# ALIGNMENT
# ============================================================================

GOOD_TRAITS = ["Communal Navigate", "Diplomatic", "Optimistic", "Responsive", "Social", "Passive"]


def test_alignment_neutral_is_true_neutral(neutral_traits):
    result = alignment.classify(neutral_traits)

    assert result.alignment == "True Neutral"
    assert result.ethical.position == "Neutral"
    assert result.moral.position == "Neutral"


def test_alignment_neutral_good(neutral_traits):
    result = alignment.classify(_with(neutral_traits, 10.0, GOOD_TRAITS))

    assert result.alignment == "Neutral Good"
    assert result.moral.margin > 1.5


def test_alignment_lawful_good(neutral_traits):
    lawful = ["Lawful", "Structured", "Self-Mastery", "Analytical", "Stoic"]

    result = alignment.classify(_with(neutral_traits, 10.0, GOOD_TRAITS + lawful))

    assert result.alignment == "Lawful Good"


# ============================================================================
# OTHER FRAMEWORKS
# ============================================================================

def test_socionics_label_format(neutral_traits):
    result = socionics.classify(neutral_traits)

    assert result.type == "ENFj (EIE)"
    assert result.code == "EIE"
    assert set(result.element_scores) == set(socionics.ELEMENTS)


def test_socionics_leading_element(neutral_traits):
    traits = _with(neutral_traits, 9.5, ["Intuitive", "Universal", "Self-Aware"])
    traits = _with(traits, 8.0, ["Analytical", "Pragmatic", "Direct"])

    result = socionics.classify(traits)

    assert result.leading == "Ni"
    assert result.type == "INTp (ILI)"


def test_bigfive_dimensions_are_fractions(neutral_traits):
    result = bigfive.classify(neutral_traits)

    assert set(result.dimensions) == set(bigfive.DIMENSIONS)
    assert all(v == pytest.approx(0.5) for v in result.dimensions.values())


def test_attachment_secure(neutral_traits):
    traits = _with(neutral_traits, 9.0, ["Mixed Navigate", "Responsive", "Diplomatic", "Optimistic"])

    result = attachment.classify(traits)

    assert result.style == "secure"
    assert result.description == attachment.STYLES["secure"]["description"]
    assert result.characteristics


def test_every_classifier_accepts_the_same_inputs(alternating_traits):
    domains = domain_scores(alternating_traits)
    overrides = resolve_overrides(None)

    frameworks = {name: classify(alternating_traits, domains, overrides).framework
                  for name, classify in CLASSIFIERS.items()}

    assert frameworks == {name: name for name in CLASSIFIERS}


def test_enneagram_wing_tie_between_nine_and_one(neutral_traits):
    traits = _with(neutral_traits, 9.0, ["Passive"])

    result = enneagram.classify(traits, None, resolve_overrides({
        "enneagram": {"9": {"traits": {"Passive": 1.0}}, "8": {"traits": {"Stoic": 1.0}},
                      "1": {"traits": {"Direct": 1.0}}},
    }))

    assert result.type == 9
    assert result.wing == 1


# ============================================================================
# TOTALITY
# ============================================================================

def _random_traits(seed):
    rng = random.Random(seed)
    return {trait: round(rng.uniform(0.0, 10.0), 2) for trait in TRAITS}


@pytest.mark.parametrize("trait_scores", [
    {trait: 0.0 for trait in TRAITS},
    {trait: 10.0 for trait in TRAITS},
    {},
    *[_random_traits(seed) for seed in range(25)],
])
def test_every_classifier_is_total(trait_scores):
    domains = domain_scores(trait_scores)
    overrides = resolve_overrides(None)

    for name, classify in CLASSIFIERS.items():
        result = classify(trait_scores, domains, overrides)

        assert result.framework == name
        assert 50.0 <= getattr(result, "confidence", 50.0) <= 100.0

    mbti_type = mbti.classify(trait_scores, domains, overrides).type
    assert all(letter in pair for letter, pair in zip(mbti_type, ("EI", "NS", "TF", "JP")))
    assert 1 <= enneagram.classify(trait_scores, domains, overrides).type <= 9
