"""
Unit Tests: Personality Profile Service

Covers:
- Full profile assembly and its camelCase document shape
- Classifier failure fallback recorded in the trace
- Executor fan-out
- Integral detail replacement
- Question impact and threshold sensitivity analysis
- Bounded trait adjustments
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from tps_scoring.domain.classifiers import CLASSIFIERS, integral
from tps_scoring.domain.entities import PersonalityProfile
from tps_scoring.domain.exceptions import ResponseValidationError
from tps_scoring.domain.services import PersonalityProfileService


@pytest.fixture
def service():
    return PersonalityProfileService()


def _broken(*args, **kwargs):
    raise RuntimeError("weights table corrupted")


# ============================================================================
# BUILD PROFILE
# ============================================================================

def test_build_profile(service, alternating_responses):
    profile = service.build_profile(alternating_responses)

    assert profile.mappings.mbti == "INTJ"
    assert profile.version == "2.0"
    assert len(profile.trait_scores) == 36
    assert len(profile.dominant_traits) == 12
    assert set(profile.domain_scores) == {"External", "Internal", "Interpersonal", "Processing"}
    assert all(step["status"] == "ok" for step in profile.calculation_trace)


def test_profile_document_shape(service, alternating_responses):
    document = service.build_profile(alternating_responses).to_document()

    assert {"dominantTraits", "traitScores", "domainScores", "mappings", "timestamp", "version"} <= set(document)
    mappings = document["mappings"]
    for key in ("mbti", "enneagram", "enneagramDetails", "bigFive", "dndAlignment", "socionics",
                "hollandCode", "personalityMatches", "mbtiDetail", "attachmentStyle", "integralDetail"):
        assert key in mappings
    assert mappings["mbtiDetail"]["framework"] == "mbti"
    assert mappings["enneagram"].startswith("Type ")

    restored = PersonalityProfile.from_document(document)
    assert restored.mappings.mbti == "INTJ"


def test_invalid_responses_raise(service):
    with pytest.raises(ResponseValidationError):
        service.build_profile([5] * 10)


def test_trait_mapping_override_changes_scores(service, alternating_responses):
    overrides = {"traitMappings": {"Communal Navigate": [2, 4]}}

    profile = service.build_profile(alternating_responses, overrides)

    assert profile.trait_scores["Communal Navigate"] == pytest.approx(8.0)


# ============================================================================
# CLASSIFIER FAILURES
# ============================================================================

def test_failing_classifier_falls_back_to_neutral(alternating_responses):
    classifiers = dict(CLASSIFIERS, holland=_broken)
    service = PersonalityProfileService(classifiers)

    profile = service.build_profile(alternating_responses)

    assert profile.mappings.holland_code == "A"
    assert profile.mappings.mbti == "INTJ"
    failed = [step for step in profile.calculation_trace if step["status"] == "fallback"]
    assert failed == [{"framework": "holland", "status": "fallback", "error": "weights table corrupted"}]


def test_executor_gives_same_result(alternating_responses):
    classifiers = dict(CLASSIFIERS, socionics=_broken)
    service = PersonalityProfileService(classifiers)

    sequential = service.build_profile(alternating_responses)
    with ThreadPoolExecutor(max_workers=4) as executor:
        parallel = service.build_profile(alternating_responses, executor=executor)

    assert parallel.mappings == sequential.mappings
    assert parallel.calculation_trace == sequential.calculation_trace


# ============================================================================
# INTEGRAL DETAIL
# ============================================================================

def test_with_integral_detail_returns_new_profile(service, alternating_responses):
    profile = service.build_profile(alternating_responses)
    detail = integral.build_integral_detail({"orange": 9.0, "green": 3.0})

    updated = profile.with_integral_detail(detail)

    assert updated.mappings.integral_detail.primary_level.color == "Orange"
    assert updated.mappings is not profile.mappings
    assert profile.mappings.integral_detail != detail
    assert updated.mappings.mbti == profile.mappings.mbti


# ============================================================================
# ANALYSIS
# ============================================================================

def test_question_impact(service, alternating_responses):
    impact = service.analyze_question_impact(alternating_responses, 3)

    assert impact["current_answer"] == 3.0
    assert impact["baseline_mbti"] == "INTJ"
    assert impact["affected_traits"] == ["Communal Navigate", "Independent"]
    assert [row["answer"] for row in impact["alternatives"]] == list(range(1, 11))

    ten = impact["alternatives"][-1]
    # one of six answers moves from 3 to 10
    assert ten["trait_changes"]["Communal Navigate"]["change"] == pytest.approx(7 / 6, abs=0.01)
    assert ten["trait_changes"]["Communal Navigate"]["significant"] is True

    same = impact["alternatives"][2]
    assert same["trait_changes"] == {}
    assert same["mbti_changed"] is False


def test_question_impact_rejects_bad_index(service, alternating_responses):
    with pytest.raises(ValueError):
        service.analyze_question_impact(alternating_responses, 0)


def test_threshold_sensitivity(service, neutral_traits):
    rows = service.analyze_threshold_sensitivity(neutral_traits)

    assert [row["threshold"] for row in rows][0] == 4.0
    assert rows[-1]["threshold"] == 6.0
    assert rows[0]["mbti"] == "ENTJ"
    assert rows[5]["mbti"] == "ISFP"
    assert rows[-1]["mbti"] == "ISFP"


def test_apply_trait_adjustments_is_bounded():
    adjusted = PersonalityProfileService.apply_trait_adjustments(
        {"Stoic": 9.0, "Direct": 5.0},
        {"Stoic": 5, "Direct": -3.5, "Unknown": 1, "Social": "x"},
    )

    assert adjusted == {"Stoic": 10.0, "Direct": 3.0}
