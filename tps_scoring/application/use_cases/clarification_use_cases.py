"""LLM-backed clarification stages: integral Socratic refinement and trait cusps."""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ...domain.classifiers.integral import (
    INTEGRAL_LEVELS,
    LEVEL_KEYS,
    build_integral_detail,
    explain_level_scores,
    normalize_level_scores,
    score_questionnaire,
    validate_level_scores,
)
from ...domain.entities import PersonalityProfile
from ...domain.exceptions import TPSException
from ...domain.scoring import analyze_cusps, rank
from ...domain.services import PersonalityProfileService
from ..dto import ConsistencyCheck, IntegralMetadata, IntegralPreliminaryDTO, IntegralResultDTO
from ..interfaces import ILLMService

logger = logging.getLogger(__name__)

ADJUSTMENT_LIMIT = 2.0
MAX_QUESTIONS = 5

FALLBACK_INTEGRAL_QUESTIONS = [
    "Think of a recent disagreement. How did you decide whose view should win?",
    "When a rule conflicts with what feels right, what do you usually do?",
    "How do you decide whether an idea you hear is true?",
    "What changes when you consider a problem from the perspective of a whole community?",
    "Describe a moment when two opposing views both seemed right to you. How did you handle it?",
]

STATUS_ERROR = "error"
STATUS_WARNING = "warning"
STATUS_INCONSISTENT = "inconsistent"
STATUS_VALIDATED = "validated"


def parse_json_reply(reply: str) -> Dict[str, Any]:
    """Extract the first JSON object from a model reply, or ``{}``."""
    if not reply:
        return {}
    match = re.search(r"\{.*\}", reply, re.DOTALL)
    if not match:
        return {}
    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def parse_numbered_questions(reply: str, limit: int = MAX_QUESTIONS) -> List[str]:
    questions = []
    for line in (reply or "").splitlines():
        match = re.match(r"^\s*(?:\d+[.)]|[-*])\s*(.+?)\s*$", line)
        if match and match.group(1).endswith("?"):
            questions.append(match.group(1))
    return questions[:limit]


def clamp_adjustments(raw: Mapping[str, Any], allowed: Sequence[str], limit: float = ADJUSTMENT_LIMIT) -> Dict[str, float]:
    """Keep known keys with numeric deltas, bounded to [-limit, +limit]."""
    adjustments = {}
    for key, value in raw.items():
        if key not in allowed or isinstance(value, bool):
            continue
        try:
            delta = float(value)
        except (TypeError, ValueError):
            continue
        adjustments[key] = max(-limit, min(limit, delta))
    return adjustments


def _extract_adjustments(parsed: Mapping[str, Any]) -> Mapping[str, Any]:
    nested = parsed.get("adjustments")
    if isinstance(nested, dict):
        return nested
    return parsed


def validation_status(metadata: IntegralMetadata) -> str:
    """Display status of a finished integral assessment."""
    if metadata.error_fallback:
        return STATUS_ERROR
    if metadata.fallback_used:
        return STATUS_WARNING
    if not metadata.consistency_check.preliminary_matches_socratic:
        return STATUS_INCONSISTENT
    return STATUS_VALIDATED


class IntegralAssessmentUseCase:
    """Questionnaire scoring followed by an optional Socratic refinement."""

    def __init__(self, llm_service: ILLMService):
        self.llm_service = llm_service

    def score_preliminary(self, answers: Mapping[Any, Any]) -> IntegralPreliminaryDTO:
        raw, answered = score_questionnaire(answers)
        normalized = normalize_level_scores(raw, answered)
        cleaned, issues = validate_level_scores(normalized)
        return IntegralPreliminaryDTO(
            level_scores=cleaned,
            answered=answered,
            detail=build_integral_detail(cleaned),
            issues=issues,
        )

    async def generate_questions(self, preliminary: IntegralPreliminaryDTO) -> List[str]:
        top = rank(preliminary.level_scores)[:3]
        levels = "\n".join(
            f"- {INTEGRAL_LEVELS[key]['color']} ({INTEGRAL_LEVELS[key]['name']}): {score:.1f}/10"
            for key, score in top
        )
        prompt = (
            "A person completed an integral development questionnaire. "
            f"Their strongest levels are:\n{levels}\n\n"
            f"Write up to {MAX_QUESTIONS} open Socratic questions that would distinguish "
            "between these levels. Return them as a numbered list, one question per line."
        )

        try:
            reply = await self.llm_service.complete(prompt, purpose="integral_questions")
        except TPSException as e:
            logger.warning(f"Socratic question generation failed, using fixed questions: {e}")
            return list(FALLBACK_INTEGRAL_QUESTIONS)

        questions = parse_numbered_questions(reply)
        return questions or list(FALLBACK_INTEGRAL_QUESTIONS)

    async def finalize(
        self,
        preliminary: IntegralPreliminaryDTO,
        questions: Sequence[str],
        answers: Sequence[str],
    ) -> IntegralResultDTO:
        """Apply the model's bounded level deltas to the preliminary scores."""
        metadata = IntegralMetadata(
            preliminary_top=preliminary.detail.primary_level.color.lower(),
            issues=list(preliminary.issues),
        )
        qa = "\n\n".join(f"Q: {q}\nA: {a}" for q, a in zip(questions, answers))
        prompt = (
            "You are refining an integral development assessment.\n"
            f"{explain_level_scores(preliminary.level_scores)}\n"
            f"Preliminary scores (0-10): {json.dumps(preliminary.level_scores)}\n\n"
            f"Socratic dialogue:\n{qa}\n\n"
            "Reply with JSON only: {\"adjustments\": {<level>: <delta between -2 and 2>}, "
            "\"reasoning\": \"...\"} using the levels " + ", ".join(LEVEL_KEYS) + "."
        )

        adjustments: Dict[str, float] = {}
        try:
            reply = await self.llm_service.complete(prompt, purpose="integral_analysis")
            parsed = parse_json_reply(reply)
            adjustments = clamp_adjustments(_extract_adjustments(parsed), LEVEL_KEYS)
            if not adjustments:
                metadata.fallback_used = True
                logger.warning("Socratic analysis returned no usable adjustments")
            reasoning = parsed.get("reasoning")
            if isinstance(reasoning, str):
                metadata.socratic_analysis = reasoning
        except TPSException as e:
            metadata.error_fallback = True
            logger.error(f"Socratic analysis failed, keeping preliminary scores: {e}")

        final_scores = {
            key: max(0.0, min(10.0, preliminary.level_scores.get(key, 0.0) + adjustments.get(key, 0.0)))
            for key in LEVEL_KEYS
        }
        detail = build_integral_detail(final_scores)

        metadata.adjustments = adjustments
        metadata.final_top = detail.primary_level.color.lower()
        metadata.consistency_check = ConsistencyCheck(
            preliminary_matches_socratic=metadata.preliminary_top == metadata.final_top
        )

        return IntegralResultDTO(detail=detail, metadata=metadata, status=validation_status(metadata))


class TraitClarificationUseCase:
    """Refine cusp triads through a short dialogue and re-derive the profile."""

    def __init__(self, llm_service: ILLMService, profile_service: PersonalityProfileService):
        self.llm_service = llm_service
        self.profile_service = profile_service

    async def generate_questions(self, trait_scores: Mapping[str, float]) -> List[Dict[str, Any]]:
        cusps = analyze_cusps(trait_scores)[:MAX_QUESTIONS]
        if not cusps:
            return []

        questions = []
        for cusp in cusps:
            first, second = cusp["close_pair"]
            question = f"Which describes you better: being {first} or being {second}? Give an example."
            prompt = (
                f"A personality assessment could not separate the traits '{first}' and '{second}' "
                f"in the {cusp['triad']} triad ({cusp['domain']} domain). "
                "Write one open question that would help the person tell which fits better. "
                "Reply with the question only."
            )
            try:
                reply = (await self.llm_service.complete(prompt, purpose="trait_questions")).strip()
                if reply:
                    question = reply.splitlines()[0]
            except TPSException as e:
                logger.warning(f"Trait question generation failed for {cusp['triad']}: {e}")
            questions.append({"triad": cusp["triad"], "traits": [first, second], "question": question})

        return questions

    async def refine(
        self,
        trait_scores: Mapping[str, float],
        questions: Sequence[Mapping[str, Any]],
        answers: Sequence[str],
        overrides: Any = None,
    ) -> Tuple[PersonalityProfile, Dict[str, float]]:
        """Return the re-derived profile and the trait deltas that were applied."""
        involved = sorted({t for q in questions for t in q.get("traits", [])})
        qa = "\n\n".join(f"Q: {q['question']}\nA: {a}" for q, a in zip(questions, answers))
        prompt = (
            "Adjust personality trait scores based on these clarification answers.\n"
            f"Traits in question: {', '.join(involved)}\n\n{qa}\n\n"
            "Reply with JSON only: {\"adjustments\": {<trait>: <delta between -2 and 2>}}."
        )

        adjustments: Dict[str, float] = {}
        try:
            reply = await self.llm_service.complete(prompt, purpose="trait_analysis")
            adjustments = clamp_adjustments(_extract_adjustments(parse_json_reply(reply)), involved)
        except TPSException as e:
            logger.error(f"Trait clarification failed, keeping original scores: {e}")

        adjusted = self.profile_service.apply_trait_adjustments(trait_scores, adjustments, ADJUSTMENT_LIMIT)
        profile = self.profile_service.profile_from_traits(adjusted, overrides)
        return profile, adjustments
