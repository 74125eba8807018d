"""Personality profile assembly."""

import logging
from concurrent.futures import Executor
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..classifiers import CLASSIFIERS
from ..entities.profile import EnneagramDetails, PersonalityProfile, ProfileMappings
from ..scoring.aggregator import aggregate, domain_scores, dominant_traits
from ..scoring.overrides import ScoringOverrides, resolve_overrides
from ..value_objects.responses import validate_responses

logger = logging.getLogger(__name__)

IMPACT_THRESHOLD = 0.5
SIGNIFICANT_IMPACT = 1.0
SENSITIVITY_THRESHOLDS = [round(4.0 + 0.2 * step, 1) for step in range(11)]


class PersonalityProfileService:
    """Validates responses, aggregates traits and runs every classifier."""

    def __init__(self, classifiers: Optional[Mapping[str, Callable]] = None):
        self.classifiers = dict(classifiers or CLASSIFIERS)

    def build_profile(
        self,
        responses: Any,
        overrides: Any = None,
        executor: Optional[Executor] = None,
    ) -> PersonalityProfile:
        """Score raw responses into a complete profile.

        Raises ``ResponseValidationError`` for malformed responses. Classifier
        failures never propagate; the neutral result is used instead and the
        failure is recorded in ``calculation_trace``.
        """
        values = validate_responses(responses)
        resolved = resolve_overrides(overrides)
        trait_scores = aggregate(values, resolved.trait_mappings)
        return self.profile_from_traits(trait_scores, resolved, executor)

    def profile_from_traits(
        self,
        trait_scores: Mapping[str, float],
        overrides: Optional[ScoringOverrides] = None,
        executor: Optional[Executor] = None,
    ) -> PersonalityProfile:
        resolved = resolve_overrides(overrides)
        traits = {name: round(score, 2) for name, score in trait_scores.items()}
        domains = domain_scores(trait_scores)
        trace: List[Dict[str, Any]] = []

        results = self._run_classifiers(trait_scores, domains, resolved, executor, trace)

        mbti = results["mbti"]
        enneagram = results["enneagram"]
        mappings = ProfileMappings(
            mbti=mbti.type,
            enneagram=enneagram.label,
            enneagram_details=EnneagramDetails(
                type=enneagram.type,
                wing=enneagram.wing,
                tritype=enneagram.tritype,
            ),
            big_five=results["bigfive"].dimensions,
            dnd_alignment=results["alignment"].alignment,
            socionics=results["socionics"].type,
            holland_code=results["holland"].code,
            personality_matches=[],
            mbti_detail=mbti,
            enneagram_detail=enneagram,
            holland_detail=results["holland"],
            alignment_detail=results["alignment"],
            attachment_style=results["attachment"],
            socionics_detail=results["socionics"],
            integral_detail=results["integral"],
        )

        return PersonalityProfile(
            dominant_traits=dominant_traits(trait_scores),
            trait_scores=traits,
            domain_scores={name: round(score, 2) for name, score in domains.items()},
            mappings=mappings,
            calculation_trace=trace,
        )

    def _run_classifiers(self, trait_scores, domains, overrides, executor, trace) -> Dict[str, Any]:
        if executor is None:
            outcomes = {}
            for name, classify in self.classifiers.items():
                try:
                    outcomes[name] = classify(trait_scores, domains, overrides)
                except Exception as e:
                    outcomes[name] = e
        else:
            futures = {
                name: executor.submit(classify, trait_scores, domains, overrides)
                for name, classify in self.classifiers.items()
            }
            outcomes = {}
            for name, future in futures.items():
                try:
                    outcomes[name] = future.result()
                except Exception as e:
                    outcomes[name] = e

        results = {}
        for name, outcome in outcomes.items():
            if isinstance(outcome, Exception):
                logger.error(f"Classifier {name} failed, using neutral result: {outcome}")
                trace.append({"framework": name, "status": "fallback", "error": str(outcome)})
                results[name] = CLASSIFIERS[name]({}, {}, resolve_overrides(None))
            else:
                trace.append({"framework": name, "status": "ok"})
                results[name] = outcome
        return results

    def analyze_question_impact(
        self,
        responses: Sequence[Any],
        question_index: int,
        overrides: Any = None,
    ) -> Dict[str, Any]:
        """Re-score every possible answer (1-10) to one question.

        ``question_index`` is 1-based. Reports the MBTI type for each answer
        and the traits that move by more than 0.5 from the current answer.
        """
        values = validate_responses(responses)
        resolved = resolve_overrides(overrides)
        if not 1 <= question_index <= len(values):
            raise ValueError(f"Question index {question_index} is out of range")

        baseline_traits = aggregate(values, resolved.trait_mappings)
        baseline_type = CLASSIFIERS["mbti"](baseline_traits, None, resolved).type

        alternatives = []
        for answer in range(1, 11):
            varied = list(values)
            varied[question_index - 1] = float(answer)
            traits = aggregate(varied, resolved.trait_mappings)
            mbti_type = CLASSIFIERS["mbti"](traits, None, resolved).type

            trait_changes = {}
            for trait, score in traits.items():
                delta = score - baseline_traits[trait]
                if abs(delta) > IMPACT_THRESHOLD:
                    trait_changes[trait] = {
                        "change": round(delta, 2),
                        "significant": abs(delta) > SIGNIFICANT_IMPACT,
                    }

            alternatives.append({
                "answer": answer,
                "mbti": mbti_type,
                "mbti_changed": mbti_type != baseline_type,
                "trait_changes": trait_changes,
            })

        affected = sorted(
            trait for trait, indices in (resolved.trait_mappings or {}).items()
            if question_index in indices
        )
        return {
            "question": question_index,
            "current_answer": values[question_index - 1],
            "baseline_mbti": baseline_type,
            "affected_traits": affected,
            "alternatives": alternatives,
        }

    def analyze_threshold_sensitivity(
        self,
        trait_scores: Mapping[str, float],
        overrides: Any = None,
        thresholds: Optional[Sequence[float]] = None,
    ) -> List[Dict[str, Any]]:
        """MBTI type under alternative uniform thresholds."""
        resolved = resolve_overrides(overrides)
        rows = []
        for threshold in thresholds or SENSITIVITY_THRESHOLDS:
            adjusted = resolve_overrides(
                {"mbti": {key: {"threshold": threshold} for key in resolved.framework("mbti")}},
                base=resolved,
            )
            result = CLASSIFIERS["mbti"](trait_scores, None, adjusted)
            rows.append({"threshold": threshold, "mbti": result.type})
        return rows

    @staticmethod
    def apply_trait_adjustments(
        trait_scores: Mapping[str, float],
        adjustments: Mapping[str, Any],
        limit: float = 2.0,
    ) -> Dict[str, float]:
        """Shift trait scores by bounded deltas; unknown traits are ignored."""
        adjusted = dict(trait_scores)
        for trait, delta in adjustments.items():
            if trait not in adjusted:
                continue
            try:
                delta = float(delta)
            except (TypeError, ValueError):
                continue
            delta = max(-limit, min(limit, delta))
            adjusted[trait] = max(0.0, min(10.0, adjusted[trait] + delta))
        return adjusted
