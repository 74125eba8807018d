"""Trait, domain and dominant-trait aggregation."""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from ..value_objects.traits import DOMAINS, NEUTRAL_SCORE, TRAIT_MAPPINGS, domain_traits, iter_triads

logger = logging.getLogger(__name__)

TIE_EPSILON = 0.01
CUSP_THRESHOLD = 2.5


def aggregate(
    responses: Sequence[float],
    trait_mapping: Optional[Mapping[str, Sequence[int]]] = None,
    question_weights: Optional[Mapping[int, float]] = None,
) -> Dict[str, float]:
    """Average each trait's mapped responses into a 0-10 trait score.

    Indices are 1-based. An index past the end of ``responses`` reads as the
    neutral answer; a trait with no mapped questions scores 0.0.
    """
    mapping = trait_mapping if trait_mapping is not None else TRAIT_MAPPINGS
    scores = {}

    for trait, indices in mapping.items():
        if not indices:
            scores[trait] = 0.0
            continue

        values = [_response_at(responses, idx) for idx in indices]
        score = None

        if question_weights:
            weights = [float(question_weights.get(idx, 1.0)) for idx in indices]
            total = sum(weights)
            if total > 0:
                score = sum(v * w for v, w in zip(values, weights)) / total

        if score is None:
            score = sum(values) / len(values)

        scores[trait] = _clamp(score)

    return scores


def domain_scores(trait_scores: Mapping[str, float]) -> Dict[str, float]:
    """Mean of the nine trait scores in each domain."""
    result = {}
    for domain in DOMAINS:
        traits = domain_traits(domain)
        result[domain] = sum(trait_scores.get(t, 0.0) for t in traits) / len(traits)
    return result


def dominant_traits(trait_scores: Mapping[str, float]) -> Dict[str, str]:
    """Pick the dominant trait of every triad, keyed ``"<Domain>-<Triad>"``."""
    return {
        f"{domain}-{triad}": dominant_trait(trait_scores, traits)
        for domain, triad, traits in iter_triads()
    }


def dominant_trait(trait_scores: Mapping[str, float], triad_traits: List[str]) -> str:
    """Resolve the dominant trait of one ordered triad.

    Scores within 0.01 of the top score tie. A tie between the two outer
    traits, or a three-way tie, resolves to the middle trait; any other tie
    goes to the earlier trait in triad order.
    """
    scored = [(t, trait_scores.get(t, 0.0)) for t in triad_traits]
    top = max(score for _, score in scored)
    tied = [t for t, score in scored if top - score < TIE_EPSILON]

    if len(tied) == 3:
        return triad_traits[1]
    if len(tied) == 2 and set(tied) == {triad_traits[0], triad_traits[2]}:
        return triad_traits[1]
    return tied[0]


def analyze_cusps(
    trait_scores: Mapping[str, float],
    threshold: float = CUSP_THRESHOLD,
) -> List[dict]:
    """Find triads whose traits sit too close together to call confidently."""
    cusps = []
    for domain, triad, traits in iter_triads():
        ranked = sorted(
            ((t, trait_scores.get(t, 0.0)) for t in traits),
            key=lambda item: -item[1]
        )
        top_gap = ranked[0][1] - ranked[1][1]
        low_gap = ranked[1][1] - ranked[2][1]

        if top_gap < threshold or low_gap < threshold:
            cusps.append({
                "domain": domain,
                "triad": triad,
                "traits": [t for t, _ in ranked],
                "scores": {t: round(s, 2) for t, s in ranked},
                "gap": round(min(top_gap, low_gap), 2),
                "close_pair": [ranked[0][0], ranked[1][0]] if top_gap <= low_gap
                else [ranked[1][0], ranked[2][0]],
            })

    cusps.sort(key=lambda c: c["gap"])
    logger.debug(f"Found {len(cusps)} cusp triads below {threshold}")
    return cusps


def _response_at(responses: Sequence[float], index: int) -> float:
    if 1 <= index <= len(responses):
        return float(responses[index - 1])
    return NEUTRAL_SCORE


def _clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))
