"""Scoring overrides document and the built-in default weights."""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.traits import TRAIT_MAPPINGS

FRAMEWORKS = (
    "mbti",
    "bigfive",
    "enneagram",
    "alignment",
    "holland",
    "socionics",
    "integral",
    "attachment",
)


class DimensionWeights(BaseModel):
    """Trait weights for one framework dimension."""

    model_config = ConfigDict(extra="ignore")

    traits: Optional[Dict[str, float]] = None
    threshold: Optional[float] = None
    scaling: Optional[float] = None


FrameworkWeights = Dict[str, DimensionWeights]


class ScoringOverrides(BaseModel):
    """Admin-editable scoring configuration.

    Every section is optional; ``resolve_overrides`` fills the gaps from
    ``DEFAULT_OVERRIDES``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    trait_mappings: Optional[Dict[str, List[Any]]] = Field(default=None, alias="traitMappings")
    mbti: Optional[FrameworkWeights] = None
    bigfive: Optional[FrameworkWeights] = None
    enneagram: Optional[FrameworkWeights] = None
    alignment: Optional[FrameworkWeights] = None
    holland: Optional[FrameworkWeights] = None
    socionics: Optional[FrameworkWeights] = None
    integral: Optional[FrameworkWeights] = None
    attachment: Optional[FrameworkWeights] = None

    def framework(self, name: str) -> FrameworkWeights:
        return getattr(self, name) or {}

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _dimension(traits: Dict[str, float], threshold: float = None) -> DimensionWeights:
    return DimensionWeights(traits=traits, threshold=threshold)


def _split(primary: List[str], secondary: List[str], p: float = 0.7, s: float = 0.3) -> Dict[str, float]:
    weights = {t: p / len(primary) for t in primary}
    for t in secondary:
        weights[t] = weights.get(t, 0.0) + s / len(secondary)
    return weights


def _tiered(tiers: List[List[str]], tier_weights: List[float]) -> Dict[str, float]:
    raw = {}
    for traits, weight in zip(tiers, tier_weights):
        for t in traits:
            raw[t] = raw.get(t, 0.0) + weight
    total = sum(raw.values())
    return {t: w / total for t, w in raw.items()}


def _equal(traits: List[str]) -> Dict[str, float]:
    return {t: 1.0 / len(traits) for t in traits}


MBTI_THRESHOLD = 5.0
HOLLAND_THRESHOLD = 6.0
ALIGNMENT_MARGIN = 1.5

_ENNEAGRAM_TIERS = {
    "1": (["Self-Mastery", "Lawful", "Structured"], ["Analytical", "Stoic", "Direct"], ["Realistic", "Physical"]),
    "2": (["Communal Navigate", "Diplomatic", "Responsive"], ["Social", "Passive", "Extrinsic"], ["Optimistic", "Dynamic"]),
    "3": (["Extrinsic", "Assertive", "Pragmatic"], ["Dynamic", "Optimistic", "Social"], ["Varied", "Responsive"]),
    "4": (["Self-Aware", "Intuitive", "Turbulent"], ["Self-Principled", "Universal", "Independent"], ["Pessimistic", "Dynamic"]),
    "5": (["Analytical", "Independent Navigate", "Intrinsic"], ["Stoic", "Physical", "Independent"], ["Universal", "Self-Mastery"]),
    "6": (["Ambivalent", "Pessimistic", "Lawful"], ["Responsive Regulation", "Mixed Navigate", "Social"], ["Structured", "Analytical"]),
    "7": (["Dynamic", "Optimistic", "Self-Indulgent"], ["Varied", "Independent", "Intuitive"], ["Extrinsic", "Social"]),
    "8": (["Assertive", "Direct", "Independent"], ["Physical", "Self-Principled", "Stoic"], ["Pragmatic", "Dynamic"]),
    "9": (["Passive", "Ambivalent", "Optimistic"], ["Mixed Navigate", "Responsive", "Social"], ["Modular", "Diplomatic"]),
}

_HOLLAND_TRAITS = {
    "R": (["Physical", "Pragmatic", "Independent Navigate", "Stoic"], ["Structured", "Analytical", "Static", "Self-Mastery"]),
    "I": (["Analytical", "Intrinsic", "Independent", "Universal"], ["Self-Aware", "Intuitive", "Stoic", "Self-Mastery"]),
    "A": (["Intuitive", "Self-Aware", "Self-Principled", "Dynamic"], ["Turbulent", "Universal", "Independent", "Varied"]),
    "S": (["Communal Navigate", "Social", "Diplomatic", "Responsive"], ["Optimistic", "Dynamic", "Passive", "Mixed Communication"]),
    "E": (["Assertive", "Extrinsic", "Direct", "Optimistic"], ["Dynamic", "Pragmatic", "Social", "Varied"]),
    "C": (["Structured", "Lawful", "Passive", "Realistic"], ["Analytical", "Static", "Physical", "Stoic"]),
}

_ALIGNMENT_TRAITS = {
    "lawful": (["Lawful", "Structured", "Self-Mastery"], ["Diplomatic", "Analytical", "Stoic"]),
    "neutral_ethical": (["Pragmatic", "Ambivalent", "Responsive", "Varied"], []),
    "chaotic": (["Self-Principled", "Independent", "Dynamic"], ["Intuitive", "Varied", "Self-Indulgent"]),
    "good": (["Communal Navigate", "Diplomatic", "Optimistic"], ["Responsive", "Social", "Passive"]),
    "neutral_moral": (["Realistic", "Mixed Navigate", "Pragmatic", "Stoic"], []),
    "evil": (["Self-Indulgent", "Assertive", "Independent Navigate"], ["Pessimistic", "Direct", "Physical"]),
}

_ATTACHMENT_TRAITS = {
    "secure": (["Mixed Navigate", "Responsive", "Diplomatic", "Optimistic"], ["Self-Aware", "Realistic", "Modular"]),
    "anxious-preoccupied": (["Communal Navigate", "Turbulent", "Passive", "Social"], ["Pessimistic", "Extrinsic", "Responsive"]),
    "dismissive-avoidant": (["Independent Navigate", "Stoic", "Self-Mastery", "Physical"], ["Assertive", "Analytical", "Static"]),
    "fearful-avoidant": (["Independent Navigate", "Turbulent", "Pessimistic", "Ambivalent"], ["Self-Aware", "Passive", "Universal"]),
}

_SOCIONICS_TRAITS = {
    "Ne": (["Intuitive", "Dynamic", "Varied"], ["Optimistic", "Extrinsic", "Social"]),
    "Se": (["Physical", "Assertive", "Dynamic"], ["Direct", "Pragmatic", "Extrinsic"]),
    "Te": (["Analytical", "Pragmatic", "Direct"], ["Assertive", "Extrinsic", "Structured"]),
    "Fe": (["Social", "Diplomatic", "Responsive"], ["Communal Navigate", "Extrinsic", "Dynamic"]),
    "Ni": (["Intuitive", "Universal", "Self-Aware"], ["Self-Mastery", "Intrinsic", "Static"]),
    "Si": (["Physical", "Structured", "Static"], ["Pessimistic", "Intrinsic", "Self-Aware"]),
    "Ti": (["Analytical", "Independent", "Stoic"], ["Intrinsic", "Self-Mastery", "Universal"]),
    "Fi": (["Self-Aware", "Self-Principled", "Intrinsic"], ["Independent Navigate", "Intuitive", "Turbulent"]),
}

_INTEGRAL_TRAITS = {
    "red": (["Self-Indulgent", "Assertive", "Physical", "Dynamic"], ["Direct", "Independent", "Turbulent"]),
    "amber": (["Lawful", "Structured", "Passive", "Pessimistic"], ["Communal Navigate", "Stoic", "Responsive"]),
    "orange": (["Analytical", "Extrinsic", "Pragmatic", "Realistic"], ["Assertive", "Self-Mastery", "Direct", "Independent"]),
    "green": (["Social", "Diplomatic", "Responsive", "Mixed Navigate"], ["Communal Navigate", "Mixed Communication", "Optimistic"]),
    "teal": (["Universal", "Self-Aware", "Varied", "Intrinsic"], ["Self-Principled", "Intuitive", "Ambivalent"]),
    "turquoise": (["Universal", "Self-Mastery", "Intuitive", "Stoic"], ["Self-Aware", "Intrinsic", "Independent Navigate"]),
}


def _alignment_dimension(strong: List[str], moderate: List[str]) -> DimensionWeights:
    if moderate:
        traits = _tiered([strong, moderate], [1.5, 1.0])
    else:
        traits = _equal(strong)
    return _dimension(traits, ALIGNMENT_MARGIN)


DEFAULT_OVERRIDES = ScoringOverrides(
    trait_mappings={trait: list(indices) for trait, indices in TRAIT_MAPPINGS.items()},
    mbti={
        "EI": _dimension(_equal(["Communal Navigate", "Dynamic"]), MBTI_THRESHOLD),
        "SN": _dimension(_equal(["Intuitive", "Universal"]), MBTI_THRESHOLD),
        "TF": _dimension(_equal(["Stoic", "Direct"]), MBTI_THRESHOLD),
        "JP": _dimension(_equal(["Structured", "Lawful"]), MBTI_THRESHOLD),
    },
    bigfive={
        "Openness": _dimension(_equal(["Intuitive", "Universal", "Self-Aware"])),
        "Conscientiousness": _dimension(_equal(["Structured", "Self-Mastery", "Lawful"])),
        "Extraversion": _dimension(_equal(["Assertive", "Dynamic", "Communal Navigate"])),
        "Agreeableness": _dimension(_equal(["Diplomatic", "Passive", "Responsive"])),
        "Neuroticism": _dimension(_equal(["Turbulent", "Pessimistic", "Self-Indulgent"])),
    },
    enneagram={
        type_id: _dimension(_tiered(list(tiers), [3.0, 2.0, 1.0]))
        for type_id, tiers in _ENNEAGRAM_TIERS.items()
    },
    alignment={
        position: _alignment_dimension(strong, moderate)
        for position, (strong, moderate) in _ALIGNMENT_TRAITS.items()
    },
    holland={
        code: _dimension(_split(primary, secondary), HOLLAND_THRESHOLD)
        for code, (primary, secondary) in _HOLLAND_TRAITS.items()
    },
    socionics={
        element: _dimension(_split(primary, secondary))
        for element, (primary, secondary) in _SOCIONICS_TRAITS.items()
    },
    integral={
        level: _dimension(_tiered([strong, moderate], [1.5, 1.0]))
        for level, (strong, moderate) in _INTEGRAL_TRAITS.items()
    },
    attachment={
        style: _dimension(_split(primary, secondary))
        for style, (primary, secondary) in _ATTACHMENT_TRAITS.items()
    },
)


def parse_overrides(document: Union[None, ScoringOverrides, Mapping[str, Any]]) -> Optional[ScoringOverrides]:
    """Accept a stored JSON document, a model or ``None``."""
    if document is None or isinstance(document, ScoringOverrides):
        return document
    return ScoringOverrides.model_validate(dict(document))


def resolve_overrides(
    partial: Union[None, ScoringOverrides, Mapping[str, Any]] = None,
    base: ScoringOverrides = DEFAULT_OVERRIDES,
) -> ScoringOverrides:
    """Merge a partial overrides document over ``base`` dimension by dimension."""
    partial = parse_overrides(partial)
    if partial is None:
        return base

    merged: Dict[str, Any] = {}

    mappings = dict(base.trait_mappings or {})
    mappings.update(partial.trait_mappings or {})
    merged["trait_mappings"] = mappings or None

    for name in FRAMEWORKS:
        dims = {key: dim for key, dim in base.framework(name).items()}
        for key, override in partial.framework(name).items():
            current = dims.get(key)
            if current is None:
                dims[key] = override
                continue
            dims[key] = DimensionWeights(
                traits=override.traits if override.traits is not None else current.traits,
                threshold=override.threshold if override.threshold is not None else current.threshold,
                scaling=override.scaling if override.scaling is not None else current.scaling,
            )
        merged[name] = dims or None

    return ScoringOverrides(**merged)
