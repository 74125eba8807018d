"""Validation of admin-supplied scoring overrides."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .overrides import (
    DEFAULT_OVERRIDES,
    FRAMEWORKS,
    DimensionWeights,
    ScoringOverrides,
    parse_overrides,
    resolve_overrides,
)

logger = logging.getLogger(__name__)

MAX_QUESTION_INDEX = 145
MBTI_THRESHOLD_RANGE = (1.0, 10.0)
FRAMEWORK_THRESHOLD_RANGE = (0.0, 10.0)
# Float slack so that a sum sitting exactly on 1.0 +/- max deviation passes
_EPSILON = 1e-9


@dataclass
class ValidationResult:
    """Outcome of an overrides check."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.is_valid = not self.errors
        return self

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


@dataclass
class WeightValidationOptions:
    allow_zero_weights: bool = False
    max_total_deviation: float = 0.1
    min_weight: float = 0.0
    max_weight: float = 1.0


def _check_weights(
    label: str,
    traits: Mapping[str, float],
    options: WeightValidationOptions,
    result: ValidationResult,
) -> None:
    total = 0.0
    for trait, weight in traits.items():
        if weight is None:
            result.errors.append(f"{label}.{trait}: weight is missing")
            continue
        if weight < options.min_weight - _EPSILON or weight > options.max_weight + _EPSILON:
            result.errors.append(
                f"{label}.{trait}: weight {weight} is outside "
                f"[{options.min_weight}, {options.max_weight}]"
            )
        if weight == 0 and not options.allow_zero_weights:
            result.warnings.append(f"{label}.{trait}: weight is zero")
        total += weight

    deviation = abs(total - 1.0)
    if deviation > options.max_total_deviation + _EPSILON:
        result.errors.append(
            f"{label}: weights sum to {round(total, 4)}, "
            f"deviation {round(deviation, 4)} exceeds {options.max_total_deviation}"
        )


def _check_scaling(label: str, dimension: DimensionWeights, result: ValidationResult) -> None:
    if dimension.scaling is not None and (dimension.scaling <= 0 or dimension.scaling > 10):
        result.warnings.append(f"{label}: scaling {dimension.scaling} is outside (0, 10]")


def validate_mbti_weights(
    mbti: Mapping[str, DimensionWeights],
    options: Optional[WeightValidationOptions] = None,
) -> ValidationResult:
    options = options or WeightValidationOptions()
    result = ValidationResult()

    for dim_key, dimension in (mbti or {}).items():
        label = f"mbti.{dim_key}"
        if dimension.traits is None:
            result.errors.append(f"{label}: missing traits configuration")
            continue
        _check_weights(label, dimension.traits, options, result)

        if dimension.threshold is not None:
            low, high = MBTI_THRESHOLD_RANGE
            if dimension.threshold < low or dimension.threshold > high:
                result.errors.append(
                    f"{label}: threshold {dimension.threshold} is outside [{low}, {high}]"
                )
        _check_scaling(label, dimension, result)

    result.is_valid = not result.errors
    return result


def validate_framework_weights(
    framework: Mapping[str, DimensionWeights],
    name: str,
    options: Optional[WeightValidationOptions] = None,
) -> ValidationResult:
    options = options or WeightValidationOptions()
    result = ValidationResult()

    for dim_key, dimension in (framework or {}).items():
        label = f"{name}.{dim_key}"
        if dimension.traits is None:
            result.errors.append(f"{label}: missing traits configuration")
            continue
        _check_weights(label, dimension.traits, options, result)

        if dimension.threshold is not None:
            low, high = FRAMEWORK_THRESHOLD_RANGE
            if dimension.threshold < low or dimension.threshold > high:
                result.errors.append(
                    f"{label}: threshold {dimension.threshold} is outside [{low}, {high}]"
                )
        _check_scaling(label, dimension, result)

    result.is_valid = not result.errors
    return result


def validate_trait_mappings(mappings: Mapping[str, list]) -> ValidationResult:
    result = ValidationResult()
    owners: Dict[int, List[str]] = defaultdict(list)

    for trait, indices in (mappings or {}).items():
        if not isinstance(indices, (list, tuple)):
            result.errors.append(f"traitMappings.{trait}: questions must be a list")
            continue
        if not indices:
            result.warnings.append(f"traitMappings.{trait}: no questions mapped")
            continue

        seen = set()
        for index in indices:
            if isinstance(index, bool) or not isinstance(index, int):
                result.errors.append(f"traitMappings.{trait}: question index {index!r} is not an integer")
                continue
            if index < 1 or index > MAX_QUESTION_INDEX:
                result.errors.append(
                    f"traitMappings.{trait}: question index {index} is outside [1, {MAX_QUESTION_INDEX}]"
                )
                continue
            if index in seen:
                continue
            seen.add(index)
            owners[index].append(trait)

    for index in sorted(owners):
        traits = owners[index]
        if len(traits) > 1:
            result.warnings.append(f"Question {index} mapped to multiple traits: {', '.join(traits)}")

    result.is_valid = not result.errors
    return result


def validate_complete_overrides(overrides, options: Optional[WeightValidationOptions] = None) -> ValidationResult:
    """Run every check that applies to the sections present in ``overrides``."""
    overrides: ScoringOverrides = parse_overrides(overrides) or ScoringOverrides()
    result = ValidationResult()

    if overrides.trait_mappings is not None:
        result.merge(validate_trait_mappings(overrides.trait_mappings))
    if overrides.mbti is not None:
        result.merge(validate_mbti_weights(overrides.mbti, options))
    for name in FRAMEWORKS:
        if name == "mbti":
            continue
        framework = getattr(overrides, name)
        if framework is not None:
            result.merge(validate_framework_weights(framework, name, options))

    result.is_valid = not result.errors
    if result.errors:
        logger.info(f"Scoring overrides rejected with {len(result.errors)} errors")
    return result


def validate_effective_overrides(
    overrides,
    base: ScoringOverrides = DEFAULT_OVERRIDES,
    options: Optional[WeightValidationOptions] = None,
) -> ValidationResult:
    """Validate the sections a partial document touches, completed from ``base``.

    A partial dimension such as ``{"threshold": 4.0}`` inherits its traits
    from ``base`` before the checks run.
    """
    partial: ScoringOverrides = parse_overrides(overrides) or ScoringOverrides()
    effective = resolve_overrides(partial, base=base)
    sections = {
        name: effective.framework(name)
        for name in FRAMEWORKS
        if getattr(partial, name) is not None
    }
    return validate_complete_overrides(
        ScoringOverrides(trait_mappings=partial.trait_mappings, **sections),
        options,
    )


def auto_fix_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """Rescale weights to sum to 1.0; all-zero weights become equal shares."""
    if not weights:
        return {}
    total = sum(weights.values())
    if total == 0:
        share = 1.0 / len(weights)
        return {trait: share for trait in weights}
    if abs(total - 1.0) <= _EPSILON:
        return dict(weights)
    return {trait: weight / total for trait, weight in weights.items()}


class ScoringValidator:
    """Facade over the module-level checks."""

    def __init__(self, options: Optional[WeightValidationOptions] = None):
        self.options = options or WeightValidationOptions()

    def validate_mbti_weights(self, mbti) -> ValidationResult:
        return validate_mbti_weights(mbti, self.options)

    def validate_framework_weights(self, framework, name: str) -> ValidationResult:
        return validate_framework_weights(framework, name, self.options)

    def validate_trait_mappings(self, mappings) -> ValidationResult:
        return validate_trait_mappings(mappings)

    def validate_complete_overrides(self, overrides) -> ValidationResult:
        return validate_complete_overrides(overrides, self.options)

    def validate_effective_overrides(self, overrides) -> ValidationResult:
        return validate_effective_overrides(overrides, options=self.options)

    @staticmethod
    def auto_fix_weights(weights) -> Dict[str, float]:
        return auto_fix_weights(weights)
