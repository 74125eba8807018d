"""Raw questionnaire response validation."""

import math
from typing import Any, List

from ..exceptions import ResponseValidationError
from .traits import MAX_RESPONSE, MIN_RESPONSE, QUESTION_COUNT


def validate_responses(responses: Any, expected_length: int = QUESTION_COUNT) -> List[float]:
    """Return the responses coerced to floats, or raise ``ResponseValidationError``.

    Checks run in order: the input is a sequence, it has exactly
    ``expected_length`` entries, and every entry is a number in [1, 10].
    The first failing entry is reported with its 0-based index.
    """
    if not isinstance(responses, (list, tuple)):
        raise ResponseValidationError(ResponseValidationError.NOT_ARRAY)

    if len(responses) != expected_length:
        raise ResponseValidationError(
            ResponseValidationError.WRONG_LENGTH,
            expected=expected_length,
            actual=len(responses)
        )

    values = []
    for index, raw in enumerate(responses):
        value = _coerce(raw)
        if value is None or value < MIN_RESPONSE or value > MAX_RESPONSE:
            raise ResponseValidationError(
                ResponseValidationError.OUT_OF_RANGE,
                index=index,
                value=raw
            )
        values.append(value)

    return values


def _coerce(raw: Any):
    # bool is an int subclass but never a valid answer
    if isinstance(raw, bool) or raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value
