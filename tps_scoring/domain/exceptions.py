"""Domain exceptions."""

from typing import Any, Optional


class TPSException(Exception):
    """Base exception for the TPS scoring service."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(message)


class ResponseValidationError(TPSException):
    """Raw questionnaire responses are malformed.

    ``kind`` is one of ``NotArray``, ``WrongLength`` or ``OutOfRange``.
    """

    NOT_ARRAY = "NotArray"
    WRONG_LENGTH = "WrongLength"
    OUT_OF_RANGE = "OutOfRange"

    def __init__(
        self,
        kind: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        index: Optional[int] = None,
        value: Any = None,
    ):
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.index = index
        self.value = value

        if kind == self.NOT_ARRAY:
            message = "Responses must be an array"
        elif kind == self.WRONG_LENGTH:
            message = f"Expected {expected} responses, got {actual}"
        else:
            message = f"Response at index {index} is out of range: {value!r}"

        super().__init__(message=message, code="RESPONSE_VALIDATION_ERROR")

    def to_dict(self) -> dict:
        data = {"kind": self.kind, "message": self.message}
        if self.kind == self.WRONG_LENGTH:
            data.update(expected=self.expected, actual=self.actual)
        elif self.kind == self.OUT_OF_RANGE:
            data.update(index=self.index, value=self.value)
        return data


class UnauthorizedError(TPSException):
    """Caller could not be identified."""

    def __init__(self):
        super().__init__(message="Unauthorized", code="UNAUTHORIZED")


class ForbiddenError(TPSException):
    """Caller lacks the required role."""

    def __init__(self, role: str = "admin"):
        super().__init__(
            message=f"Forbidden: {role} role required",
            code="FORBIDDEN"
        )


class InvalidModeError(TPSException):
    """Unknown bulk recalculation mode."""

    def __init__(self, mode: Any = None):
        self.mode = mode
        super().__init__(message="Invalid mode", code="INVALID_MODE")


class AssessmentNotFoundError(TPSException):
    """Assessment row does not exist."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__(message="Assessment not found", code="ASSESSMENT_NOT_FOUND")


class ProfileConflictError(TPSException):
    """Stored profile no longer matches the profile the caller read."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__(
            message="Profile was modified since it was listed",
            code="PROFILE_CONFLICT"
        )


class BulkOperationNotFoundError(TPSException):
    """Bulk operation to resume does not exist."""

    def __init__(self, operation_id: str):
        self.operation_id = operation_id
        super().__init__(
            message=f"Bulk operation {operation_id} not found",
            code="BULK_OPERATION_NOT_FOUND"
        )


class InvalidOverridesError(TPSException):
    """Scoring overrides failed validation and cannot be activated."""

    def __init__(self, result):
        self.result = result
        message = "Invalid scoring overrides"
        if result.errors:
            message += f": {'; '.join(result.errors)}"
        super().__init__(message=message, code="INVALID_OVERRIDES")


class LLMServiceError(TPSException):
    """LLM collaborator error."""

    def __init__(self, provider: str, details: str = None):
        message = f"LLM service error in {provider}"
        if details:
            message += f": {details}"

        super().__init__(message=message, code="LLM_SERVICE_ERROR")
