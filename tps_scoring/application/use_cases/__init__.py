"""Application use cases module."""

from .bulk_recalculation_use_cases import (
    ApplyRecalculationUseCase,
    AuthorizeAdminUseCase,
    BulkRecalculationRunner,
    ListAssessmentsUseCase,
)
from .clarification_use_cases import (
    IntegralAssessmentUseCase,
    TraitClarificationUseCase,
    validation_status,
)
from .scoring_use_cases import BuildProfileUseCase, ScoringConfigUseCase

__all__ = [
    "ApplyRecalculationUseCase",
    "AuthorizeAdminUseCase",
    "BulkRecalculationRunner",
    "ListAssessmentsUseCase",
    "IntegralAssessmentUseCase",
    "TraitClarificationUseCase",
    "validation_status",
    "BuildProfileUseCase",
    "ScoringConfigUseCase",
]
