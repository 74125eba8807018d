"""Application DTOs module."""

from .bulk_dto import (
    ApplyRecalculationDTO,
    ApplyResultDTO,
    AssessmentPageDTO,
    ListAssessmentsDTO,
    RecalculationReportDTO,
)
from .integral_dto import ConsistencyCheck, IntegralMetadata, IntegralPreliminaryDTO, IntegralResultDTO

__all__ = [
    "ApplyRecalculationDTO",
    "ApplyResultDTO",
    "AssessmentPageDTO",
    "ListAssessmentsDTO",
    "RecalculationReportDTO",
    "ConsistencyCheck",
    "IntegralMetadata",
    "IntegralPreliminaryDTO",
    "IntegralResultDTO",
]
