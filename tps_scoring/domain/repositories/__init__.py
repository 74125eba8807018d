"""Domain repository interfaces."""

from .assessment_repository import IAssessmentRepository
from .bulk_operation_repository import IAuditLogRepository, IBulkOperationRepository
from .role_repository import IRoleRepository
from .scoring_config_repository import IScoringConfigRepository

__all__ = [
    "IAssessmentRepository",
    "IAuditLogRepository",
    "IBulkOperationRepository",
    "IRoleRepository",
    "IScoringConfigRepository",
]
