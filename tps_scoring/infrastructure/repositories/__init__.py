"""Infrastructure repositories module."""

from .assessment_repository import SQLAssessmentRepository
from .bulk_operation_repository import SQLAuditLogRepository, SQLBulkOperationRepository
from .role_repository import SQLRoleRepository
from .scoring_config_repository import SQLScoringConfigRepository

__all__ = [
    "SQLAssessmentRepository",
    "SQLAuditLogRepository",
    "SQLBulkOperationRepository",
    "SQLRoleRepository",
    "SQLScoringConfigRepository",
]
