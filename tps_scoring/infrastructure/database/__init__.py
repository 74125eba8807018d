"""Database infrastructure module."""

from .connection import Base, DatabaseManager, get_database_manager, initialize_database
from .models import AssessmentModel, BulkOperationModel, ScoringAuditLogModel, ScoringConfigModel, UserRoleModel

__all__ = [
    "Base",
    "DatabaseManager",
    "get_database_manager",
    "initialize_database",
    "AssessmentModel",
    "BulkOperationModel",
    "ScoringAuditLogModel",
    "ScoringConfigModel",
    "UserRoleModel",
]
