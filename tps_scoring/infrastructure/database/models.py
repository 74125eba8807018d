"""SQLAlchemy database models."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Integer, String, Boolean, Index
from sqlalchemy.sql import func

from .connection import Base


def _uuid() -> str:
    return str(uuid4())


class AssessmentModel(Base):
    """Completed TPS assessment with its stored profile."""

    __tablename__ = "assessments"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(64), nullable=True, index=True)
    responses = Column(JSON, nullable=False, default=list)
    profile = Column(JSON, nullable=True)
    variant = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_assessments_created_at', 'created_at'),
        Index('idx_assessments_updated_at', 'updated_at'),
        Index('idx_assessments_variant', 'variant'),
    )


class BulkOperationModel(Base):
    """Progress of a bulk recalculation run."""

    __tablename__ = "bulk_operations"

    id = Column(String(36), primary_key=True, default=_uuid)
    operation_type = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    total_items = Column(Integer, default=0, nullable=False)
    processed_items = Column(Integer, default=0, nullable=False)
    success_count = Column(Integer, default=0, nullable=False)
    error_count = Column(Integer, default=0, nullable=False)
    parameters = Column(JSON, nullable=False, default=dict)
    error_details = Column(JSON, nullable=False, default=list)
    created_by = Column(String(64), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('idx_bulk_operations_status', 'status'),
    )


class ScoringAuditLogModel(Base):
    """Append-only record of scoring changes."""

    __tablename__ = "scoring_audit_log"

    id = Column(String(36), primary_key=True, default=_uuid)
    action = Column(String(50), nullable=False)
    actor_id = Column(String(64), nullable=True)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_scoring_audit_action', 'action'),
        Index('idx_scoring_audit_created_at', 'created_at'),
    )


class UserRoleModel(Base):
    """Role grant used when the has_role SQL function is unavailable."""

    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(64), nullable=False)
    role = Column(String(20), nullable=False)

    __table_args__ = (
        Index('idx_user_roles_user_role', 'user_id', 'role', unique=True),
    )


class ScoringConfigModel(Base):
    """Versioned scoring overrides document."""

    __tablename__ = "scoring_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(Integer, nullable=False)
    config = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_scoring_config_active', 'is_active'),
    )
