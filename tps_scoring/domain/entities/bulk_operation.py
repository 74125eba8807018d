"""Bulk recalculation entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4


class BulkOperationStatus(str, Enum):
    DRY_RUN = "dry_run"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class BulkOperation:
    """Progress record for one bulk recalculation run."""

    id: str
    operation_type: str
    status: BulkOperationStatus
    total_items: int = 0
    processed_items: int = 0
    success_count: int = 0
    error_count: int = 0
    parameters: Dict[str, Any] = field(default_factory=dict)
    error_details: List[Dict[str, Any]] = field(default_factory=list)
    created_by: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @classmethod
    def create_new(
        cls,
        created_by: str,
        total_items: int,
        dry_run: bool,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> "BulkOperation":
        return cls(
            id=str(uuid4()),
            operation_type="bulk_recalculate",
            status=BulkOperationStatus.DRY_RUN if dry_run else BulkOperationStatus.PROCESSING,
            total_items=total_items,
            parameters=parameters or {},
            created_by=created_by,
        )

    def record_chunk(self, processed: int, succeeded: int, errors: List[Dict[str, Any]]) -> None:
        self.processed_items += processed
        self.success_count += succeeded
        self.error_count += len(errors)
        self.error_details.extend(errors)

    def mark_completed(self) -> None:
        self.status = BulkOperationStatus.COMPLETED
        self.completed_at = datetime.now(timezone.utc)


@dataclass
class StoredAssessment:
    """Assessment row as seen by the bulk protocol."""

    id: str
    user_id: Optional[str]
    responses: List[Any]
    profile: Optional[Dict[str, Any]]
    variant: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "responses": self.responses,
            "profile": self.profile,
            "variant": self.variant,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class ProfileUpdate:
    """One row of an apply request."""

    id: str
    new_profile: Dict[str, Any]
    old_profile: Optional[Dict[str, Any]] = None


@dataclass
class AuditEntry:
    action: str
    actor_id: Optional[str]
    details: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
