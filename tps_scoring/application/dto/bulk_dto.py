"""Bulk recalculation DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...domain.entities import ProfileUpdate


@dataclass
class ListAssessmentsDTO:
    offset: int = 0
    limit: Optional[int] = None
    since: Optional[datetime] = None
    variant: Optional[str] = None


@dataclass
class AssessmentPageDTO:
    items: List[Dict[str, Any]]
    total: int
    next_offset: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {"items": self.items, "total": self.total, "nextOffset": self.next_offset}


@dataclass
class ApplyRecalculationDTO:
    updates: List[ProfileUpdate]
    dry_run: bool = False
    operation_id: Optional[str] = None


@dataclass
class ApplyResultDTO:
    operation_id: str
    success: int
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"operationId": self.operation_id, "success": self.success, "errors": self.errors}


@dataclass
class RecalculationReportDTO:
    """Outcome of a full client-side recalculation run."""

    operation_id: Optional[str] = None
    listed: int = 0
    submitted: int = 0
    success: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    skipped: List[Dict[str, Any]] = field(default_factory=list)
