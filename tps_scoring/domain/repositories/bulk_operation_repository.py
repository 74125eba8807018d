"""Bulk operation and audit log repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities import AuditEntry, BulkOperation


class IBulkOperationRepository(ABC):
    """Bulk operation progress records."""

    @abstractmethod
    async def create(self, operation: BulkOperation) -> BulkOperation:
        pass

    @abstractmethod
    async def get_by_id(self, operation_id: str) -> Optional[BulkOperation]:
        pass

    @abstractmethod
    async def save_progress(self, operation: BulkOperation) -> None:
        """Persist counters, status and error details."""
        pass


class IAuditLogRepository(ABC):
    """Append-only scoring audit log."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        pass
