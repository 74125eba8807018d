"""Assessment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ..entities import ProfileUpdate, StoredAssessment


class IAssessmentRepository(ABC):
    """Assessment repository interface."""

    @abstractmethod
    async def list_page(
        self,
        offset: int,
        limit: int,
        since: Optional[datetime] = None,
        variant: Optional[str] = None,
    ) -> Tuple[List[StoredAssessment], int]:
        """Return one page, newest first, and the total matching count."""
        pass

    @abstractmethod
    async def get_by_id(self, assessment_id: str) -> Optional[StoredAssessment]:
        pass

    @abstractmethod
    async def apply_updates(self, updates: List[ProfileUpdate]) -> None:
        """Write all updates in one transaction or none of them.

        Raises ``AssessmentNotFoundError`` or ``ProfileConflictError`` for the
        first row that cannot be written.
        """
        pass

    @abstractmethod
    async def apply_update(self, update: ProfileUpdate) -> None:
        """Write a single update in its own transaction."""
        pass
