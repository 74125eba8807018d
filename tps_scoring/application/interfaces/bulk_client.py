"""Client side of the bulk recalculation RPC."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IBulkRecalculationClient(ABC):

    @abstractmethod
    async def list_assessments(
        self,
        offset: int = 0,
        limit: int = 200,
        since: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> Dict[str, Any]:
        """``{"items": [...], "total": n, "nextOffset": n | None}``"""
        pass

    @abstractmethod
    async def apply(
        self,
        updates: List[Dict[str, Any]],
        dry_run: bool = False,
        operation_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """``{"operationId": id, "success": n, "errors": [...]}``"""
        pass

    @abstractmethod
    async def load_overrides(self) -> Optional[Dict[str, Any]]:
        """The active stored overrides document, or ``None`` when none is saved."""
        pass
