"""Scoring configuration repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IScoringConfigRepository(ABC):
    """Versioned storage for scoring overrides documents."""

    @abstractmethod
    async def get_active(self) -> Optional[Dict[str, Any]]:
        """Latest active overrides document, if any."""
        pass

    @abstractmethod
    async def save(self, document: Dict[str, Any], created_by: Optional[str]) -> int:
        """Store a new active version and return its version number."""
        pass
