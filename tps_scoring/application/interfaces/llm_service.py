"""LLM service interface."""

from abc import ABC, abstractmethod
from typing import Dict


class ILLMService(ABC):
    """Text completion collaborator used by the clarification stages."""

    @abstractmethod
    async def complete(self, prompt: str, purpose: str = "general") -> str:
        """Return the model's reply to ``prompt``.

        Raises ``LLMServiceError`` when the provider cannot be reached.
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, bool]:
        pass
