"""Application interfaces for external collaborators."""

from .bulk_client import IBulkRecalculationClient
from .identity_provider import IIdentityProvider
from .llm_service import ILLMService

__all__ = [
    "IBulkRecalculationClient",
    "IIdentityProvider",
    "ILLMService",
]
