"""External service implementations."""

from .bulk_client import BULK_RECALCULATE_PATH, HTTPBulkRecalculationClient
from .identity_provider import JWTIdentityProvider
from .llm_service import LLMServiceImpl

__all__ = [
    "BULK_RECALCULATE_PATH",
    "HTTPBulkRecalculationClient",
    "JWTIdentityProvider",
    "LLMServiceImpl",
]
