"""Identity provider interface."""

from abc import ABC, abstractmethod
from typing import Optional


class IIdentityProvider(ABC):
    """Resolves a bearer token to a user id."""

    @abstractmethod
    def resolve_user(self, token: Optional[str]) -> Optional[str]:
        """User id for a valid token, ``None`` otherwise."""
        pass
