"""Role lookup interface."""

from abc import ABC, abstractmethod


class IRoleRepository(ABC):
    """Answers whether a user holds a role."""

    @abstractmethod
    async def has_role(self, user_id: str, role: str) -> bool:
        pass
