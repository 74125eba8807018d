"""SQL role lookup."""

import logging

from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError

from ...domain.repositories import IRoleRepository
from ..database import DatabaseManager
from ..database.models import UserRoleModel

logger = logging.getLogger(__name__)


class SQLRoleRepository(IRoleRepository):
    """Checks roles through the has_role SQL function, falling back to user_roles."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def has_role(self, user_id: str, role: str) -> bool:
        try:
            async with self.db_manager.get_session() as session:
                result = await session.scalar(
                    text("SELECT has_role(:user_id, :role)"),
                    {"user_id": user_id, "role": role},
                )
                return bool(result)
        except DBAPIError as e:
            logger.debug(f"has_role() unavailable, querying user_roles: {e}")

        async with self.db_manager.get_session() as session:
            result = await session.execute(
                select(UserRoleModel.id)
                .where(UserRoleModel.user_id == user_id, UserRoleModel.role == role)
                .limit(1)
            )
            return result.first() is not None
