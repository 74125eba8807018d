"""SQL scoring configuration repository."""

from typing import Any, Dict, Optional

from sqlalchemy import func, select, update

from ...domain.repositories import IScoringConfigRepository
from ..database import DatabaseManager
from ..database.models import ScoringConfigModel


class SQLScoringConfigRepository(IScoringConfigRepository):
    """Each save becomes the single active version."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def get_active(self) -> Optional[Dict[str, Any]]:
        async with self.db_manager.get_session() as session:
            result = await session.execute(
                select(ScoringConfigModel.config)
                .where(ScoringConfigModel.is_active.is_(True))
                .order_by(ScoringConfigModel.version.desc())
                .limit(1)
            )
            row = result.first()
            return row.config if row else None

    async def save(self, document: Dict[str, Any], created_by: Optional[str]) -> int:
        async with self.db_manager.get_session() as session:
            async with session.begin():
                latest = await session.scalar(select(func.max(ScoringConfigModel.version)))
                version = (latest or 0) + 1

                await session.execute(
                    update(ScoringConfigModel)
                    .where(ScoringConfigModel.is_active.is_(True))
                    .values(is_active=False)
                )
                session.add(ScoringConfigModel(
                    version=version,
                    config=document,
                    is_active=True,
                    created_by=created_by,
                ))

        return version
