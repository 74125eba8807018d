"""SQL assessment repository implementation."""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update

from ...domain.entities import ProfileUpdate, StoredAssessment
from ...domain.exceptions import AssessmentNotFoundError, ProfileConflictError
from ...domain.repositories import IAssessmentRepository
from ..database import DatabaseManager
from ..database.models import AssessmentModel

logger = logging.getLogger(__name__)


class SQLAssessmentRepository(IAssessmentRepository):
    """SQL implementation of assessment repository.

    Every write opens its own session so chunk and row transactions stay
    independent of each other.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def list_page(
        self,
        offset: int,
        limit: int,
        since: Optional[datetime] = None,
        variant: Optional[str] = None,
    ) -> Tuple[List[StoredAssessment], int]:
        filters = []
        if since is not None:
            filters.append(AssessmentModel.updated_at >= since)
        if variant:
            filters.append(AssessmentModel.variant == variant)

        async with self.db_manager.get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(AssessmentModel).where(*filters)
            )
            result = await session.execute(
                select(AssessmentModel)
                .where(*filters)
                .order_by(AssessmentModel.created_at.desc(), AssessmentModel.id.asc())
                .offset(offset)
                .limit(limit)
            )
            models = result.scalars().all()

        return [self._to_entity(model) for model in models], total or 0

    async def get_by_id(self, assessment_id: str) -> Optional[StoredAssessment]:
        async with self.db_manager.get_session() as session:
            model = await session.get(AssessmentModel, assessment_id)
            return self._to_entity(model) if model else None

    async def apply_updates(self, updates: List[ProfileUpdate]) -> None:
        if not updates:
            return

        async with self.db_manager.get_session() as session:
            async with session.begin():
                ids = [u.id for u in updates]
                result = await session.execute(
                    select(AssessmentModel.id, AssessmentModel.profile).where(AssessmentModel.id.in_(ids))
                )
                stored = {row.id: row.profile for row in result}

                for u in updates:
                    if u.id not in stored:
                        raise AssessmentNotFoundError(u.id)
                    if u.old_profile is not None and stored[u.id] != u.old_profile:
                        raise ProfileConflictError(u.id)

                for u in updates:
                    await session.execute(
                        update(AssessmentModel)
                        .where(AssessmentModel.id == u.id)
                        .values(profile=u.new_profile, updated_at=func.now())
                    )

        logger.debug(f"Updated {len(updates)} assessment profiles in one transaction")

    async def apply_update(self, u: ProfileUpdate) -> None:
        async with self.db_manager.get_session() as session:
            async with session.begin():
                if u.old_profile is not None:
                    current = await session.execute(
                        select(AssessmentModel.profile).where(AssessmentModel.id == u.id)
                    )
                    row = current.first()
                    if row is None:
                        raise AssessmentNotFoundError(u.id)
                    if row.profile != u.old_profile:
                        raise ProfileConflictError(u.id)

                result = await session.execute(
                    update(AssessmentModel)
                    .where(AssessmentModel.id == u.id)
                    .values(profile=u.new_profile, updated_at=func.now())
                )
                if result.rowcount == 0:
                    raise AssessmentNotFoundError(u.id)

    def _to_entity(self, model: AssessmentModel) -> StoredAssessment:
        return StoredAssessment(
            id=model.id,
            user_id=model.user_id,
            responses=model.responses,
            profile=model.profile,
            variant=model.variant,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
