"""SQL bulk operation and audit log repositories."""

from typing import Optional

from sqlalchemy import update

from ...domain.entities import AuditEntry, BulkOperation, BulkOperationStatus
from ...domain.repositories import IAuditLogRepository, IBulkOperationRepository
from ..database import DatabaseManager
from ..database.models import BulkOperationModel, ScoringAuditLogModel


class SQLBulkOperationRepository(IBulkOperationRepository):
    """SQL implementation of bulk operation repository."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def create(self, operation: BulkOperation) -> BulkOperation:
        model = BulkOperationModel(
            id=operation.id,
            operation_type=operation.operation_type,
            status=operation.status.value,
            total_items=operation.total_items,
            processed_items=operation.processed_items,
            success_count=operation.success_count,
            error_count=operation.error_count,
            parameters=operation.parameters,
            error_details=operation.error_details,
            created_by=operation.created_by,
            created_at=operation.created_at,
        )

        async with self.db_manager.get_session() as session:
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return self._to_entity(model)

    async def get_by_id(self, operation_id: str) -> Optional[BulkOperation]:
        async with self.db_manager.get_session() as session:
            model = await session.get(BulkOperationModel, operation_id)
            return self._to_entity(model) if model else None

    async def save_progress(self, operation: BulkOperation) -> None:
        async with self.db_manager.get_session() as session:
            await session.execute(
                update(BulkOperationModel)
                .where(BulkOperationModel.id == operation.id)
                .values(
                    status=operation.status.value,
                    total_items=operation.total_items,
                    processed_items=operation.processed_items,
                    success_count=operation.success_count,
                    error_count=operation.error_count,
                    error_details=list(operation.error_details),
                    completed_at=operation.completed_at,
                )
            )
            await session.commit()

    def _to_entity(self, model: BulkOperationModel) -> BulkOperation:
        return BulkOperation(
            id=model.id,
            operation_type=model.operation_type,
            status=BulkOperationStatus(model.status),
            total_items=model.total_items,
            processed_items=model.processed_items,
            success_count=model.success_count,
            error_count=model.error_count,
            parameters=model.parameters or {},
            error_details=list(model.error_details or []),
            created_by=model.created_by,
            created_at=model.created_at,
            completed_at=model.completed_at,
        )


class SQLAuditLogRepository(IAuditLogRepository):
    """Writes to scoring_audit_log."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def append(self, entry: AuditEntry) -> None:
        async with self.db_manager.get_session() as session:
            session.add(ScoringAuditLogModel(
                action=entry.action,
                actor_id=entry.actor_id,
                details=entry.details,
                created_at=entry.created_at,
            ))
            await session.commit()
