"""Bulk recalculation use cases: server side of the RPC and the client runner."""

import logging
from typing import Any, Dict, List, Optional

from ...domain.entities import AuditEntry, BulkOperation, BulkOperationStatus, ProfileUpdate
from ...domain.exceptions import (
    BulkOperationNotFoundError,
    ForbiddenError,
    ResponseValidationError,
    TPSException,
    UnauthorizedError,
)
from ...domain.repositories import (
    IAssessmentRepository,
    IAuditLogRepository,
    IBulkOperationRepository,
    IRoleRepository,
)
from ...domain.scoring import resolve_overrides
from ...domain.services import PersonalityProfileService
from ..dto import (
    ApplyRecalculationDTO,
    ApplyResultDTO,
    AssessmentPageDTO,
    ListAssessmentsDTO,
    RecalculationReportDTO,
)
from ..interfaces import IBulkRecalculationClient, IIdentityProvider

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
DEFAULT_LIST_LIMIT = 200
MAX_LIST_LIMIT = 1000
DEFAULT_CHUNK_SIZE = 100


class AuthorizeAdminUseCase:
    """Resolve the caller and require the admin role."""

    def __init__(self, identity_provider: IIdentityProvider, role_repository: IRoleRepository):
        self.identity_provider = identity_provider
        self.role_repository = role_repository

    async def execute(self, token: Optional[str]) -> str:
        user_id = self.identity_provider.resolve_user(token)
        if not user_id:
            raise UnauthorizedError()

        if not await self.role_repository.has_role(user_id, ADMIN_ROLE):
            logger.info(f"User {user_id} denied bulk recalculation access")
            raise ForbiddenError(ADMIN_ROLE)

        return user_id


class ListAssessmentsUseCase:
    """Page through stored assessments, newest first."""

    def __init__(
        self,
        assessment_repository: IAssessmentRepository,
        default_limit: int = DEFAULT_LIST_LIMIT,
        max_limit: int = MAX_LIST_LIMIT,
    ):
        self.assessment_repository = assessment_repository
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def execute(self, dto: ListAssessmentsDTO) -> AssessmentPageDTO:
        offset = max(0, dto.offset or 0)
        limit = min(self.max_limit, max(1, dto.limit or self.default_limit))

        items, total = await self.assessment_repository.list_page(
            offset=offset,
            limit=limit,
            since=dto.since,
            variant=dto.variant,
        )

        next_offset = None if len(items) < limit else offset + limit
        return AssessmentPageDTO(
            items=[item.to_dict() for item in items],
            total=total,
            next_offset=next_offset,
        )


class ApplyRecalculationUseCase:
    """Write recomputed profiles in chunks while tracking a bulk operation."""

    def __init__(
        self,
        assessment_repository: IAssessmentRepository,
        operation_repository: IBulkOperationRepository,
        audit_repository: IAuditLogRepository,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.assessment_repository = assessment_repository
        self.operation_repository = operation_repository
        self.audit_repository = audit_repository
        self.chunk_size = max(1, chunk_size)

    async def execute(self, dto: ApplyRecalculationDTO, actor_id: str) -> ApplyResultDTO:
        operation = await self._start_operation(dto, actor_id)

        success = 0
        errors: List[Dict[str, Any]] = []

        if not dto.dry_run:
            for start in range(0, len(dto.updates), self.chunk_size):
                chunk = dto.updates[start:start + self.chunk_size]
                chunk_success, chunk_errors = await self._write_chunk(chunk)

                success += chunk_success
                errors.extend(chunk_errors)
                operation.record_chunk(len(chunk), chunk_success, chunk_errors)
                await self._save_progress(operation)

            operation.mark_completed()
            await self._save_progress(operation)

        await self._audit(operation, dto, actor_id, success, errors)

        logger.info(
            f"Bulk operation {operation.id}: {success} updated, {len(errors)} errors"
            f"{' (dry run)' if dto.dry_run else ''}"
        )
        return ApplyResultDTO(operation_id=operation.id, success=success, errors=errors)

    async def _start_operation(self, dto: ApplyRecalculationDTO, actor_id: str) -> BulkOperation:
        if dto.operation_id:
            operation = await self.operation_repository.get_by_id(dto.operation_id)
            if operation is None:
                raise BulkOperationNotFoundError(dto.operation_id)
            operation.total_items += len(dto.updates)
            if not dto.dry_run:
                operation.status = BulkOperationStatus.PROCESSING
                operation.completed_at = None
            await self._save_progress(operation)
            return operation

        operation = BulkOperation.create_new(
            created_by=actor_id,
            total_items=len(dto.updates),
            dry_run=dto.dry_run,
            parameters={"dry_run": dto.dry_run, "chunk_size": self.chunk_size},
        )
        return await self.operation_repository.create(operation)

    async def _write_chunk(self, chunk: List[ProfileUpdate]):
        try:
            await self.assessment_repository.apply_updates(chunk)
            return len(chunk), []
        except Exception as e:
            logger.warning(f"Chunk write of {len(chunk)} rows failed, retrying row by row: {e}")

        success = 0
        errors = []
        for update in chunk:
            try:
                await self.assessment_repository.apply_update(update)
                success += 1
            except TPSException as e:
                errors.append({"id": update.id, "error": e.message})
            except Exception as e:
                logger.error(f"Failed to update assessment {update.id}: {e}")
                errors.append({"id": update.id, "error": str(e)})
        return success, errors

    async def _save_progress(self, operation: BulkOperation) -> None:
        try:
            await self.operation_repository.save_progress(operation)
        except Exception as e:
            logger.error(f"Failed to persist progress for bulk operation {operation.id}: {e}")

    async def _audit(self, operation, dto, actor_id, success, errors) -> None:
        entry = AuditEntry(
            action="bulk_recalc_dry_run" if dto.dry_run else "bulk_recalc_apply",
            actor_id=actor_id,
            details={
                "operation_id": operation.id,
                "requested": len(dto.updates),
                "success": success,
                "errors": len(errors),
            },
        )
        try:
            await self.audit_repository.append(entry)
        except Exception as e:
            logger.error(f"Failed to write audit entry for bulk operation {operation.id}: {e}")


class BulkRecalculationRunner:
    """Drive a full recalculation: list pages, rescore, submit apply calls.

    Profiles are scored with ``overrides`` when given, otherwise with the
    overrides document currently active on the server.
    """

    def __init__(
        self,
        client: IBulkRecalculationClient,
        profile_service: PersonalityProfileService,
        overrides: Any = None,
        page_size: int = DEFAULT_LIST_LIMIT,
    ):
        self.client = client
        self.profile_service = profile_service
        self.overrides = overrides
        self.page_size = page_size

    async def run(
        self,
        dry_run: bool = True,
        since: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> RecalculationReportDTO:
        report = RecalculationReportDTO()
        overrides = self.overrides
        if overrides is None:
            # score with whatever the server currently has active
            overrides = resolve_overrides(await self.client.load_overrides())
        offset: Optional[int] = 0

        while offset is not None:
            page = await self.client.list_assessments(
                offset=offset, limit=self.page_size, since=since, variant=variant
            )
            items = page.get("items", [])
            report.listed += len(items)

            updates = self._rescore(items, report, overrides)
            if updates:
                result = await self.client.apply(
                    updates, dry_run=dry_run, operation_id=report.operation_id
                )
                report.operation_id = report.operation_id or result.get("operationId")
                report.submitted += len(updates)
                report.success += result.get("success", 0)
                report.errors.extend(result.get("errors", []))

            offset = page.get("nextOffset")
            logger.info(f"Recalculated {report.listed} of {page.get('total', '?')} assessments")

        return report

    def _rescore(
        self,
        items: List[Dict[str, Any]],
        report: RecalculationReportDTO,
        overrides: Any,
    ) -> List[Dict[str, Any]]:
        updates = []
        for item in items:
            try:
                profile = self.profile_service.build_profile(item.get("responses"), overrides)
            except ResponseValidationError as e:
                report.skipped.append({"id": item.get("id"), "error": e.message})
                continue
            updates.append({
                "id": item["id"],
                "newProfile": profile.to_document(),
                "oldProfile": item.get("profile"),
            })
        return updates
