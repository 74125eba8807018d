"""
Integration Tests: SQL Repositories over SQLite

Covers:
- Assessment paging (newest first) with since/variant filters
- Chunk transaction rollback on a missing row or stale oldProfile
- Bulk operation progress persistence
- Role lookup falling back to user_roles when has_role() is unavailable
- Scoring config versioning
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from tps_scoring.application.dto import ApplyRecalculationDTO, ListAssessmentsDTO
from tps_scoring.application.use_cases import ApplyRecalculationUseCase, ListAssessmentsUseCase
from tps_scoring.domain.entities import AuditEntry, BulkOperation, BulkOperationStatus, ProfileUpdate
from tps_scoring.domain.exceptions import AssessmentNotFoundError, ProfileConflictError
from tps_scoring.infrastructure.database import AssessmentModel, ScoringAuditLogModel, UserRoleModel
from tps_scoring.infrastructure.repositories import (
    SQLAssessmentRepository,
    SQLAuditLogRepository,
    SQLBulkOperationRepository,
    SQLRoleRepository,
    SQLScoringConfigRepository,
)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


async def _seed(db_manager, count, variant="full"):
    async with db_manager.get_session() as session:
        for i in range(count):
            created = BASE_TIME + timedelta(minutes=i)
            session.add(AssessmentModel(
                id=f"as-{i:04d}",
                user_id=f"user-{i}",
                responses=[5] * 108,
                profile={"version": "1.0", "n": i},
                variant=variant,
                created_at=created,
                updated_at=created,
            ))
        await session.commit()


# ============================================================================
# ASSESSMENTS
# ============================================================================

@pytest.mark.asyncio
async def test_list_pages_through_120_rows(db_manager):
    await _seed(db_manager, 120)
    use_case = ListAssessmentsUseCase(SQLAssessmentRepository(db_manager))

    first = await use_case.execute(ListAssessmentsDTO(offset=0, limit=50))
    second = await use_case.execute(ListAssessmentsDTO(offset=50, limit=50))
    third = await use_case.execute(ListAssessmentsDTO(offset=100, limit=50))

    assert (len(first.items), first.next_offset) == (50, 50)
    assert (len(second.items), second.next_offset) == (50, 100)
    assert (len(third.items), third.next_offset) == (20, None)
    assert first.total == 120
    # newest first
    assert first.items[0]["id"] == "as-0119"
    assert third.items[-1]["id"] == "as-0000"


@pytest.mark.asyncio
async def test_list_filters(db_manager):
    await _seed(db_manager, 5)
    repo = SQLAssessmentRepository(db_manager)
    async with db_manager.get_session() as session:
        session.add(AssessmentModel(id="short-1", responses=[5] * 108, variant="short",
                                    created_at=BASE_TIME, updated_at=BASE_TIME))
        await session.commit()

    items, total = await repo.list_page(0, 10, variant="short")
    assert [i.id for i in items] == ["short-1"]
    assert total == 1

    items, total = await repo.list_page(0, 10, since=BASE_TIME + timedelta(minutes=3))
    assert {i.id for i in items} == {"as-0003", "as-0004"}


@pytest.mark.asyncio
async def test_apply_updates_is_all_or_nothing(db_manager):
    await _seed(db_manager, 3)
    repo = SQLAssessmentRepository(db_manager)

    with pytest.raises(AssessmentNotFoundError):
        await repo.apply_updates([
            ProfileUpdate(id="as-0000", new_profile={"version": "2.0"}),
            ProfileUpdate(id="gone", new_profile={"version": "2.0"}),
        ])

    stored = await repo.get_by_id("as-0000")
    assert stored.profile == {"version": "1.0", "n": 0}


@pytest.mark.asyncio
async def test_apply_update_checks_old_profile(db_manager):
    await _seed(db_manager, 1)
    repo = SQLAssessmentRepository(db_manager)

    with pytest.raises(ProfileConflictError):
        await repo.apply_update(ProfileUpdate(id="as-0000", new_profile={"x": 1}, old_profile={"stale": True}))

    await repo.apply_update(ProfileUpdate(
        id="as-0000", new_profile={"version": "2.0"}, old_profile={"version": "1.0", "n": 0},
    ))
    assert (await repo.get_by_id("as-0000")).profile == {"version": "2.0"}

    with pytest.raises(AssessmentNotFoundError):
        await repo.apply_update(ProfileUpdate(id="gone", new_profile={}))


@pytest.mark.asyncio
async def test_apply_use_case_against_sqlite(db_manager):
    await _seed(db_manager, 5)
    operations = SQLBulkOperationRepository(db_manager)
    use_case = ApplyRecalculationUseCase(
        SQLAssessmentRepository(db_manager), operations, SQLAuditLogRepository(db_manager), chunk_size=2,
    )
    updates = [ProfileUpdate(id=f"as-{i:04d}", new_profile={"version": "2.0"}) for i in range(5)]
    updates.append(ProfileUpdate(id="gone", new_profile={"version": "2.0"}))

    result = await use_case.execute(ApplyRecalculationDTO(updates=updates), actor_id="admin-1")

    assert result.success == 5
    assert result.errors == [{"id": "gone", "error": "Assessment not found"}]

    operation = await operations.get_by_id(result.operation_id)
    assert operation.status == BulkOperationStatus.COMPLETED
    assert operation.processed_items == 6
    assert operation.error_count == 1
    assert operation.error_details == [{"id": "gone", "error": "Assessment not found"}]

    async with db_manager.get_session() as session:
        actions = (await session.execute(select(ScoringAuditLogModel.action))).scalars().all()
    assert actions == ["bulk_recalc_apply"]


# ============================================================================
# BULK OPERATIONS AND AUDIT
# ============================================================================

@pytest.mark.asyncio
async def test_bulk_operation_progress_round_trip(db_manager):
    repo = SQLBulkOperationRepository(db_manager)
    operation = await repo.create(BulkOperation.create_new("admin-1", total_items=10, dry_run=False))

    operation.record_chunk(4, 3, [{"id": "x", "error": "boom"}])
    await repo.save_progress(operation)

    stored = await repo.get_by_id(operation.id)
    assert stored.status == BulkOperationStatus.PROCESSING
    assert (stored.processed_items, stored.success_count, stored.error_count) == (4, 3, 1)
    assert stored.error_details == [{"id": "x", "error": "boom"}]
    assert await repo.get_by_id("unknown") is None


@pytest.mark.asyncio
async def test_audit_append(db_manager):
    await SQLAuditLogRepository(db_manager).append(
        AuditEntry(action="scoring_config_update", actor_id="admin-1", details={"version": 1})
    )

    async with db_manager.get_session() as session:
        row = (await session.execute(select(ScoringAuditLogModel))).scalars().one()
    assert row.details == {"version": 1}


# ============================================================================
# ROLES
# ============================================================================

@pytest.mark.asyncio
async def test_role_lookup_falls_back_to_user_roles(db_manager):
    async with db_manager.get_session() as session:
        session.add(UserRoleModel(user_id="admin-1", role="admin"))
        await session.commit()
    repo = SQLRoleRepository(db_manager)

    assert await repo.has_role("admin-1", "admin") is True
    assert await repo.has_role("user-2", "admin") is False


# ============================================================================
# SCORING CONFIG
# ============================================================================

@pytest.mark.asyncio
async def test_scoring_config_versions(db_manager):
    repo = SQLScoringConfigRepository(db_manager)

    assert await repo.get_active() is None
    assert await repo.save({"mbti": {"EI": {"threshold": 4.0}}}, "admin-1") == 1
    assert await repo.save({"mbti": {"EI": {"threshold": 6.0}}}, "admin-1") == 2

    assert await repo.get_active() == {"mbti": {"EI": {"threshold": 6.0}}}
