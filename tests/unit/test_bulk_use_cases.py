"""
Unit Tests: Bulk Recalculation Use Cases

Covers:
- Admin authorization (401 / 403 paths)
- List paging and limit clamping
- Apply: dry run, chunked writes, row-by-row fallback, resume
- Progress and audit failures never fail the call
"""

from unittest.mock import AsyncMock, Mock

import pytest

from tps_scoring.application.dto import ApplyRecalculationDTO, ListAssessmentsDTO
from tps_scoring.application.use_cases import (
    ApplyRecalculationUseCase,
    AuthorizeAdminUseCase,
    ListAssessmentsUseCase,
)
from tps_scoring.domain.entities import BulkOperationStatus, ProfileUpdate, StoredAssessment
from tps_scoring.domain.exceptions import (
    AssessmentNotFoundError,
    BulkOperationNotFoundError,
    ForbiddenError,
    ProfileConflictError,
    UnauthorizedError,
)


# ============================================================================
# FAKES
# ============================================================================

class InMemoryAssessments:
    """Assessment store with the same write semantics as the SQL repository"""

    def __init__(self, rows):
        self.rows = {row.id: row for row in rows}
        self.chunk_calls = 0
        self.fail_chunks = False

    async def list_page(self, offset, limit, since=None, variant=None):
        rows = [r for r in self.rows.values() if variant is None or r.variant == variant]
        return rows[offset:offset + limit], len(rows)

    async def apply_updates(self, updates):
        self.chunk_calls += 1
        if self.fail_chunks:
            raise RuntimeError("deadlock detected")
        for u in updates:
            self._check(u)
        for u in updates:
            self.rows[u.id].profile = u.new_profile

    async def apply_update(self, update):
        self._check(update)
        self.rows[update.id].profile = update.new_profile

    def _check(self, u):
        if u.id not in self.rows:
            raise AssessmentNotFoundError(u.id)
        if u.old_profile is not None and self.rows[u.id].profile != u.old_profile:
            raise ProfileConflictError(u.id)


class InMemoryOperations:
    def __init__(self):
        self.operations = {}
        self.saves = []

    async def create(self, operation):
        self.operations[operation.id] = operation
        return operation

    async def get_by_id(self, operation_id):
        return self.operations.get(operation_id)

    async def save_progress(self, operation):
        self.saves.append((operation.processed_items, operation.status))


def _assessments(count):
    return [
        StoredAssessment(id=f"a{i}", user_id=f"u{i}", responses=[5] * 108, profile={"v": 1})
        for i in range(count)
    ]


def _updates(ids, old=None):
    return [ProfileUpdate(id=i, new_profile={"v": 2}, old_profile=old) for i in ids]


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def assessments():
    return InMemoryAssessments(_assessments(10))


@pytest.fixture
def operations():
    return InMemoryOperations()


@pytest.fixture
def audit():
    repo = Mock()
    repo.append = AsyncMock()
    return repo


@pytest.fixture
def apply_use_case(assessments, operations, audit):
    return ApplyRecalculationUseCase(assessments, operations, audit, chunk_size=4)


# ============================================================================
# AUTHORIZATION
# ============================================================================

@pytest.mark.asyncio
async def test_authorize_admin():
    identity = Mock()
    identity.resolve_user = Mock(return_value="admin-1")
    roles = Mock()
    roles.has_role = AsyncMock(return_value=True)

    user_id = await AuthorizeAdminUseCase(identity, roles).execute("token")

    assert user_id == "admin-1"
    roles.has_role.assert_awaited_once_with("admin-1", "admin")


@pytest.mark.asyncio
async def test_authorize_without_identity_is_unauthorized():
    identity = Mock()
    identity.resolve_user = Mock(return_value=None)
    roles = Mock()
    roles.has_role = AsyncMock()

    with pytest.raises(UnauthorizedError):
        await AuthorizeAdminUseCase(identity, roles).execute(None)

    roles.has_role.assert_not_awaited()


@pytest.mark.asyncio
async def test_authorize_non_admin_is_forbidden():
    identity = Mock()
    identity.resolve_user = Mock(return_value="user-7")
    roles = Mock()
    roles.has_role = AsyncMock(return_value=False)

    with pytest.raises(ForbiddenError) as exc_info:
        await AuthorizeAdminUseCase(identity, roles).execute("token")

    assert exc_info.value.message == "Forbidden: admin role required"


# ============================================================================
# LIST
# ============================================================================

@pytest.mark.asyncio
async def test_list_pages_until_short_page():
    use_case = ListAssessmentsUseCase(InMemoryAssessments(_assessments(120)))

    first = await use_case.execute(ListAssessmentsDTO(offset=0, limit=50))
    second = await use_case.execute(ListAssessmentsDTO(offset=50, limit=50))
    third = await use_case.execute(ListAssessmentsDTO(offset=100, limit=50))

    assert (len(first.items), first.next_offset) == (50, 50)
    assert second.next_offset == 100
    assert (len(third.items), third.next_offset) == (20, None)
    assert third.to_dict()["nextOffset"] is None
    assert first.total == 120


@pytest.mark.asyncio
async def test_list_clamps_offset_and_limit():
    repo = Mock()
    repo.list_page = AsyncMock(return_value=([], 0))
    use_case = ListAssessmentsUseCase(repo)

    await use_case.execute(ListAssessmentsDTO(offset=-5, limit=5000))
    assert repo.list_page.call_args.kwargs["offset"] == 0
    assert repo.list_page.call_args.kwargs["limit"] == 1000

    await use_case.execute(ListAssessmentsDTO())
    assert repo.list_page.call_args.kwargs["limit"] == 200


# ============================================================================
# APPLY
# ============================================================================

@pytest.mark.asyncio
async def test_dry_run_writes_nothing(apply_use_case, assessments, operations, audit):
    result = await apply_use_case.execute(
        ApplyRecalculationDTO(updates=_updates([f"a{i}" for i in range(10)]), dry_run=True),
        actor_id="admin-1",
    )

    operation = operations.operations[result.operation_id]
    assert result.success == 0
    assert result.errors == []
    assert operation.status == BulkOperationStatus.DRY_RUN
    assert operation.processed_items == 0
    assert operation.total_items == 10
    assert assessments.chunk_calls == 0
    assert all(row.profile == {"v": 1} for row in assessments.rows.values())
    assert audit.append.call_args.args[0].action == "bulk_recalc_dry_run"


@pytest.mark.asyncio
async def test_apply_writes_in_chunks(apply_use_case, assessments, operations):
    result = await apply_use_case.execute(
        ApplyRecalculationDTO(updates=_updates([f"a{i}" for i in range(10)])),
        actor_id="admin-1",
    )

    operation = operations.operations[result.operation_id]
    assert result.success == 10
    assert assessments.chunk_calls == 3
    assert operation.status == BulkOperationStatus.COMPLETED
    assert operation.completed_at is not None
    # progress saved after every chunk, then once more on completion
    assert [processed for processed, _ in operations.saves] == [4, 8, 10, 10]


@pytest.mark.asyncio
async def test_failed_chunk_retries_row_by_row(apply_use_case, assessments, operations):
    updates = _updates(["a0", "missing", "a2"]) + _updates(["a3"], old={"v": 99})

    result = await apply_use_case.execute(ApplyRecalculationDTO(updates=updates), actor_id="admin-1")

    assert result.success == 2
    assert result.errors == [
        {"id": "missing", "error": "Assessment not found"},
        {"id": "a3", "error": "Profile was modified since it was listed"},
    ]
    assert assessments.rows["a0"].profile == {"v": 2}
    assert assessments.rows["a3"].profile == {"v": 1}
    operation = operations.operations[result.operation_id]
    assert operation.error_count == 2
    assert operation.success_count == 2


@pytest.mark.asyncio
async def test_database_error_in_chunk_falls_back(apply_use_case, assessments):
    assessments.fail_chunks = True

    result = await apply_use_case.execute(
        ApplyRecalculationDTO(updates=_updates(["a0", "a1"], old={"v": 1})),
        actor_id="admin-1",
    )

    assert result.success == 2
    assert result.errors == []


@pytest.mark.asyncio
async def test_resume_accumulates_counters(apply_use_case, operations):
    first = await apply_use_case.execute(ApplyRecalculationDTO(updates=_updates(["a0", "a1"])), actor_id="admin-1")
    second = await apply_use_case.execute(
        ApplyRecalculationDTO(updates=_updates(["a2", "a3", "a4"]), operation_id=first.operation_id),
        actor_id="admin-1",
    )

    operation = operations.operations[first.operation_id]
    assert second.operation_id == first.operation_id
    assert second.success == 3
    assert operation.total_items == 5
    assert operation.processed_items == 5
    assert operation.success_count == 5
    assert operation.status == BulkOperationStatus.COMPLETED


@pytest.mark.asyncio
async def test_resume_unknown_operation(apply_use_case):
    with pytest.raises(BulkOperationNotFoundError):
        await apply_use_case.execute(
            ApplyRecalculationDTO(updates=_updates(["a0"]), operation_id="nope"),
            actor_id="admin-1",
        )


@pytest.mark.asyncio
async def test_progress_and_audit_failures_are_logged_only(assessments, audit):
    operations = InMemoryOperations()
    operations.save_progress = AsyncMock(side_effect=RuntimeError("connection reset"))
    audit.append.side_effect = RuntimeError("audit table missing")
    use_case = ApplyRecalculationUseCase(assessments, operations, audit, chunk_size=4)

    result = await use_case.execute(ApplyRecalculationDTO(updates=_updates(["a0", "a1"])), actor_id="admin-1")

    assert result.success == 2
    assert result.to_dict() == {"operationId": result.operation_id, "success": 2, "errors": []}
