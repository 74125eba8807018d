"""
Integration Tests: HTTP API

Runs the FastAPI app in-process over httpx's ASGI transport against a SQLite
database. Covers:
- Bulk recalculation authorization, list and apply modes
- The recalculation runner over the HTTP client
- Profile scoring and response validation errors
- Scoring overrides validate / save / load
- Health endpoints
"""

import httpx
import pytest

from tps_scoring.application.use_cases import BulkRecalculationRunner
from tps_scoring.config import Container, Settings
from tps_scoring.domain.services import PersonalityProfileService
from tps_scoring.infrastructure.database import AssessmentModel, UserRoleModel
from tps_scoring.infrastructure.external_services import (
    BULK_RECALCULATE_PATH,
    HTTPBulkRecalculationClient,
    JWTIdentityProvider,
)
from tps_scoring.main import create_app
from tps_scoring.monitoring import HealthCheckService

JWT_SECRET = "integration-secret"


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
async def container(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        jwt_secret=JWT_SECRET,
        bulk_chunk_size=2,
        anthropic_api_key=None,
        openai_api_key=None,
    )
    container = Container(settings)
    await container.initialize()

    db_manager = container.get("db_manager")
    async with db_manager.get_session() as session:
        session.add(UserRoleModel(user_id="admin-1", role="admin"))
        for i in range(3):
            session.add(AssessmentModel(
                id=f"as-{i}", user_id=f"u{i}", responses=[5] * 108, profile={"v": 1},
                variant="full" if i == 0 else None,
            ))
        await session.commit()

    yield container
    await container.close()


@pytest.fixture
async def client(container):
    app = create_app(container)
    # the ASGI transport does not run the lifespan
    app.state.container = container
    app.state.health_service = HealthCheckService(container)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _auth(user_id):
    token = JWTIdentityProvider(JWT_SECRET).issue_token(user_id)
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# BULK RECALCULATION
# ============================================================================

@pytest.mark.asyncio
async def test_bulk_requires_token(client):
    response = await client.post(BULK_RECALCULATE_PATH, json={"mode": "list"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_bulk_rejects_bad_signature(client):
    token = JWTIdentityProvider("other-secret").issue_token("admin-1")

    response = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "list"}, headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_bulk_requires_admin(client):
    response = await client.post(BULK_RECALCULATE_PATH, json={"mode": "list"}, headers=_auth("user-2"))

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: admin role required"}


@pytest.mark.asyncio
async def test_bulk_invalid_mode(client):
    response = await client.post(BULK_RECALCULATE_PATH, json={"mode": "delete"}, headers=_auth("admin-1"))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid mode"}


@pytest.mark.asyncio
async def test_bulk_malformed_apply_payload(client):
    response = await client.post(
        BULK_RECALCULATE_PATH,
        json={"mode": "apply", "items": [{"id": "as-0"}]},
        headers=_auth("admin-1"),
    )

    assert response.status_code == 400
    assert "newProfile" in response.json()["error"]


@pytest.mark.asyncio
async def test_bulk_list(client):
    response = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "list", "limit": 2}, headers=_auth("admin-1"),
    )

    body = response.json()
    assert response.status_code == 200
    assert len(body["items"]) == 2
    assert body["total"] == 3
    assert body["nextOffset"] == 2


@pytest.mark.asyncio
async def test_bulk_list_filter(client):
    matching = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "list", "filter": {"variant": "full"}}, headers=_auth("admin-1"),
    )
    missing = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "list", "filter": {"variant": "nope"}}, headers=_auth("admin-1"),
    )

    assert [item["id"] for item in matching.json()["items"]] == ["as-0"]
    assert missing.json() == {"items": [], "total": 0, "nextOffset": None}


@pytest.mark.asyncio
async def test_bulk_list_null_offset(client):
    response = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "list", "offset": None}, headers=_auth("admin-1"),
    )

    assert response.status_code == 200
    assert response.json()["total"] == 3


@pytest.mark.asyncio
async def test_bulk_dry_run_then_apply(client):
    updates = [
        {"id": "as-0", "newProfile": {"v": 2}, "oldProfile": {"v": 1}},
        {"id": "as-1", "newProfile": {"v": 2}, "oldProfile": {"v": 7}},
        {"id": "as-2", "newProfile": {"v": 2}},
    ]

    dry = await client.post(
        BULK_RECALCULATE_PATH, json={"mode": "apply", "dryRun": True, "items": updates},
        headers=_auth("admin-1"),
    )
    assert dry.status_code == 200
    assert dry.json()["success"] == 0

    live = await client.post(
        BULK_RECALCULATE_PATH,
        json={"mode": "apply", "items": updates, "operationId": dry.json()["operationId"]},
        headers=_auth("admin-1"),
    )
    body = live.json()
    assert live.status_code == 200
    assert body["operationId"] == dry.json()["operationId"]
    assert body["success"] == 2
    assert [e["id"] for e in body["errors"]] == ["as-1"]

    listed = await client.post(BULK_RECALCULATE_PATH, json={"mode": "list"}, headers=_auth("admin-1"))
    profiles = {item["id"]: item["profile"] for item in listed.json()["items"]}
    assert profiles == {"as-0": {"v": 2}, "as-1": {"v": 1}, "as-2": {"v": 2}}


@pytest.mark.asyncio
async def test_bulk_resume_unknown_operation(client):
    response = await client.post(
        BULK_RECALCULATE_PATH,
        json={"mode": "apply", "operationId": "missing", "items": []},
        headers=_auth("admin-1"),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_runner_over_http_uses_filter_and_active_overrides(client):
    token = JWTIdentityProvider(JWT_SECRET).issue_token("admin-1")
    saved = await client.put(
        "/scoring/overrides", json={"mbti": {"EI": {"threshold": 2.0}}}, headers=_auth("admin-1"),
    )
    assert saved.status_code == 200
    bulk_client = HTTPBulkRecalculationClient("http://test", token, client=client)

    report = await BulkRecalculationRunner(bulk_client, PersonalityProfileService()).run(
        dry_run=False, variant="full",
    )

    assert report.listed == 1
    assert report.success == 1
    listed = await client.post(BULK_RECALCULATE_PATH, json={"mode": "list"}, headers=_auth("admin-1"))
    profiles = {item["id"]: item["profile"] for item in listed.json()["items"]}
    assert profiles["as-0"]["mappings"]["mbti"] == "ESFP"
    assert profiles["as-1"] == {"v": 1}


# ============================================================================
# PROFILE SCORING
# ============================================================================

ALTERNATING = [3 if i % 2 == 0 else 8 for i in range(108)]


@pytest.mark.asyncio
async def test_score_profile(client):
    response = await client.post("/scoring/profile", json={"responses": ALTERNATING})

    body = response.json()
    assert response.status_code == 200
    assert body["mappings"]["mbti"] == "INTJ"
    assert body["version"] == "2.0"


@pytest.mark.asyncio
async def test_score_profile_rejects_bad_responses(client):
    response = await client.post("/scoring/profile", json={"responses": [5] * 100})

    assert response.status_code == 400
    assert response.json()["details"] == {
        "kind": "WrongLength",
        "message": "Expected 108 responses, got 100",
        "expected": 108,
        "actual": 100,
    }


@pytest.mark.asyncio
async def test_score_profile_with_request_overrides(client):
    response = await client.post(
        "/scoring/profile",
        json={"responses": ALTERNATING, "overrides": {"mbti": {"EI": {"threshold": 2.0}}}},
    )

    assert response.json()["mappings"]["mbti"] == "ENTJ"


# ============================================================================
# SCORING OVERRIDES
# ============================================================================

@pytest.mark.asyncio
async def test_validate_overrides(client):
    response = await client.post(
        "/scoring/overrides/validate",
        json={"mbti": {"EI": {"traits": {"Extroverted": 0.6, "Introverted": 0.5}}}},
    )

    assert response.json() == {"isValid": True, "errors": [], "warnings": []}


@pytest.mark.asyncio
async def test_save_and_load_overrides(client):
    invalid = await client.put(
        "/scoring/overrides", json={"mbti": {"EI": {"threshold": 42}}}, headers=_auth("admin-1"),
    )
    assert invalid.status_code == 422
    assert invalid.json()["isValid"] is False

    saved = await client.put(
        "/scoring/overrides", json={"mbti": {"EI": {"threshold": 2.0}}}, headers=_auth("admin-1"),
    )
    assert saved.status_code == 200
    assert saved.json()["version"] == 1

    loaded = await client.get("/scoring/overrides", headers=_auth("admin-1"))
    assert loaded.json()["overrides"]["mbti"]["EI"]["threshold"] == 2.0

    scored = await client.post("/scoring/profile", json={"responses": ALTERNATING})
    assert scored.json()["mappings"]["mbti"] == "ENTJ"


@pytest.mark.asyncio
async def test_overrides_require_admin(client):
    response = await client.get("/scoring/overrides", headers=_auth("user-2"))

    assert response.status_code == 403


# ============================================================================
# HEALTH
# ============================================================================

@pytest.mark.asyncio
async def test_health_and_ready(client):
    health = (await client.get("/health")).json()
    ready = (await client.get("/ready")).json()

    assert health["services"]["database"] is True
    # no LLM keys configured
    assert health["status"] == "degraded"
    assert ready["ready"] is True
