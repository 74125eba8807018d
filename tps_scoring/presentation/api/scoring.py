"""Profile scoring and scoring-overrides endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...config import Container
from ...domain.exceptions import InvalidOverridesError
from ...domain.scoring import parse_overrides, validate_effective_overrides
from .dependencies import bearer_token, format_validation_errors, get_app_container
from .schemas import ProfileRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scoring")


@router.post("/profile")
async def build_profile(
    payload: ProfileRequest,
    container: Container = Depends(get_app_container),
):
    try:
        profile = await container.get("build_profile").execute(payload.responses, payload.overrides)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": format_validation_errors(e)})
    return profile.to_document()


@router.post("/overrides/validate")
async def validate_overrides(document: Dict[str, Any] = Body(...)):
    try:
        overrides = parse_overrides(document)
    except ValidationError as e:
        return {"isValid": False, "errors": [format_validation_errors(e)], "warnings": []}
    return validate_effective_overrides(overrides).to_dict()


@router.get("/overrides")
async def get_overrides(
    authorization: Optional[str] = Header(default=None),
    container: Container = Depends(get_app_container),
):
    await container.get("authorize_admin").execute(bearer_token(authorization))
    overrides = await container.get("scoring_config").load()
    return {"overrides": overrides.to_document() if overrides else None}


@router.put("/overrides")
async def save_overrides(
    document: Dict[str, Any] = Body(...),
    authorization: Optional[str] = Header(default=None),
    container: Container = Depends(get_app_container),
):
    user_id = await container.get("authorize_admin").execute(bearer_token(authorization))
    try:
        version, result = await container.get("scoring_config").save(document, user_id)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": format_validation_errors(e)})
    except InvalidOverridesError as e:
        return JSONResponse(status_code=422, content={"error": e.message, **e.result.to_dict()})
    return {"version": version, **result.to_dict()}
