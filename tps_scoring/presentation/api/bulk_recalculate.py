"""Bulk recalculation RPC endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...application.dto import ApplyRecalculationDTO, ListAssessmentsDTO
from ...config import Container
from ...domain.entities import ProfileUpdate
from ...domain.exceptions import InvalidModeError, TPSException
from ...infrastructure.external_services import BULK_RECALCULATE_PATH
from .dependencies import bearer_token, format_validation_errors, get_app_container
from .schemas import ApplyRequest, ListFilter, ListRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(BULK_RECALCULATE_PATH)
async def bulk_recalculate(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    container: Container = Depends(get_app_container),
):
    """List assessments or apply recomputed profiles, admin only."""
    user_id = await container.get("authorize_admin").execute(bearer_token(authorization))

    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    mode = body.get("mode") if isinstance(body, dict) else None

    try:
        if mode == "list":
            payload = ListRequest.model_validate(body)
            filters = payload.filter or ListFilter()
            page = await container.get("list_assessments").execute(ListAssessmentsDTO(
                offset=payload.offset or 0,
                limit=payload.limit,
                since=filters.since,
                variant=filters.variant,
            ))
            return page.to_dict()

        if mode == "apply":
            payload = ApplyRequest.model_validate(body)
            result = await container.get("apply_recalculation").execute(
                ApplyRecalculationDTO(
                    updates=[
                        ProfileUpdate(id=u.id, new_profile=u.new_profile, old_profile=u.old_profile)
                        for u in payload.items
                    ],
                    dry_run=payload.dry_run,
                    operation_id=payload.operation_id,
                ),
                actor_id=user_id,
            )
            return result.to_dict()

        raise InvalidModeError(mode)

    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": format_validation_errors(e)})
    except TPSException:
        raise
    except Exception as e:
        logger.error(f"Bulk recalculation {mode} failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
