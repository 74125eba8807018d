"""API presentation layer."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ...domain.exceptions import (
    AssessmentNotFoundError,
    BulkOperationNotFoundError,
    ForbiddenError,
    InvalidModeError,
    ResponseValidationError,
    TPSException,
    UnauthorizedError,
)
from . import bulk_recalculate, scoring

STATUS_CODES = {
    UnauthorizedError: 401,
    ForbiddenError: 403,
    InvalidModeError: 400,
    ResponseValidationError: 400,
    AssessmentNotFoundError: 404,
    BulkOperationNotFoundError: 404,
}


def _status_for(exc: TPSException) -> int:
    for exc_type, status in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status
    return 500


def create_api_routes(app: FastAPI) -> None:
    """Create API routes."""

    @app.exception_handler(TPSException)
    async def handle_domain_error(request: Request, exc: TPSException):
        content = {"error": exc.message}
        if isinstance(exc, ResponseValidationError):
            content["details"] = exc.to_dict()
        return JSONResponse(status_code=_status_for(exc), content=content)

    @app.get("/")
    async def root():
        return {
            "message": "TPS Scoring API",
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        try:
            health_service = app.state.health_service
            return await health_service.get_health_status()
        except Exception as e:
            return {"status": "error", "error": str(e)}

    @app.get("/ready")
    async def readiness_check():
        try:
            health_service = app.state.health_service
            return await health_service.get_readiness_status()
        except Exception as e:
            return {"ready": False, "error": str(e)}

    app.include_router(bulk_recalculate.router)
    app.include_router(scoring.router)
