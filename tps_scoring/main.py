"""Main application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from . import __version__
from .config import Container, get_container, get_settings
from .monitoring import HealthCheckService, setup_logging
from .presentation.api import create_api_routes

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Create FastAPI application.

    Tests pass their own container; otherwise the process-wide one is used.
    """

    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.json_logs)
        logger.info("Starting TPS scoring service...")

        app_container = container or get_container()
        try:
            await app_container.initialize()
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise

        app.state.container = app_container
        app.state.health_service = HealthCheckService(app_container)

        health = await app.state.health_service.get_health_status()
        logger.info(f"System health: {health['status']}")

        yield

        logger.info("Shutting down TPS scoring service...")
        await app_container.close()

    app = FastAPI(
        title="TPS Scoring API",
        description="Trait scoring, typology classification and bulk profile recalculation",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan
    )

    create_api_routes(app)

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tps_scoring.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
