"""Health check system."""

import logging
import time
from typing import Any, Dict

from .. import __version__

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Service for system health monitoring."""

    def __init__(self, container):
        self.container = container
        self.startup_time = time.time()

    async def get_health_status(self) -> Dict[str, Any]:
        """Get comprehensive health status."""

        health_data = {
            "status": "healthy",
            "timestamp": time.time(),
            "uptime": time.time() - self.startup_time,
            "version": __version__,
            "services": {}
        }

        try:
            service_health = await self.container.health_check()
            health_data["services"] = service_health

            if not all(service_health.values()):
                health_data["status"] = "degraded"
                health_data["unhealthy_services"] = [
                    service for service, healthy in service_health.items()
                    if not healthy
                ]

        except Exception as e:
            logger.error(f"Health check failed: {e}")
            health_data["status"] = "unhealthy"
            health_data["error"] = str(e)

        return health_data

    async def get_readiness_status(self) -> Dict[str, Any]:
        """Ready once the database answers; the LLM is optional."""

        readiness_data = {
            "ready": True,
            "timestamp": time.time(),
            "checks": {}
        }

        try:
            service_health = await self.container.health_check()
            readiness_data["checks"] = service_health
            readiness_data["ready"] = bool(service_health.get("database"))
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            readiness_data["ready"] = False
            readiness_data["error"] = str(e)

        return readiness_data
