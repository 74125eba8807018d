"""HTTP client for the bulk recalculation RPC."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...application.interfaces import IBulkRecalculationClient

logger = logging.getLogger(__name__)

BULK_RECALCULATE_PATH = "/functions/v1/bulk-recalculate"
SCORING_OVERRIDES_PATH = "/scoring/overrides"


class HTTPBulkRecalculationClient(IBulkRecalculationClient):
    """Calls the bulk-recalculate endpoint with a bearer token."""

    def __init__(self, base_url: str, token: str, timeout: float = 60.0, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._headers = {"Authorization": f"Bearer {token}"}

    async def list_assessments(
        self,
        offset: int = 0,
        limit: int = 200,
        since: Optional[str] = None,
        variant: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"mode": "list", "offset": offset, "limit": limit}
        filters = {key: value for key, value in (("since", since), ("variant", variant)) if value}
        if filters:
            payload["filter"] = filters
        return await self._post(payload)

    async def apply(
        self,
        updates: List[Dict[str, Any]],
        dry_run: bool = False,
        operation_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"mode": "apply", "dryRun": dry_run, "items": updates}
        if operation_id:
            payload["operationId"] = operation_id
        return await self._post(payload)

    async def load_overrides(self) -> Optional[Dict[str, Any]]:
        response = await self._client.get(SCORING_OVERRIDES_PATH, headers=self._headers)
        if response.status_code >= 400:
            logger.error(f"Loading scoring overrides failed: {response.status_code} {response.text}")
        response.raise_for_status()
        return response.json().get("overrides")

    async def close(self) -> None:
        await self._client.aclose()

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.post(BULK_RECALCULATE_PATH, json=payload, headers=self._headers)
        if response.status_code >= 400:
            logger.error(f"Bulk recalculation {payload['mode']} failed: {response.status_code} {response.text}")
        response.raise_for_status()
        return response.json()
