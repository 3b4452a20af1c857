"""Power BI REST client used to trigger dataset refreshes."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pbi_updater.core.config import EndpointSettings
from pbi_updater.models import TokenRecord
from pbi_updater.schemas import RefreshOutcome

logger = logging.getLogger(__name__)


class PowerBIClient:
    """Ask the Power BI service to refresh individual datasets."""

    def __init__(
        self,
        endpoint_settings: EndpointSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoints = endpoint_settings
        self._transport = transport

    def refresh_url(self, dataset_id: str) -> str:
        return f"{self._endpoints.api_base_url}/datasets/{dataset_id}/refreshes"

    async def refresh_dataset(self, dataset_id: str, token: TokenRecord) -> RefreshOutcome:
        """POST an empty refresh request; every non-2xx result is a failure outcome."""
        headers = {"Authorization": f"Bearer {token.access_token}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._endpoints.http_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.refresh_url(dataset_id), headers=headers, content=b""
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "Refresh request failed: %s", exc, extra={"dataset_id": dataset_id}
            )
            return RefreshOutcome(success=False, detail=str(exc))

        if response.is_success:
            return RefreshOutcome(success=True, status_code=response.status_code)

        logger.info(
            "Refresh request rejected",
            extra={"dataset_id": dataset_id, "status_code": response.status_code},
        )
        return RefreshOutcome(
            success=False,
            status_code=response.status_code,
            detail=response.text or None,
        )


__all__ = ["PowerBIClient"]
