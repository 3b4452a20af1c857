"""
Azure AD OAuth utilities.

Exchanges the configured user credentials for a bearer token using the
resource-owner-password grant.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from pbi_updater.core.config import EndpointSettings
from pbi_updater.core.errors import TokenAcquisitionError
from pbi_updater.core.secrets import CREDENTIAL_KEYS
from pbi_updater.models import TokenRecord

logger = logging.getLogger(__name__)


class AzureADTokenClient:
    """Request fresh access tokens from the Azure AD token endpoint."""

    def __init__(
        self,
        endpoint_settings: EndpointSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoints = endpoint_settings
        self._transport = transport

    async def acquire_token(self, credentials: Mapping[str, str]) -> TokenRecord:
        """
        Exchange credentials for a token.

        Absent credential keys are left out of the form rather than rejected.
        Raises ``TokenAcquisitionError`` carrying the response body when the
        endpoint answers with a non-success status or an unusable payload.
        """
        payload = {
            key: credentials[key]
            for key in CREDENTIAL_KEYS
            if credentials.get(key) is not None
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._endpoints.http_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self._endpoints.token_url, data=payload)
        except httpx.HTTPError as exc:
            raise TokenAcquisitionError(f"Token request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Token endpoint rejected credentials",
                extra={"status_code": response.status_code},
            )
            raise TokenAcquisitionError(response.text)

        try:
            return TokenRecord.model_validate(response.json())
        except ValueError as exc:
            raise TokenAcquisitionError(
                "Incomplete token payload returned from Azure AD."
            ) from exc


__all__ = ["AzureADTokenClient"]
