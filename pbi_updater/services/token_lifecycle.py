"""
Helpers for reusing a cached bearer token or acquiring a new one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from pbi_updater.clients import AzureADTokenClient, TokenFileStore
from pbi_updater.core.errors import (
    TokenAcquisitionError,
    TokenCacheError,
    TokenUnavailableError,
)
from pbi_updater.models import TokenRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_token_valid(token: TokenRecord, now: datetime) -> bool:
    """Return True while ``now`` is before the token expiry.

    A token whose expiry cannot be parsed is never valid.
    """
    expires_at = token.expires_at
    if expires_at is None:
        return False
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now < expires_at


class TokenLifecycleManager:
    """Serve a usable token from the file cache, falling back to Azure AD."""

    def __init__(
        self,
        token_store: TokenFileStore,
        auth_client: AzureADTokenClient,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = token_store
        self._auth = auth_client
        self._clock = clock or _utcnow
        self.acquired_fresh = False

    async def obtain_token(self, credentials: Mapping[str, str]) -> TokenRecord:
        """Return a live token, acquiring and caching a new one when needed."""
        cached = self._load_cached()
        if cached is not None and is_token_valid(cached, self._clock()):
            logger.debug("Reusing cached token", extra={"path": str(self._store.path)})
            self.acquired_fresh = False
            return cached

        if cached is not None:
            logger.info("Cached token expired; requesting a new one")

        try:
            token = await self._auth.acquire_token(credentials)
        except TokenAcquisitionError as exc:
            logger.error("Token acquisition failed: %s", exc)
            raise TokenUnavailableError("token acquisition failed") from exc

        self.acquired_fresh = True
        try:
            self._store.save(token)
        except OSError as exc:
            logger.warning("Could not write token cache; continuing without it: %s", exc)
        else:
            logger.info("Stored new token", extra={"path": str(self._store.path)})
        return token

    def _load_cached(self) -> Optional[TokenRecord]:
        try:
            return self._store.load()
        except TokenCacheError as exc:
            logger.warning("Ignoring unreadable token cache: %s", exc)
            return None


__all__ = ["TokenLifecycleManager", "is_token_valid"]
