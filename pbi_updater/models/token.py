"""
Domain model for the bearer token returned by the identity provider.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_EPOCH_SECONDS = re.compile(r"[+-]?[0-9]+")


class TokenRecord(BaseModel):
    """Bearer token as returned by Azure AD and stored in the token cache."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    token_type: str = Field(..., description="Token scheme, passed through unchanged.")
    expires_on: str = Field(
        ..., description="Expiry as a numeric string of seconds since the epoch."
    )
    access_token: str = Field(..., description="Credential sent as bearer authorization.")

    @property
    def expires_at(self) -> Optional[datetime]:
        """Parsed expiry in UTC, or None when ``expires_on`` is not a valid timestamp."""
        raw = self.expires_on.strip()
        if not _EPOCH_SECONDS.fullmatch(raw):
            return None
        try:
            seconds = int(raw)
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None


__all__ = ["TokenRecord"]
