"""Exception types shared across clients and services."""

from __future__ import annotations


class PBIUpdaterError(Exception):
    """Base class for every error raised by the refresher."""


class ConfigurationError(PBIUpdaterError):
    """Raised when the secrets or dataset file is missing or malformed."""


class TokenCacheError(PBIUpdaterError):
    """Raised when the cached token file cannot be read or parsed."""


class TokenAcquisitionError(PBIUpdaterError):
    """Raised when the identity endpoint refuses or garbles a token exchange."""


class TokenUnavailableError(PBIUpdaterError):
    """Raised when no usable token could be produced by any path."""


class GroupNotFoundError(PBIUpdaterError):
    """Raised when a company id is not present in the dataset registry."""

    def __init__(self, key: int) -> None:
        super().__init__(f"Company {key} not found in dataset registry.")
        self.key = key


__all__ = [
    "ConfigurationError",
    "GroupNotFoundError",
    "PBIUpdaterError",
    "TokenAcquisitionError",
    "TokenCacheError",
    "TokenUnavailableError",
]
