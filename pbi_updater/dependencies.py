"""
Factory functions to provide shared clients and services to the entry points.
"""

from functools import lru_cache

from pbi_updater.clients import AzureADTokenClient, PowerBIClient, TokenFileStore
from pbi_updater.core.config import get_settings
from pbi_updater.services import DatasetRefreshService, TokenLifecycleManager


@lru_cache()
def get_token_store() -> TokenFileStore:
    """Provide the token cache stored under the configured root directory."""
    return TokenFileStore(get_settings().paths.token_path)


@lru_cache()
def get_azure_token_client() -> AzureADTokenClient:
    """Create a singleton Azure AD token client."""
    return AzureADTokenClient(get_settings().endpoints)


@lru_cache()
def get_powerbi_client() -> PowerBIClient:
    """Create a singleton Power BI REST client."""
    return PowerBIClient(get_settings().endpoints)


def get_token_manager() -> TokenLifecycleManager:
    """Build a token manager using the configured cache and token client."""
    return TokenLifecycleManager(
        token_store=get_token_store(),
        auth_client=get_azure_token_client(),
    )


def get_refresh_service() -> DatasetRefreshService:
    """Build a dataset refresh service using the Power BI client."""
    return DatasetRefreshService(get_powerbi_client())


__all__ = [
    "get_azure_token_client",
    "get_powerbi_client",
    "get_refresh_service",
    "get_token_manager",
    "get_token_store",
]
