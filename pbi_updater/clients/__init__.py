"""Expose constructed client wrappers."""

from .azure_auth import AzureADTokenClient
from .powerbi import PowerBIClient
from .token_file import TokenFileStore

__all__ = [
    "AzureADTokenClient",
    "PowerBIClient",
    "TokenFileStore",
]
