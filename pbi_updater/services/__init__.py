"""Service layer exports."""

from .dataset_refresh import DatasetRefreshService, ResourceGroups
from .registry import fold_dataset_entries, load_dataset_entries, load_resource_groups
from .token_lifecycle import TokenLifecycleManager, is_token_valid

__all__ = [
    "DatasetRefreshService",
    "ResourceGroups",
    "TokenLifecycleManager",
    "fold_dataset_entries",
    "is_token_valid",
    "load_dataset_entries",
    "load_resource_groups",
]
