"""Public schema exports."""

from .refresh import (
    AllGroups,
    DatasetEntry,
    DispatchMode,
    RefreshOutcome,
    RefreshResult,
    SingleGroup,
)

__all__ = [
    "AllGroups",
    "DatasetEntry",
    "DispatchMode",
    "RefreshOutcome",
    "RefreshResult",
    "SingleGroup",
]
