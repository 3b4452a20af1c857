"""
Pydantic models for the dataset registry and refresh reporting.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DatasetEntry(BaseModel):
    """One company record from the dataset configuration file."""

    id: int = Field(..., description="Company identifier used to select the group.")
    guid: List[str] = Field(
        default_factory=list,
        description="Dataset GUIDs refreshed for this company, in report order.",
    )


class AllGroups(BaseModel):
    """Refresh every dataset of every company."""

    model_config = ConfigDict(frozen=True)


class SingleGroup(BaseModel):
    """Refresh the datasets of a single company."""

    model_config = ConfigDict(frozen=True)

    key: int


DispatchMode = Union[AllGroups, SingleGroup]


class RefreshOutcome(BaseModel):
    """Result of triggering one dataset refresh."""

    model_config = ConfigDict(frozen=True)

    success: bool
    status_code: Optional[int] = Field(
        None, description="HTTP status, absent when no response was received."
    )
    detail: Optional[str] = Field(None, description="Diagnostic text for failures.")


class RefreshResult(BaseModel):
    """A refresh outcome tagged with the company and dataset it belongs to."""

    model_config = ConfigDict(frozen=True)

    group_key: int
    dataset_id: str
    outcome: RefreshOutcome


__all__ = [
    "AllGroups",
    "DatasetEntry",
    "DispatchMode",
    "RefreshOutcome",
    "RefreshResult",
    "SingleGroup",
]
