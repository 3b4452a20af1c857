"""Load the company-to-dataset registry from the dataset configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

from pydantic import TypeAdapter, ValidationError

from pbi_updater.core.errors import ConfigurationError
from pbi_updater.schemas import DatasetEntry

_ENTRIES_ADAPTER = TypeAdapter(List[DatasetEntry])


def fold_dataset_entries(entries: Iterable[DatasetEntry]) -> Dict[int, List[str]]:
    """Key dataset GUIDs by company id; a repeated id replaces the earlier entry."""
    groups: Dict[int, List[str]] = {}
    for entry in entries:
        groups[entry.id] = list(entry.guid)
    return groups


def load_dataset_entries(path: Path) -> List[DatasetEntry]:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Dataset file {path} does not exist.") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read dataset file {path}: {exc}") from exc

    try:
        return _ENTRIES_ADAPTER.validate_json(content)
    except ValidationError as exc:
        raise ConfigurationError(f"Dataset file {path} could not be parsed.") from exc


def load_resource_groups(path: Path) -> Dict[int, List[str]]:
    """Read the dataset file and return the company registry."""
    return fold_dataset_entries(load_dataset_entries(path))


__all__ = ["fold_dataset_entries", "load_dataset_entries", "load_resource_groups"]
