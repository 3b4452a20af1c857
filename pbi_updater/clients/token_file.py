"""JSON file storage for the cached bearer token."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pbi_updater.core.errors import TokenCacheError
from pbi_updater.models import TokenRecord


class TokenFileStore:
    """Read and overwrite a single token record kept at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[TokenRecord]:
        """
        Return the cached token, or None when no cache file exists.

        Raises ``TokenCacheError`` when the file exists but cannot be read or
        does not hold a token record.
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise TokenCacheError(f"Failed to read token file {self._path}: {exc}") from exc

        try:
            return TokenRecord.model_validate_json(content)
        except ValidationError as exc:
            raise TokenCacheError(f"Token file {self._path} is corrupt.") from exc

    def save(self, record: TokenRecord) -> None:
        if not self._path.parent.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(record.model_dump_json(), encoding="utf-8")


__all__ = ["TokenFileStore"]
