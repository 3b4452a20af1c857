"""Load the credential set used to request an access token."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Dict

from pbi_updater.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CREDENTIAL_KEYS = ("client_id", "grant_type", "resource", "username", "password")


def load_credentials(path: Path) -> Dict[str, str]:
    """
    Read a flat TOML table of secret names to string values.

    Missing credential keys are tolerated here; the token client simply omits
    them from the exchange.
    """
    try:
        with path.open("rb") as handle:
            raw = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Secrets file {path} does not exist.") from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read secrets file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Secrets file {path} is not valid TOML: {exc}") from exc

    credentials: Dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Secret '{key}' in {path} must be a string, got {type(value).__name__}."
            )
        credentials[key] = value

    missing = [key for key in CREDENTIAL_KEYS if key not in credentials]
    if missing:
        logger.warning("Secrets file is missing keys: %s", ", ".join(missing))
    return credentials


__all__ = ["CREDENTIAL_KEYS", "load_credentials"]
