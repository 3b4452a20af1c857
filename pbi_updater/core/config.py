"""
Application configuration models and helpers.

Centralizes settings management so the terminal entry point, the config
checker script and the tests share one configuration surface. File locations
are always resolved from an explicit root directory rather than from the
process working directory at call time.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    populate_by_name=True,
)


class PathSettings(BaseSettings):
    """Locations of the files the refresher reads and writes."""

    model_config = _SETTINGS_CONFIG

    root_dir: Path = Field(
        default_factory=Path.cwd,
        validation_alias="PBI_ROOT_DIR",
        description="Directory holding the token cache, dataset and secrets files.",
    )
    token_file: str = Field(".token", validation_alias="PBI_TOKEN_FILE")
    dataset_file: str = Field("dataset.json", validation_alias="PBI_DATASET_FILE")
    secrets_file: str = Field("secrets.toml", validation_alias="PBI_SECRETS_FILE")

    @field_validator("root_dir")
    @classmethod
    def _expand_root(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def token_path(self) -> Path:
        return self.root_dir / self.token_file

    @property
    def dataset_path(self) -> Path:
        return self.root_dir / self.dataset_file

    @property
    def secrets_path(self) -> Path:
        return self.root_dir / self.secrets_file


class EndpointSettings(BaseSettings):
    """Remote endpoints for the identity provider and the Power BI REST API."""

    model_config = _SETTINGS_CONFIG

    token_url: str = Field(
        "https://login.windows.net/common/oauth2/token",
        validation_alias="PBI_TOKEN_URL",
    )
    api_base_url: str = Field(
        "https://api.powerbi.com/v1.0/myorg",
        validation_alias="PBI_API_BASE_URL",
    )
    http_timeout_seconds: float = Field(30.0, validation_alias="PBI_HTTP_TIMEOUT")

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AppSettings(BaseSettings):
    """Root settings object for the refresher."""

    model_config = _SETTINGS_CONFIG

    log_level: str = Field("WARNING", validation_alias="PBI_LOG_LEVEL")
    pause_on_exit: bool = Field(
        True,
        validation_alias="PBI_PAUSE_ON_EXIT",
        description="Wait for ENTER before exiting so double-clicked consoles stay open.",
    )
    paths: PathSettings = Field(default_factory=PathSettings)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "EndpointSettings",
    "PathSettings",
    "get_settings",
]
