try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from pathlib import Path

import pytest

from pbi_updater.core.errors import ConfigurationError
from pbi_updater.core.secrets import load_credentials


def test_load_credentials_reads_flat_table(tmp_path: Path) -> None:
    path = tmp_path / "secrets.toml"
    path.write_text(
        'client_id = "client"\n'
        'grant_type = "password"\n'
        'resource = "https://analysis.windows.net/powerbi/api"\n'
        'username = "user@example.com"\n'
        'password = "hunter2"\n',
        encoding="utf-8",
    )

    credentials = load_credentials(path)

    assert credentials["client_id"] == "client"
    assert credentials["password"] == "hunter2"
    assert len(credentials) == 5


def test_load_credentials_tolerates_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "secrets.toml"
    path.write_text('client_id = "client"\n', encoding="utf-8")

    assert load_credentials(path) == {"client_id": "client"}


def test_load_credentials_requires_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_credentials(tmp_path / "secrets.toml")


@pytest.mark.parametrize(
    "content",
    ["client_id = ", 'client_id = 42\n', '[section]\nkey = "value"\n'],
)
def test_load_credentials_rejects_invalid_content(tmp_path: Path, content: str) -> None:
    path = tmp_path / "secrets.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_credentials(path)
