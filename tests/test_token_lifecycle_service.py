from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from pbi_updater.clients import TokenFileStore
from pbi_updater.core.errors import TokenAcquisitionError, TokenUnavailableError
from pbi_updater.models import TokenRecord
from pbi_updater.services import TokenLifecycleManager

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
CREDENTIALS = {
    "client_id": "client",
    "grant_type": "password",
    "resource": "https://analysis.windows.net/powerbi/api",
    "username": "user@example.com",
    "password": "hunter2",
}


def _token(access_token: str, expires_at: datetime) -> TokenRecord:
    return TokenRecord(
        token_type="Bearer",
        expires_on=str(int(expires_at.timestamp())),
        access_token=access_token,
    )


class DummyAuthClient:
    def __init__(
        self, *, token: TokenRecord | None = None, error: str | None = None
    ) -> None:
        self.token = token
        self.error = error
        self.calls: list[dict] = []

    async def acquire_token(self, credentials) -> TokenRecord:
        self.calls.append(dict(credentials))
        if self.error is not None:
            raise TokenAcquisitionError(self.error)
        assert self.token is not None
        return self.token


class RecordingStore(TokenFileStore):
    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.saves: list[TokenRecord] = []

    def save(self, record: TokenRecord) -> None:
        self.saves.append(record)
        super().save(record)


def _manager(store: TokenFileStore, auth: DummyAuthClient) -> TokenLifecycleManager:
    return TokenLifecycleManager(store, auth, clock=lambda: NOW)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_valid_cached_token_skips_acquisition(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    cached = _token("cached", NOW + timedelta(hours=1))
    TokenFileStore(store.path).save(cached)
    auth = DummyAuthClient(token=_token("fresh", NOW + timedelta(hours=2)))

    manager = _manager(store, auth)
    token = await manager.obtain_token(CREDENTIALS)

    assert token == cached
    assert auth.calls == []
    assert store.saves == []
    assert manager.acquired_fresh is False


@pytest.mark.asyncio
async def test_expired_cached_token_is_replaced_and_persisted(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    TokenFileStore(store.path).save(_token("stale", NOW - timedelta(minutes=1)))
    fresh = _token("fresh", NOW + timedelta(hours=1))
    auth = DummyAuthClient(token=fresh)

    manager = _manager(store, auth)
    token = await manager.obtain_token(CREDENTIALS)

    assert token == fresh
    assert auth.calls == [CREDENTIALS]
    assert store.saves == [fresh]
    assert store.load() == fresh
    assert manager.acquired_fresh is True


@pytest.mark.asyncio
async def test_missing_cache_acquires_and_writes_exactly_new_record(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    fresh = _token("fresh", NOW + timedelta(hours=1))

    token = await _manager(store, DummyAuthClient(token=fresh)).obtain_token(CREDENTIALS)

    assert token == fresh
    assert store.path.read_text(encoding="utf-8") == fresh.model_dump_json()


@pytest.mark.asyncio
async def test_corrupt_cache_is_treated_as_miss(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    store.path.write_text("{garbage", encoding="utf-8")
    fresh = _token("fresh", NOW + timedelta(hours=1))
    auth = DummyAuthClient(token=fresh)

    token = await _manager(store, auth).obtain_token(CREDENTIALS)

    assert token == fresh
    assert len(auth.calls) == 1


@pytest.mark.asyncio
async def test_unparsable_expiry_in_cache_forces_acquisition(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    TokenFileStore(store.path).save(
        TokenRecord(token_type="Bearer", expires_on="never", access_token="cached")
    )
    fresh = _token("fresh", NOW + timedelta(hours=1))
    auth = DummyAuthClient(token=fresh)

    token = await _manager(store, auth).obtain_token(CREDENTIALS)

    assert token == fresh
    assert len(auth.calls) == 1


@pytest.mark.asyncio
async def test_acquisition_failure_is_unrecoverable_without_cache_write(
    tmp_path: Path,
) -> None:
    store = RecordingStore(tmp_path / ".token")
    auth = DummyAuthClient(error='{"error": "invalid_grant"}')

    with pytest.raises(TokenUnavailableError) as exc_info:
        await _manager(store, auth).obtain_token(CREDENTIALS)

    assert isinstance(exc_info.value.__cause__, TokenAcquisitionError)
    assert store.saves == []
    assert not store.path.exists()


@pytest.mark.asyncio
async def test_acquisition_failure_keeps_expired_cache_untouched(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    TokenFileStore(store.path).save(_token("stale", NOW - timedelta(minutes=1)))
    before = store.path.read_bytes()

    with pytest.raises(TokenUnavailableError):
        await _manager(store, DummyAuthClient(error="denied")).obtain_token(CREDENTIALS)

    assert store.saves == []
    assert store.path.read_bytes() == before


@pytest.mark.asyncio
async def test_repeated_calls_with_live_cache_are_identical(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    TokenFileStore(store.path).save(_token("cached", NOW + timedelta(hours=1)))
    manager = _manager(store, DummyAuthClient(error="should not be called"))

    first = await manager.obtain_token(CREDENTIALS)
    second = await manager.obtain_token(CREDENTIALS)

    assert first.model_dump_json() == second.model_dump_json()


@pytest.mark.asyncio
async def test_undecodable_cache_is_treated_as_miss(tmp_path: Path) -> None:
    store = RecordingStore(tmp_path / ".token")
    store.path.write_bytes(b"\xff\xfe\x00garbage")
    fresh = _token("fresh", NOW + timedelta(hours=1))
    auth = DummyAuthClient(token=fresh)

    token = await _manager(store, auth).obtain_token(CREDENTIALS)

    assert token == fresh
    assert len(auth.calls) == 1
    assert store.load() == fresh


class FailingSaveStore(TokenFileStore):
    def save(self, record: TokenRecord) -> None:
        raise PermissionError("read-only directory")


@pytest.mark.asyncio
async def test_cache_write_failure_still_returns_new_token(tmp_path: Path) -> None:
    store = FailingSaveStore(tmp_path / ".token")
    fresh = _token("fresh", NOW + timedelta(hours=1))

    manager = _manager(store, DummyAuthClient(token=fresh))
    token = await manager.obtain_token(CREDENTIALS)

    assert token == fresh
    assert manager.acquired_fresh is True
