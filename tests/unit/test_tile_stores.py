from __future__ import annotations

from io import BytesIO
from pathlib import Path

import httpx
import pytest

from src.adapters.api import dependencies
from src.adapters.tiles import s3_tile_store
from src.adapters.tiles.http_tile_store import HttpTileStore
from src.adapters.tiles.local_tile_store import LocalTileStore
from src.adapters.tiles.s3_tile_store import S3TileStore
from src.domain.exceptions import TileFetchError


def test_local_tile_store_reads_png(tmp_path: Path) -> None:
    (tmp_path / "root.png").write_bytes(b"root-bytes")
    (tmp_path / "143.png").write_bytes(b"deep-bytes")
    store = LocalTileStore(base_path=tmp_path)

    assert store.get_tile("root") == b"root-bytes"
    assert store.get_tile("143") == b"deep-bytes"


def test_local_tile_store_uses_tile_root_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "1.png").write_bytes(b"one")
    monkeypatch.setenv("TILE_ROOT", str(tmp_path))

    assert LocalTileStore().get_tile("1") == b"one"


def test_local_tile_store_missing_tile(tmp_path: Path) -> None:
    with pytest.raises(TileFetchError):
        LocalTileStore(base_path=tmp_path).get_tile("4")


def test_http_tile_store_fetches_by_id() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=b"png-bytes")

    store = HttpTileStore(
        base_url="https://tiles.test/berkeley/", transport=httpx.MockTransport(handler)
    )

    assert store.get_tile("21") == b"png-bytes"
    assert seen == ["https://tiles.test/berkeley/21.png"]


def test_http_tile_store_error_status_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    store = HttpTileStore(
        base_url="https://tiles.test", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(TileFetchError):
        store.get_tile("root")


def test_http_tile_store_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TILE_BASE_URL", raising=False)

    with pytest.raises(RuntimeError):
        HttpTileStore().get_tile("root")


def test_http_tile_store_reuses_one_client(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[httpx.Client] = []
    real_client = httpx.Client

    def _counting_client(*args, **kwargs) -> httpx.Client:
        client = real_client(*args, **kwargs)
        created.append(client)
        return client

    monkeypatch.setattr(httpx, "Client", _counting_client)
    store = HttpTileStore(
        base_url="https://tiles.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"x")),
    )

    for tile_id in ("1", "2", "3", "4"):
        assert store.get_tile(tile_id) == b"x"
    assert len(created) == 1

    store.close()
    assert created[0].is_closed


class _FakeS3:
    def __init__(self) -> None:
        self.keys: list[str] = []

    def get_object(self, *, Bucket: str, Key: str) -> dict:
        self.keys.append(Key)
        return {"Body": BytesIO(Key.encode())}


def test_s3_tile_store_reuses_one_client(monkeypatch: pytest.MonkeyPatch) -> None:
    fakes: list[_FakeS3] = []

    def _fake_s3_client() -> _FakeS3:
        fakes.append(_FakeS3())
        return fakes[-1]

    monkeypatch.setattr(s3_tile_store, "s3_client", _fake_s3_client)
    store = S3TileStore(bucket="tiles-bucket", prefix="berkeley")

    assert store.get_tile("1") == b"berkeley/1.png"
    assert store.get_tile("14") == b"berkeley/14.png"
    assert len(fakes) == 1
    assert fakes[0].keys == ["berkeley/1.png", "berkeley/14.png"]


def test_tile_store_dependency_is_shared(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for name in ("TILE_BUCKET", "TILE_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TILE_ROOT", str(tmp_path))
    dependencies.get_config.cache_clear()
    dependencies.get_tile_store.cache_clear()
    try:
        store = dependencies.get_tile_store()
        assert isinstance(store, LocalTileStore)
        assert dependencies.get_tile_store() is store
    finally:
        dependencies.get_config.cache_clear()
        dependencies.get_tile_store.cache_clear()
