from __future__ import annotations

import pytest

from src.adapters.settings import DEFAULT_ROOT_ULLON, MapRuntimeConfig

ENV_VARS = (
    "MAP_ROOT_ULLON",
    "MAP_ROOT_ULLAT",
    "MAP_ROOT_LRLON",
    "MAP_ROOT_LRLAT",
    "TILE_SIZE",
    "TILE_DEPTH",
    "ROUTE_STROKE_WIDTH_PX",
    "ROUTE_STROKE_COLOR",
    "OSM_DB_PATH",
    "OSM_GRAPH_PATH",
    "OSM_PLACE",
    "TILE_ROOT",
    "TILE_BUCKET",
    "TILE_BASE_URL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = MapRuntimeConfig.from_env()

    assert cfg.root_box.ul_lon == DEFAULT_ROOT_ULLON
    assert cfg.tile_size == 256
    assert cfg.tile_depth == 7
    assert cfg.stroke_width_px == 5
    assert cfg.stroke_color == (108, 181, 230, 200)
    assert cfg.tile_root == "img/"
    assert cfg.osm_db_path is None
    assert cfg.tile_bucket is None


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAP_ROOT_ULLON", "0")
    monkeypatch.setenv("MAP_ROOT_ULLAT", "4")
    monkeypatch.setenv("MAP_ROOT_LRLON", "4")
    monkeypatch.setenv("MAP_ROOT_LRLAT", "0")
    monkeypatch.setenv("TILE_SIZE", "64")
    monkeypatch.setenv("TILE_DEPTH", "2")
    monkeypatch.setenv("ROUTE_STROKE_COLOR", "1, 2, 3")
    monkeypatch.setenv("OSM_DB_PATH", " data/berkeley.osm ")
    monkeypatch.setenv("TILE_BASE_URL", "")

    cfg = MapRuntimeConfig.from_env()
    manifest = cfg.tile_manifest()

    assert (manifest.root_box.ul_lon, manifest.root_box.lr_lon) == (0.0, 4.0)
    assert manifest.tile_size == 64
    assert manifest.max_depth == 2
    assert cfg.stroke_color == (1, 2, 3, 255)
    assert cfg.osm_db_path == "data/berkeley.osm"
    assert cfg.tile_base_url is None


@pytest.mark.parametrize("raw", ["1,2", "1,2,3,4,5", "0,0,300", "a,b,c"])
def test_invalid_stroke_color(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("ROUTE_STROKE_COLOR", raw)

    with pytest.raises(ValueError):
        MapRuntimeConfig.from_env()


def test_inverted_root_box_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAP_ROOT_ULLON", "10")
    monkeypatch.setenv("MAP_ROOT_LRLON", "-10")

    with pytest.raises(ValueError):
        MapRuntimeConfig.from_env()
