from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.models import BoundingBox, TileManifest

# Extent of the "root" tile of the bundled Berkeley tile set.
DEFAULT_ROOT_ULLON = -122.2998046875
DEFAULT_ROOT_ULLAT = 37.892195547244356
DEFAULT_ROOT_LRLON = -122.2119140625
DEFAULT_ROOT_LRLAT = 37.82280243352756


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    return float(raw) if raw is not None else default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    return int(raw) if raw is not None else default


def _parse_color(raw: str) -> tuple[int, int, int, int]:
    parts = [int(p.strip()) for p in raw.split(",") if p.strip()]
    if len(parts) == 3:
        parts.append(255)
    if len(parts) != 4 or any(not 0 <= p <= 255 for p in parts):
        raise ValueError(f"Invalid ROUTE_STROKE_COLOR: {raw!r} (expected 'r,g,b[,a]')")
    return parts[0], parts[1], parts[2], parts[3]


@dataclass(frozen=True, slots=True)
class MapRuntimeConfig:
    """Process-level map settings, read once from the environment.

    Env vars:
      - MAP_ROOT_ULLON / MAP_ROOT_ULLAT / MAP_ROOT_LRLON / MAP_ROOT_LRLAT: root tile extent
      - TILE_SIZE: tile edge in pixels (default 256)
      - TILE_DEPTH: deepest tile level available (default 7)
      - ROUTE_STROKE_WIDTH_PX: route line width (default 5)
      - ROUTE_STROKE_COLOR: 'r,g,b[,a]' (default 108,181,230,200)
      - OSM_DB_PATH: OSM XML file to ingest
      - OSM_GRAPH_PATH / OSM_PLACE: OSMnx graphml file or place query
      - TILE_ROOT: local tile directory (default img/)
      - TILE_BUCKET: S3 bucket holding tiles (overrides TILE_ROOT)
      - TILE_BASE_URL: HTTP tile server (overrides TILE_ROOT)
    """

    root_box: BoundingBox
    tile_size: int
    tile_depth: int
    stroke_width_px: int
    stroke_color: tuple[int, int, int, int]
    osm_db_path: str | None
    osm_graph_path: str | None
    osm_place: str | None
    tile_root: str
    tile_bucket: str | None
    tile_base_url: str | None

    @staticmethod
    def from_env() -> "MapRuntimeConfig":
        root_box = BoundingBox(
            ul_lon=_env_float("MAP_ROOT_ULLON", DEFAULT_ROOT_ULLON),
            ul_lat=_env_float("MAP_ROOT_ULLAT", DEFAULT_ROOT_ULLAT),
            lr_lon=_env_float("MAP_ROOT_LRLON", DEFAULT_ROOT_LRLON),
            lr_lat=_env_float("MAP_ROOT_LRLAT", DEFAULT_ROOT_LRLAT),
        )

        return MapRuntimeConfig(
            root_box=root_box,
            tile_size=_env_int("TILE_SIZE", 256),
            tile_depth=_env_int("TILE_DEPTH", 7),
            stroke_width_px=_env_int("ROUTE_STROKE_WIDTH_PX", 5),
            stroke_color=_parse_color(
                _env_str("ROUTE_STROKE_COLOR") or "108,181,230,200"
            ),
            osm_db_path=_env_str("OSM_DB_PATH"),
            osm_graph_path=_env_str("OSM_GRAPH_PATH"),
            osm_place=_env_str("OSM_PLACE"),
            tile_root=_env_str("TILE_ROOT") or "img/",
            tile_bucket=_env_str("TILE_BUCKET"),
            tile_base_url=_env_str("TILE_BASE_URL"),
        )

    def tile_manifest(self) -> TileManifest:
        return TileManifest(
            root_box=self.root_box, tile_size=self.tile_size, max_depth=self.tile_depth
        )
