from __future__ import annotations

import logging
import os
from functools import lru_cache

from src.adapters.api.route_state import ActiveRouteState
from src.adapters.maps.osm_xml_map_adapter import OsmXmlMapAdapter
from src.adapters.maps.osmnx_map_adapter import OSMnxMapAdapter
from src.adapters.maps.s3_cached_map_adapter import S3CachedMapAdapter
from src.adapters.settings import MapRuntimeConfig
from src.adapters.tiles.http_tile_store import HttpTileStore
from src.adapters.tiles.local_tile_store import LocalTileStore
from src.adapters.tiles.s3_tile_store import S3TileStore
from src.app.ports.output import IMapProvider, ITileStore
from src.app.services.map_database import MapDatabase
from src.app.services.raster_service import RasterService
from src.app.services.routing_service import RoutingService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_config() -> MapRuntimeConfig:
    return MapRuntimeConfig.from_env()


def _map_provider(cfg: MapRuntimeConfig) -> IMapProvider:
    base_provider: IMapProvider
    if cfg.osm_db_path:
        base_provider = OsmXmlMapAdapter(path=cfg.osm_db_path)
    elif cfg.osm_graph_path or cfg.osm_place:
        base_provider = OSMnxMapAdapter(graph_path=cfg.osm_graph_path, place=cfg.osm_place)
    else:
        raise RuntimeError(
            "No map data configured; set OSM_DB_PATH, OSM_GRAPH_PATH or OSM_PLACE"
        )

    if os.getenv("ROAD_GRAPH_BUCKET"):
        return S3CachedMapAdapter(upstream=base_provider)
    return base_provider


@lru_cache(maxsize=1)
def get_tile_store() -> ITileStore:
    """One store per process so its client and connection pool are reused."""

    cfg = get_config()
    if cfg.tile_bucket:
        return S3TileStore(bucket=cfg.tile_bucket)
    if cfg.tile_base_url:
        return HttpTileStore(base_url=cfg.tile_base_url)
    return LocalTileStore(base_path=cfg.tile_root)


@lru_cache(maxsize=1)
def get_map_database() -> MapDatabase:
    """Build the graph and every index once; shared read-only afterwards."""

    cfg = get_config()
    graph = _map_provider(cfg).load_road_graph()
    return MapDatabase.build(graph, cfg.tile_manifest())


@lru_cache(maxsize=1)
def get_active_route_state() -> ActiveRouteState:
    return ActiveRouteState()


def get_routing_service() -> RoutingService:
    return RoutingService(database=get_map_database())


def get_raster_service() -> RasterService:
    cfg = get_config()
    return RasterService(
        database=get_map_database(),
        tile_store=get_tile_store(),
        stroke_width_px=cfg.stroke_width_px,
        stroke_color=cfg.stroke_color,
    )
