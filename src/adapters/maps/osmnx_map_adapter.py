from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import osmnx as ox

from src.app.ports.output import IMapProvider
from src.domain.exceptions import GraphLoadError
from src.domain.models import GraphNode, RoadGraph

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OSMnxMapAdapter(IMapProvider):
    """OSMnx-backed map provider.

    Env vars:
      - OSM_GRAPH_PATH: prebuilt .graphml to load (preferred)
      - OSM_PLACE: place query to download when no graphml is configured
      - OSMNX_CACHE_FOLDER: Overpass response cache (default data/osm_cache)
    """

    network_type: str = "drive"
    graph_path: str | None = None
    place: str | None = None

    def _configure_osmnx(self) -> None:
        # Make Overpass/OSM downloads cacheable across restarts.
        ox.settings.use_cache = True
        ox.settings.log_console = False
        ox.settings.cache_folder = os.getenv("OSMNX_CACHE_FOLDER") or "data/osm_cache"
        if "name" not in ox.settings.useful_tags_node:
            ox.settings.useful_tags_node = [*ox.settings.useful_tags_node, "name"]

    def _load_osmnx_graph(self) -> Any:
        path = (self.graph_path or os.getenv("OSM_GRAPH_PATH") or "").strip()
        if path:
            if not path.lower().endswith(".graphml"):
                raise GraphLoadError(f"Unsupported OSM_GRAPH_PATH format: {path}")
            # OSMnx loader keeps numeric node attributes as floats.
            return ox.load_graphml(path)

        place = (self.place or os.getenv("OSM_PLACE") or "").strip()
        if not place:
            raise GraphLoadError("Set OSM_GRAPH_PATH or OSM_PLACE to load a street graph")

        self._configure_osmnx()
        return ox.graph_from_place(place, network_type=self.network_type, simplify=True)

    def load_road_graph(self) -> RoadGraph:
        return to_road_graph(self._load_osmnx_graph())


def to_road_graph(source: Any) -> RoadGraph:
    """Convert an OSMnx (multi)graph into a RoadGraph.

    Every node that carries x/y is kept and flagged routable; edge direction and
    parallel edges collapse into one undirected edge.
    """

    graph = RoadGraph()
    for node_id, data in source.nodes(data=True):
        x = data.get("x")
        y = data.get("y")
        if x is None or y is None:
            continue
        try:
            lon = float(x)
            lat = float(y)
        except (TypeError, ValueError):
            continue

        name = data.get("name")
        if isinstance(name, (list, tuple)):
            name = name[0] if name else None
        if name is not None:
            name = str(name).strip() or None
        graph.add_node(
            GraphNode(
                id=int(node_id),
                lon=lon,
                lat=lat,
                name=name,
                is_routable=True,
            )
        )

    for u, v in source.edges():
        if int(u) in graph and int(v) in graph:
            graph.add_edge(int(u), int(v))

    logger.info("Converted OSMnx graph: %d nodes", len(graph))
    return graph
