from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from src.domain.algorithms.astar import shortest_path
from src.domain.algorithms.kdtree import SpatialIndex
from src.domain.algorithms.quadtree import TileIndex
from src.domain.algorithms.trie import PrefixIndex, clean_string
from src.domain.models import (
    BoundingBox,
    GraphNode,
    Location,
    RoadGraph,
    Tile,
    TileManifest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MapDatabase:
    """Read-only query facade over the road graph and its indices.

    Build with ``MapDatabase.build``; every structure is immutable afterwards
    and safe to share between concurrent requests.
    """

    graph: RoadGraph
    spatial_index: SpatialIndex
    tile_index: TileIndex
    prefix_index: PrefixIndex
    locations_by_cleaned_name: dict[str, tuple[Location, ...]]
    bounds: BoundingBox

    @classmethod
    def build(cls, graph: RoadGraph, manifest: TileManifest) -> MapDatabase:
        started = time.monotonic()

        # Named places are searchable even when they are not on a road.
        grouped: dict[str, list[Location]] = {}
        prefix_index = PrefixIndex()
        for node in graph.named_nodes():
            name = node.name or ""
            cleaned = clean_string(name)
            if not cleaned:
                continue
            prefix_index.insert(cleaned)
            grouped.setdefault(cleaned, []).append(
                Location(id=node.id, lat=node.lat, lon=node.lon, name=name)
            )
        locations = {
            key: tuple(sorted(group, key=lambda loc: loc.id))
            for key, group in grouped.items()
        }

        removed = graph.clean()
        graph.freeze()

        spatial_index = SpatialIndex.build(graph.nodes())
        tile_index = TileIndex.from_manifest(manifest)

        logger.info(
            "Map database built in %.2fs: %d nodes (%d isolated pruned), "
            "%d tiles, %d searchable names",
            time.monotonic() - started,
            len(graph),
            removed,
            len(tile_index),
            len(prefix_index),
        )

        return cls(
            graph=graph,
            spatial_index=spatial_index,
            tile_index=tile_index,
            prefix_index=prefix_index,
            locations_by_cleaned_name=locations,
            bounds=manifest.root_box,
        )

    @property
    def tile_size(self) -> int:
        return self.tile_index.tile_size

    def node(self, node_id: int) -> GraphNode:
        return self.graph.node(node_id)

    def nearest_node(self, lon: float, lat: float) -> GraphNode:
        """Closest graph node to (lon, lat), after clamping to the map bounds."""

        lon, lat = self.bounds.clamp_point(lon, lat)
        return self.spatial_index.nearest(lon, lat)

    def shortest_path(self, source_id: int, target_id: int) -> list[int]:
        return shortest_path(self.graph, source_id, target_id)

    def select_tiles(self, viewport: BoundingBox, max_dpp: float) -> list[Tile]:
        clamped = self.bounds.clamp_box(viewport)
        if clamped is None:
            return []
        return self.tile_index.select_tiles(clamped, max_dpp)

    def suggest_prefix(self, text: str) -> list[str]:
        return self.prefix_index.suggest(text)

    def names_by_prefix(self, prefix: str) -> list[str]:
        """Display names whose cleaned form starts with the cleaned prefix."""

        names: set[str] = set()
        for cleaned in self.suggest_prefix(prefix):
            for loc in self.locations_by_cleaned_name.get(cleaned, ()):
                names.add(loc.name)
        return sorted(names)

    def locations_by_name(self, name: str) -> list[Location]:
        return list(self.locations_by_cleaned_name.get(clean_string(name), ()))
