from __future__ import annotations

import pytest

from src.app.services.map_database import MapDatabase
from src.domain.models import BoundingBox, GraphNode, RoadGraph, TileManifest

ROOT_BOX = BoundingBox(ul_lon=0.0, ul_lat=4.0, lr_lon=4.0, lr_lat=0.0)
TILE_SIZE = 64


def small_road_graph() -> RoadGraph:
    """Two road components plus one named node that is not on any road.

        7---6          (lat 3.5)
          4            (lat 2)
          |
      1---2---3        (lat 1)
    """

    g = RoadGraph()
    for node in (
        GraphNode(id=1, lon=1.0, lat=1.0, name="Main Street", is_routable=True),
        GraphNode(id=2, lon=2.0, lat=1.0, is_routable=True),
        GraphNode(id=3, lon=3.0, lat=1.0, name="Market Square", is_routable=True),
        GraphNode(id=4, lon=2.0, lat=2.0, name="Main Avenue", is_routable=True),
        GraphNode(id=5, lon=3.5, lat=3.5, name="Lonely Tower"),
        GraphNode(id=6, lon=1.0, lat=3.5, is_routable=True),
        GraphNode(id=7, lon=0.5, lat=3.5, is_routable=True),
    ):
        g.add_node(node)
    for u, v in ((1, 2), (2, 3), (2, 4), (6, 7)):
        g.add_edge(u, v)
    return g


@pytest.fixture
def manifest() -> TileManifest:
    return TileManifest(root_box=ROOT_BOX, tile_size=TILE_SIZE, max_depth=2)


@pytest.fixture
def map_database(manifest: TileManifest) -> MapDatabase:
    return MapDatabase.build(small_road_graph(), manifest)
