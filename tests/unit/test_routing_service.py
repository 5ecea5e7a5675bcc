from __future__ import annotations

import pytest

from src.app.services.map_database import MapDatabase
from src.app.services.routing_service import RoutingService
from src.domain.models import GeoPoint


def test_find_route_snaps_endpoints_to_nearest_nodes(map_database: MapDatabase) -> None:
    service = RoutingService(database=map_database)

    route = service.find_route(
        start=GeoPoint(lat=0.9, lon=1.05), end=GeoPoint(lat=2.1, lon=2.05)
    )

    assert route.node_ids == (1, 2, 4)
    assert route.total_distance == pytest.approx(2.0)
    assert route.total_distance_m > 0.0
    assert route.points[0] == GeoPoint(lat=1.0, lon=1.0)


def test_find_route_between_components_is_empty(map_database: MapDatabase) -> None:
    service = RoutingService(database=map_database)

    route = service.find_route(
        start=GeoPoint(lat=1.0, lon=1.0), end=GeoPoint(lat=3.5, lon=0.5)
    )

    assert route.is_empty
    assert route.total_distance == 0.0


def test_find_route_same_node_is_empty(map_database: MapDatabase) -> None:
    service = RoutingService(database=map_database)

    route = service.find_route(
        start=GeoPoint(lat=1.0, lon=3.0), end=GeoPoint(lat=1.01, lon=3.01)
    )

    assert route.is_empty
