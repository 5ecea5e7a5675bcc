from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.services.map_database import MapDatabase
from src.domain.models import GeoPoint, Route

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for route calculation.

    Snaps both endpoints to their nearest graph nodes, then runs A* over the
    read-only road graph. An empty Route means "no route".
    """

    database: MapDatabase

    def find_route(self, *, start: GeoPoint, end: GeoPoint) -> Route:
        source = self.database.nearest_node(start.lon, start.lat)
        target = self.database.nearest_node(end.lon, end.lat)

        node_ids = self.database.shortest_path(source.id, target.id)
        if not node_ids:
            logger.info("No route between nodes %s and %s", source.id, target.id)
            return Route()

        return Route(nodes=tuple(self.database.node(node_id) for node_id in node_ids))
