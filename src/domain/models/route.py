from __future__ import annotations

import math
from dataclasses import dataclass, field

from src.domain.algorithms.geo_utils import haversine_distance_m

from .geo import GeoPoint
from .graph import GraphNode


@dataclass(frozen=True, slots=True)
class Route:
    """A path through the road graph, source first."""

    nodes: tuple[GraphNode, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def node_ids(self) -> tuple[int, ...]:
        return tuple(n.id for n in self.nodes)

    @property
    def points(self) -> tuple[GeoPoint, ...]:
        return tuple(GeoPoint(lat=n.lat, lon=n.lon) for n in self.nodes)

    @property
    def total_distance(self) -> float:
        """Planar length in coordinate units, the metric the search minimises."""

        return float(
            sum(
                math.hypot(b.lon - a.lon, b.lat - a.lat)
                for a, b in zip(self.nodes, self.nodes[1:])
            )
        )

    @property
    def total_distance_m(self) -> float:
        points = self.points
        return float(sum(haversine_distance_m(a, b) for a, b in zip(points, points[1:])))
