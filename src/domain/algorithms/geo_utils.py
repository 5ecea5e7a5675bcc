from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.models.geo import BoundingBox


class HasLonLat(Protocol):
    @property
    def lon(self) -> float: ...

    @property
    def lat(self) -> float: ...


def haversine_distance_m(a: HasLonLat, b: HasLonLat) -> float:
    """Great-circle distance in meters."""

    r = 6371000.0
    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * r * math.asin(math.sqrt(s))


def distance_squared(a: HasLonLat, b: HasLonLat) -> float:
    """Squared planar distance, treating (lon, lat) as (x, y)."""

    d_lon = a.lon - b.lon
    d_lat = a.lat - b.lat
    return d_lon * d_lon + d_lat * d_lat


def euclidean_distance(a: HasLonLat, b: HasLonLat) -> float:
    return math.sqrt(distance_squared(a, b))


def distance_squared_point_to_box(point: HasLonLat, box: BoundingBox) -> float:
    """Squared planar distance from a point to the closest point of a box (0 inside)."""

    dx = 0.0
    dy = 0.0

    if point.lon < box.ul_lon:
        dx = point.lon - box.ul_lon
    elif point.lon > box.lr_lon:
        dx = point.lon - box.lr_lon

    if point.lat < box.lr_lat:
        dy = point.lat - box.lr_lat
    elif point.lat > box.ul_lat:
        dy = point.lat - box.ul_lat

    return dx * dx + dy * dy


def boxes_intersect(a: BoundingBox, b: BoundingBox) -> bool:
    """True unless one box lies strictly beside, above or below the other.

    Touching edges count as intersecting.
    """

    if a.ul_lon > b.lr_lon or b.ul_lon > a.lr_lon:
        return False
    if a.ul_lat < b.lr_lat or b.ul_lat < a.lr_lat:
        return False
    return True
