from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Axis(int, Enum):
    """Splitting axis for planar (lon, lat) coordinates."""

    LONGITUDE = 0
    LATITUDE = 1

    @staticmethod
    def for_depth(depth: int) -> "Axis":
        return Axis.LONGITUDE if depth % 2 == 0 else Axis.LATITUDE


class Quadrant(int, Enum):
    NW = 0
    NE = 1
    SW = 2
    SE = 3

    @property
    def digit(self) -> str:
        # Tile ids use 1-based quadrant digits.
        return str(self.value + 1)


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box described by its upper-left and lower-right corners.

    Latitude increases upward, so ``ul_lat >= lr_lat``.
    """

    ul_lon: float
    ul_lat: float
    lr_lon: float
    lr_lat: float

    def __post_init__(self) -> None:
        if self.ul_lon > self.lr_lon:
            raise ValueError(
                f"Invalid box: ul_lon {self.ul_lon} is east of lr_lon {self.lr_lon}"
            )
        if self.ul_lat < self.lr_lat:
            raise ValueError(
                f"Invalid box: ul_lat {self.ul_lat} is south of lr_lat {self.lr_lat}"
            )

    @property
    def width(self) -> float:
        return self.lr_lon - self.ul_lon

    @property
    def height(self) -> float:
        return self.ul_lat - self.lr_lat

    @property
    def mid_lon(self) -> float:
        return (self.ul_lon + self.lr_lon) / 2.0

    @property
    def mid_lat(self) -> float:
        return (self.ul_lat + self.lr_lat) / 2.0

    def contains_box(self, other: BoundingBox) -> bool:
        return (
            self.ul_lon <= other.ul_lon
            and other.lr_lon <= self.lr_lon
            and self.lr_lat <= other.lr_lat
            and other.ul_lat <= self.ul_lat
        )

    def clamp_point(self, lon: float, lat: float) -> tuple[float, float]:
        lon = min(max(lon, self.ul_lon), self.lr_lon)
        lat = min(max(lat, self.lr_lat), self.ul_lat)
        return lon, lat

    def clamp_box(self, other: BoundingBox) -> BoundingBox | None:
        """Intersection of two boxes, or None when they are disjoint."""

        ul_lon = max(self.ul_lon, other.ul_lon)
        lr_lon = min(self.lr_lon, other.lr_lon)
        ul_lat = min(self.ul_lat, other.ul_lat)
        lr_lat = max(self.lr_lat, other.lr_lat)
        if ul_lon > lr_lon or ul_lat < lr_lat:
            return None
        return BoundingBox(ul_lon=ul_lon, ul_lat=ul_lat, lr_lon=lr_lon, lr_lat=lr_lat)

    def split(self, axis: Axis, value: float) -> tuple[BoundingBox, BoundingBox]:
        """Split at ``value`` on ``axis`` into (lower half, upper half)."""

        if axis is Axis.LONGITUDE:
            value = min(max(value, self.ul_lon), self.lr_lon)
            lower = BoundingBox(self.ul_lon, self.ul_lat, value, self.lr_lat)
            upper = BoundingBox(value, self.ul_lat, self.lr_lon, self.lr_lat)
        else:
            value = min(max(value, self.lr_lat), self.ul_lat)
            lower = BoundingBox(self.ul_lon, value, self.lr_lon, self.lr_lat)
            upper = BoundingBox(self.ul_lon, self.ul_lat, self.lr_lon, value)
        return lower, upper

    def quadrant(self, quadrant: Quadrant) -> BoundingBox:
        mid_lon = self.mid_lon
        mid_lat = self.mid_lat
        if quadrant is Quadrant.NW:
            return BoundingBox(self.ul_lon, self.ul_lat, mid_lon, mid_lat)
        if quadrant is Quadrant.NE:
            return BoundingBox(mid_lon, self.ul_lat, self.lr_lon, mid_lat)
        if quadrant is Quadrant.SW:
            return BoundingBox(self.ul_lon, mid_lat, mid_lon, self.lr_lat)
        return BoundingBox(mid_lon, mid_lat, self.lr_lon, self.lr_lat)

    def quadrants(self) -> tuple[BoundingBox, BoundingBox, BoundingBox, BoundingBox]:
        return (
            self.quadrant(Quadrant.NW),
            self.quadrant(Quadrant.NE),
            self.quadrant(Quadrant.SW),
            self.quadrant(Quadrant.SE),
        )

    @staticmethod
    def around(points: list[tuple[float, float]]) -> BoundingBox:
        """Tight box around (lon, lat) pairs."""

        if not points:
            raise ValueError("Cannot bound an empty point set")
        lons = [p[0] for p in points]
        lats = [p[1] for p in points]
        return BoundingBox(
            ul_lon=min(lons), ul_lat=max(lats), lr_lon=max(lons), lr_lat=min(lats)
        )
