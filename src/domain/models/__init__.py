from .geo import Axis, BoundingBox, GeoPoint, Quadrant
from .graph import GraphNode, RoadGraph
from .location import Location
from .raster import RasterResult
from .route import Route
from .tiles import Tile, TileManifest

__all__ = [
    "Axis",
    "BoundingBox",
    "GeoPoint",
    "GraphNode",
    "Location",
    "Quadrant",
    "RasterResult",
    "RoadGraph",
    "Route",
    "Tile",
    "TileManifest",
]
