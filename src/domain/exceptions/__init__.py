from .indexing import IndexNotBuiltError, TileGridError, TileInsertionError
from .ingestion import GraphLoadError
from .routing import NodeNotFound, RoutingError
from .tiles import TileFetchError

__all__ = [
    "GraphLoadError",
    "IndexNotBuiltError",
    "NodeNotFound",
    "RoutingError",
    "TileFetchError",
    "TileGridError",
    "TileInsertionError",
]
