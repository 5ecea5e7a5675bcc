from .map_provider import IMapProvider
from .tile_store import ITileStore

__all__ = [
    "IMapProvider",
    "ITileStore",
]
