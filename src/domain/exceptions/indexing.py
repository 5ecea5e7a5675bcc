class IndexNotBuiltError(RuntimeError):
    """Raised when querying a spatial index that holds no points."""


class TileInsertionError(ValueError):
    """Raised when a tile box does not fit exactly one quadrant of the tile index."""


class TileGridError(RuntimeError):
    """Raised when selected tiles do not form a complete rectangular grid."""
