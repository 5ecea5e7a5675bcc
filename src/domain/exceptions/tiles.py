class TileFetchError(Exception):
    """Raised by tile stores when a tile image cannot be fetched."""
