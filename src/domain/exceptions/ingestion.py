class GraphLoadError(RuntimeError):
    """Raised when map data cannot be turned into a road graph."""
