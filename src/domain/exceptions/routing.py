class RoutingError(Exception):
    """Base exception for route calculation failures."""


class NodeNotFound(RoutingError):
    """Raised when a node id is not part of the road graph."""
