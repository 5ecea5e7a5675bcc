from __future__ import annotations

from dataclasses import dataclass

from src.domain.models import Route


@dataclass(slots=True)
class ActiveRouteState:
    """The route drawn onto rasters, owned by the HTTP layer.

    Set by a successful route query, cleared explicitly, overwritten by the
    next success. Concurrent writers race; the last write wins.
    """

    route: Route | None = None

    def set(self, route: Route) -> None:
        self.route = route

    def clear(self) -> None:
        self.route = None
