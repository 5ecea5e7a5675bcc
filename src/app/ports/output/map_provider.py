from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import RoadGraph


class IMapProvider(ABC):
    """Port for obtaining the ingested road network."""

    @abstractmethod
    def load_road_graph(self) -> RoadGraph:
        """Return a freshly built, still mutable road graph."""
