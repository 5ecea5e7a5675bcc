from __future__ import annotations

from abc import ABC, abstractmethod


class ITileStore(ABC):
    """Port for fetching pre-rendered tile images by tile id."""

    @abstractmethod
    def get_tile(self, tile_id: str) -> bytes:
        """Return the encoded image bytes; raise TileFetchError on failure."""

    def close(self) -> None:
        """Release pooled connections, if any."""
