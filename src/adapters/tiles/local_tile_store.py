from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import ITileStore
from src.domain.exceptions import TileFetchError


@dataclass(slots=True)
class LocalTileStore(ITileStore):
    """Reads tiles from a directory of `<tile_id>.png` files.

    Env vars:
      - TILE_ROOT: tile directory (default img/)
    """

    base_path: str | Path | None = None
    suffix: str = ".png"

    def _base(self) -> Path:
        return Path(self.base_path or os.getenv("TILE_ROOT") or "img/")

    def get_tile(self, tile_id: str) -> bytes:
        path = self._base() / f"{tile_id}{self.suffix}"
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TileFetchError(f"Cannot read tile {tile_id} from {path}: {exc}") from exc
