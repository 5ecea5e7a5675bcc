from __future__ import annotations

import os
from dataclasses import dataclass, field

import httpx

from src.app.ports.output import ITileStore
from src.domain.exceptions import TileFetchError


@dataclass(slots=True)
class HttpTileStore(ITileStore):
    """Fetches tiles from a static file server as `<base_url>/<tile_id>.png`.

    Keeps one pooled httpx.Client for all requests; call ``close`` on shutdown.

    Env vars:
      - TILE_BASE_URL: server root, e.g. https://tiles.example.org/berkeley
      - TILE_TIMEOUT_S: request timeout (default 5)
    """

    base_url: str | None = None
    timeout_s: float = 5.0
    transport: httpx.BaseTransport | None = None
    _client: httpx.Client | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("TILE_BASE_URL")
        if os.getenv("TILE_TIMEOUT_S"):
            self.timeout_s = float(os.environ["TILE_TIMEOUT_S"])

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout_s, transport=self.transport)
        return self._client

    def get_tile(self, tile_id: str) -> bytes:
        if not self.base_url:
            raise RuntimeError("Missing TILE_BASE_URL")

        url = f"{self.base_url.rstrip('/')}/{tile_id}.png"
        try:
            resp = self._http().get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TileFetchError(f"Cannot fetch {url}: {exc}") from exc
        return resp.content

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
