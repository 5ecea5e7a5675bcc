from __future__ import annotations

from dataclasses import dataclass, field

from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.aws import S3Client, S3Location, s3_client
from src.app.ports.output import ITileStore
from src.domain.exceptions import TileFetchError


@dataclass(slots=True)
class S3TileStore(ITileStore):
    """Tile store backed by S3 objects `<prefix>/<tile_id>.png`.

    One boto3 client is created on first use and reused for every tile.

    Env vars:
      - TILE_BUCKET (required)
      - TILE_PREFIX (default: tiles)
      - ENDPOINT_URL (preferred for LocalStack)
    """

    bucket: str | None = None
    prefix: str | None = None
    _client: S3Client | None = field(default=None, init=False, repr=False)

    def _location(self) -> S3Location:
        return S3Location.resolve(
            self.bucket,
            self.prefix,
            bucket_env="TILE_BUCKET",
            prefix_env="TILE_PREFIX",
            default_prefix="tiles",
        )

    def _s3(self) -> S3Client:
        if self._client is None:
            self._client = s3_client()
        return self._client

    def get_tile(self, tile_id: str) -> bytes:
        location = self._location()
        name = f"{tile_id}.png"
        key = location.key(name)
        try:
            obj = self._s3().get_object(Bucket=location.bucket, Key=key)
            return obj["Body"].read()
        except (ClientError, BotoCoreError) as exc:
            raise TileFetchError(f"Cannot fetch {location.uri(name)}: {exc}") from exc
