from __future__ import annotations

import gzip
import logging
import os
import pickle
from dataclasses import dataclass

from botocore.exceptions import ClientError

from src.adapters.aws import S3Location, s3_client
from src.app.ports.output import IMapProvider
from src.domain.models import RoadGraph

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class S3CachedMapAdapter(IMapProvider):
    """Caches the ingested road graph in S3.

    This is an adapter-level decorator around another IMapProvider, so a
    large OSM extract is parsed once and later restarts download the result.

    Env vars:
      - ROAD_GRAPH_BUCKET (required)
      - ROAD_GRAPH_PREFIX (default: road-graphs)
      - ROAD_GRAPH_CACHE_KEY (default: default)
      - ENDPOINT_URL (preferred for LocalStack)

    Notes:
      - pickle loading is only safe for trusted buckets.
    """

    upstream: IMapProvider
    bucket: str | None = None
    prefix: str | None = None
    cache_key: str | None = None

    def _location(self) -> S3Location:
        return S3Location.resolve(
            self.bucket,
            self.prefix,
            bucket_env="ROAD_GRAPH_BUCKET",
            prefix_env="ROAD_GRAPH_PREFIX",
            default_prefix="road-graphs",
        )

    def _name(self) -> str:
        name = (self.cache_key or os.getenv("ROAD_GRAPH_CACHE_KEY") or "default").strip()
        return f"{name}.pkl.gz"

    def load_road_graph(self) -> RoadGraph:
        s3 = s3_client()
        location = self._location()
        name = self._name()
        bucket, key, uri = location.bucket, location.key(name), location.uri(name)

        try:
            obj = s3.get_object(Bucket=bucket, Key=key)
            graph = pickle.loads(gzip.decompress(obj["Body"].read()))
            if isinstance(graph, RoadGraph):
                logger.info("Loaded cached road graph %s", uri)
                return graph
            logger.warning("Ignoring unexpected cache object at %s", uri)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code not in {"NoSuchKey", "404", "NoSuchBucket"}:
                raise

        graph = self.upstream.load_road_graph()
        payload = gzip.compress(pickle.dumps(graph))
        s3.put_object(Bucket=bucket, Key=key, Body=payload)
        logger.info("Stored road graph cache at %s", uri)
        return graph
