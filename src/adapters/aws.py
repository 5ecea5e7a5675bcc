from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import boto3
from botocore.client import BaseClient

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = BaseClient  # type: ignore[misc,assignment]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class AwsRuntimeConfig:
    region: str
    endpoint_url: str | None

    @staticmethod
    def from_env() -> "AwsRuntimeConfig":
        """Read the boto3 target from the environment.

        ENDPOINT_URL wins; otherwise USE_LOCALSTACK points at
        LOCALSTACK_ENDPOINT_URL (default http://localhost:4566); otherwise
        real AWS.
        """

        endpoint_url = (os.getenv("ENDPOINT_URL") or "").strip() or None
        if endpoint_url is None and _env_bool("USE_LOCALSTACK"):
            endpoint_url = os.getenv("LOCALSTACK_ENDPOINT_URL", "http://localhost:4566")

        return AwsRuntimeConfig(
            region=os.getenv("AWS_REGION", "eu-west-1"),
            endpoint_url=endpoint_url,
        )


@dataclass(frozen=True, slots=True)
class S3Location:
    """A bucket and key prefix that objects are addressed under."""

    bucket: str
    prefix: str = ""

    @staticmethod
    def resolve(
        bucket: str | None,
        prefix: str | None,
        *,
        bucket_env: str,
        prefix_env: str,
        default_prefix: str,
    ) -> "S3Location":
        """Explicit values first, then env vars; a bucket is required."""

        resolved = bucket or os.getenv(bucket_env)
        if not resolved:
            raise RuntimeError(f"Missing {bucket_env}")
        resolved_prefix = prefix or os.getenv(prefix_env) or default_prefix
        return S3Location(bucket=resolved, prefix=resolved_prefix.strip("/"))

    def key(self, name: str) -> str:
        return f"{self.prefix}/{name}" if self.prefix else name

    def uri(self, name: str) -> str:
        return f"s3://{self.bucket}/{self.key(name)}"


def s3_client(cfg: AwsRuntimeConfig | None = None) -> S3Client:
    cfg = cfg or AwsRuntimeConfig.from_env()
    session = boto3.session.Session(region_name=cfg.region)
    return session.client("s3", endpoint_url=cfg.endpoint_url)
