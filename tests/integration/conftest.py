from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from src.adapters.aws import AwsRuntimeConfig, s3_client


@pytest.fixture(scope="session", autouse=True)
def localstack_env() -> None:
    """Point boto3 at LocalStack S3 unless the environment says otherwise."""

    os.environ.setdefault("ENDPOINT_URL", "http://localhost:4566")
    os.environ.setdefault("AWS_REGION", "eu-west-1")
    # boto3 signs requests even for LocalStack.
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")


@pytest.fixture(scope="session")
def require_localstack(localstack_env: None) -> str:
    endpoint_url = AwsRuntimeConfig.from_env().endpoint_url or "http://localhost:4566"
    try:
        healthy = httpx.get(f"{endpoint_url.rstrip('/')}/_localstack/health", timeout=1.5)
        reachable = healthy.is_success
    except httpx.HTTPError:
        reachable = False

    if not reachable:
        msg = f"LocalStack not reachable at {endpoint_url}"
        # CI starts LocalStack, so a missing instance there is a failure.
        if os.getenv("CI") or os.getenv("REQUIRE_LOCALSTACK"):
            pytest.fail(msg, pytrace=False)
        pytest.skip(msg)
    return endpoint_url


@pytest.fixture
def s3_bucket(require_localstack: str) -> Callable[[str], str]:
    """Create (or reuse) a LocalStack bucket and return its name."""

    s3 = s3_client()

    def _create(name: str) -> str:
        try:
            s3.create_bucket(
                Bucket=name,
                CreateBucketConfiguration={
                    "LocationConstraint": os.environ["AWS_REGION"]
                },
            )
        except s3.exceptions.BucketAlreadyOwnedByYou:
            pass
        return name

    return _create
