from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # Transport-level retries and timeouts live here; the store itself never retries.
    return Config(
        retries={"max_attempts": 10, "mode": "adaptive"},
        connect_timeout=2,
        read_timeout=10,
    )


@lru_cache(maxsize=4)
def dynamodb_client(region_name: str, endpoint_url: str | None = None):
    kwargs = {"region_name": region_name, "config": botocore_config()}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.client("dynamodb", **kwargs)
