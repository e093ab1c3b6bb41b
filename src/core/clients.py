"""Lazy-initialized boto3 clients — reused across warm Lambda invocations."""

from functools import lru_cache
from typing import Any

import boto3

from core.config import get_config


@lru_cache(maxsize=1)
def get_ses_client() -> Any:
    config = get_config()
    return boto3.client("ses", region_name=config.aws_region, endpoint_url=config.ses_endpoint)


@lru_cache(maxsize=1)
def get_secrets_client() -> Any:
    config = get_config()
    return boto3.client("secretsmanager", region_name=config.aws_region)
