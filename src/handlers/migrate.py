"""Migration Lambda handler."""

import logging
from typing import Any

from core.services.migration import run_migrations

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    result = run_migrations()
    logger.info("Migration handler finished with status %s", result["status"])
    return {"statusCode": 200, "body": result["output"]}
