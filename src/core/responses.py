"""API Gateway proxy response builders shared by the HTTP handlers."""

import json
import logging
from typing import Any

import pydantic

from core.errors import USER_MESSAGES, ErrorCode, PlannerError

logger = logging.getLogger(__name__)


def json_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def redirect_response(location: str) -> dict[str, Any]:
    return {"statusCode": 302, "headers": {"Location": location}, "body": ""}


def error_response(error: Exception) -> dict[str, Any]:
    """Map an exception raised while serving a request to an HTTP response.

    Client-facing errors carry their own message; everything else exposes only
    the generic user message for its code.
    """
    if isinstance(error, pydantic.ValidationError):
        return json_response(
            400,
            {
                "error": {
                    "code": ErrorCode.INVALID_REQUEST.value,
                    "message": USER_MESSAGES[ErrorCode.INVALID_REQUEST],
                    "details": error.errors(include_url=False, include_context=False, include_input=False),
                }
            },
        )

    if isinstance(error, PlannerError):
        if error.http_status >= 500:
            logger.error("Request failed: %s", error.message)
        message = error.message if error.http_status < 500 else error.user_message
        return json_response(error.http_status, {"error": {"code": error.code.value, "message": message}})

    logger.error("Unhandled error while serving request", exc_info=error)
    return json_response(
        500,
        {"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": USER_MESSAGES[ErrorCode.INTERNAL_ERROR]}},
    )
