"""GET /trips/{tripId}/confirm: confirm a trip and invite its participants."""

import asyncio
import logging
from typing import Any
from uuid import UUID

from core.config import Config, get_config
from core.db import PostgresTripRepository
from core.mail import get_notification_gateway
from core.models import TripPathParams
from core.responses import error_response, redirect_response
from core.services import TripLifecycle

logger = logging.getLogger(__name__)


async def _confirm_trip(trip_id: UUID, config: Config) -> str:
    async with PostgresTripRepository(config) as repository:
        lifecycle = TripLifecycle(repository, get_notification_gateway(), config)
        location = await lifecycle.confirm_trip(trip_id)

    # Lambda freezes the runtime once the handler returns, so the
    # invitations have to finish inside this invocation.
    for report in await lifecycle.drain():
        if not report.complete:
            logger.warning("Trip %s: invitations failed for %s", report.trip_id, sorted(report.failed))
    return location


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        path_params = event.get("pathParameters") or {}
        params = TripPathParams.model_validate({"trip_id": path_params.get("tripId")})
        location = asyncio.run(_confirm_trip(params.trip_id, get_config()))
    except Exception as e:
        return error_response(e)

    return redirect_response(location)
