"""POST /trips: create a trip and ask its owner to confirm it."""

import asyncio
from typing import Any

from core.config import Config, get_config
from core.db import PostgresTripRepository
from core.mail import get_notification_gateway
from core.models import CreateTripRequest
from core.responses import error_response, json_response
from core.services import TripLifecycle


async def _create_trip(request: CreateTripRequest, config: Config) -> str:
    async with PostgresTripRepository(config) as repository:
        lifecycle = TripLifecycle(repository, get_notification_gateway(), config)
        trip_id = await lifecycle.create_trip(
            destination=request.destination,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
            owner_name=request.owner_name,
            owner_email=request.owner_email,
            emails_to_invite=list(request.emails_to_invite),
        )
    return str(trip_id)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        request = CreateTripRequest.model_validate_json(event.get("body") or "{}")
        trip_id = asyncio.run(_create_trip(request, get_config()))
    except Exception as e:
        return error_response(e)

    return json_response(201, {"tripId": trip_id})
