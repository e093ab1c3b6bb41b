"""GET /participants/{participantId}/confirm: confirm one participant's attendance."""

import asyncio
from typing import Any
from uuid import UUID

from core.config import Config, get_config
from core.db import PostgresTripRepository
from core.mail import get_notification_gateway
from core.models import ParticipantPathParams
from core.responses import error_response, redirect_response
from core.services import TripLifecycle


async def _confirm_participant(participant_id: UUID, config: Config) -> str:
    async with PostgresTripRepository(config) as repository:
        lifecycle = TripLifecycle(repository, get_notification_gateway(), config)
        return await lifecycle.confirm_participant(participant_id)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    try:
        path_params = event.get("pathParameters") or {}
        params = ParticipantPathParams.model_validate({"participant_id": path_params.get("participantId")})
        location = asyncio.run(_confirm_participant(params.participant_id, get_config()))
    except Exception as e:
        return error_response(e)

    return redirect_response(location)
