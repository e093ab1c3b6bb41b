"""Trip creation and confirmation workflow.

TripLifecycle owns the business rules around a trip's state: which trips may
be created, when a trip or participant flips to confirmed, and who gets an
email at each step. Storage and mail delivery are injected so request
handlers and tests can supply their own.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from core.config import Config
from core.db.repository import TripRepository
from core.errors import (
    ClientInputError,
    ErrorCode,
    InvalidScheduleError,
    NotFoundError,
    NotificationDeliveryError,
)
from core.mail.interface import NotificationGateway
from core.models.notification import DeliveryReceipt, FanOutReport, NotificationKind, Recipient
from core.models.trip import Participant, ParticipantDraft, Trip, TripDraft
from core.services.notification_composer import compose_trip_notification

logger = logging.getLogger(__name__)

MIN_DESTINATION_LENGTH = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _check_email(address: str) -> str:
    try:
        return validate_email(address, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ClientInputError(f"Invalid email address {address!r}: {e}") from e


def _invite_list(owner_email: str, emails_to_invite: list[str]) -> list[str]:
    """Drop duplicates (case-insensitive, first one wins) and the owner's own address."""
    seen = {owner_email.lower()}
    invitees = []
    for email in emails_to_invite:
        key = email.lower()
        if key in seen:
            continue
        seen.add(key)
        invitees.append(email)
    return invitees


class TripLifecycle:
    def __init__(
        self,
        repository: TripRepository,
        gateway: NotificationGateway,
        config: Config,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._gateway = gateway
        self._config = config
        self._clock = clock
        self._fan_outs: list[asyncio.Task[FanOutReport]] = []

    def trip_page_url(self, trip_id: UUID | str) -> str:
        return f"{self._config.front_base_url}/trips/{trip_id}"

    def trip_confirmation_link(self, trip_id: UUID | str) -> str:
        return f"{self._config.api_base_url}/trips/{trip_id}/confirm"

    def participant_confirmation_link(self, participant_id: UUID | str) -> str:
        return f"{self._config.api_base_url}/participants/{participant_id}/confirm"

    async def create_trip(
        self,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        owner_name: str,
        owner_email: str,
        emails_to_invite: list[str],
    ) -> UUID:
        """Create a trip with its owner and invitees, then ask the owner to confirm it.

        Every check runs before anything is written. The owner's email is
        best effort: a failed send is logged and the trip stays created.
        """
        destination = destination.strip()
        if len(destination) < MIN_DESTINATION_LENGTH:
            raise ClientInputError(
                f"Destination must have at least {MIN_DESTINATION_LENGTH} characters.",
                code=ErrorCode.VALIDATION_ERROR,
            )

        starts_at = _as_aware(starts_at)
        ends_at = _as_aware(ends_at)
        if starts_at < self._clock():
            raise InvalidScheduleError("Invalid trip start date.")
        if ends_at < starts_at:
            raise InvalidScheduleError("Invalid trip end date.")

        owner_email = _check_email(owner_email)
        invitees = _invite_list(owner_email, [_check_email(email) for email in emails_to_invite])

        participants = [ParticipantDraft(email=owner_email, name=owner_name, is_owner=True, is_confirmed=True)]
        participants.extend(ParticipantDraft(email=email) for email in invitees)

        trip = await self._repository.create(
            TripDraft(destination=destination, starts_at=starts_at, ends_at=ends_at),
            participants,
        )
        logger.info("Created trip %s to %s with %d invitees", trip.id, trip.destination, len(invitees))

        # The trip is committed: nothing below may turn this into a failed request.
        try:
            await self._notify(
                trip,
                trip.owner,
                self.trip_confirmation_link(trip.id),
                NotificationKind.TRIP_CREATED,
            )
        except NotificationDeliveryError as e:
            logger.warning("Trip %s created but owner notification failed: %s", trip.id, e.message)
        except Exception:
            logger.error("Trip %s created but owner notification failed unexpectedly", trip.id, exc_info=True)

        return trip.id

    async def confirm_trip(self, trip_id: UUID) -> str:
        """Confirm a trip and invite its participants.

        Only the call that actually flips the trip schedules the invitations;
        repeated or concurrent calls are no-ops. The invitations run in the
        background; use ``drain`` to wait for them.
        """
        result = await self._repository.confirm_if_pending(trip_id)
        if result is None:
            raise NotFoundError("Trip not found!", code=ErrorCode.TRIP_NOT_FOUND)

        if result.already_confirmed:
            logger.info("Trip %s already confirmed", trip_id)
            return self.trip_page_url(trip_id)

        task = asyncio.create_task(self._invite_participants(result.trip))
        self._fan_outs.append(task)
        return self.trip_page_url(trip_id)

    async def confirm_participant(self, participant_id: UUID) -> str:
        result = await self._repository.confirm_participant_if_pending(participant_id)
        if result is None:
            raise NotFoundError("Participant not found!", code=ErrorCode.PARTICIPANT_NOT_FOUND)

        if not result.already_confirmed:
            logger.info("Participant %s confirmed for trip %s", participant_id, result.participant.trip_id)
        return self.trip_page_url(result.participant.trip_id)

    async def drain(self) -> list[FanOutReport]:
        """Wait for the invitation fan-outs started since the last drain and return their reports."""
        tasks, self._fan_outs = self._fan_outs, []
        if not tasks:
            return []
        return list(await asyncio.gather(*tasks))

    async def _notify(
        self,
        trip: Trip,
        participant: Participant,
        link: str,
        kind: NotificationKind,
    ) -> DeliveryReceipt:
        recipient = Recipient(address=participant.email, name=participant.name)
        notification = compose_trip_notification(trip, recipient, link, kind, locale=self._config.mail_locale)
        try:
            return await asyncio.wait_for(
                self._gateway.send(recipient, notification.subject, notification.html),
                timeout=self._config.notification_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise NotificationDeliveryError(f"Timed out sending to {participant.email}") from e

    async def _invite_participants(self, trip: Trip) -> FanOutReport:
        invitees = trip.invitees
        results = await asyncio.gather(
            *(
                self._notify(
                    trip,
                    participant,
                    self.participant_confirmation_link(participant.id),
                    NotificationKind.PARTICIPANT_INVITED,
                )
                for participant in invitees
            ),
            return_exceptions=True,
        )

        report = FanOutReport(trip_id=str(trip.id))
        for participant, outcome in zip(invitees, results):
            if isinstance(outcome, DeliveryReceipt):
                report.delivered.append(outcome)
            elif isinstance(outcome, NotificationDeliveryError):
                logger.warning("Invitation to %s for trip %s failed: %s", participant.email, trip.id, outcome.message)
                report.failed[participant.email] = outcome.message
            else:
                logger.error(
                    "Invitation to %s for trip %s failed unexpectedly",
                    participant.email,
                    trip.id,
                    exc_info=outcome,
                )
                report.failed[participant.email] = str(outcome)

        logger.info(
            "Trip %s invitations: %d delivered, %d failed",
            trip.id,
            len(report.delivered),
            len(report.failed),
        )
        return report
