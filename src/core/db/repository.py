from abc import ABC, abstractmethod
from uuid import UUID

from core.models.trip import (
    Participant,
    ParticipantConfirmation,
    ParticipantDraft,
    Trip,
    TripConfirmation,
    TripDraft,
)


class TripRepository(ABC):
    """Storage contract for trips and their participants.

    ``create`` must insert the trip and every participant in one transaction.
    The ``*_if_pending`` methods must be single conditional writes: when two
    callers race, exactly one observes ``already_confirmed=False``.
    Missing records are reported as ``None``.
    """

    @abstractmethod
    async def create(self, trip: TripDraft, participants: list[ParticipantDraft]) -> Trip: ...

    @abstractmethod
    async def find_by_id(self, trip_id: UUID) -> Trip | None: ...

    @abstractmethod
    async def confirm_if_pending(self, trip_id: UUID) -> TripConfirmation | None: ...

    @abstractmethod
    async def confirm_participant_if_pending(self, participant_id: UUID) -> ParticipantConfirmation | None: ...
