"""Pydantic models for trips and their participants."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Participant(BaseModel):
    id: UUID
    trip_id: UUID
    name: str | None = None
    email: str
    is_owner: bool = False
    is_confirmed: bool = False
    created_at: datetime | None = None


class Trip(BaseModel):
    id: UUID
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool = False
    created_at: datetime | None = None
    participants: list[Participant] = []

    @property
    def owner(self) -> Participant:
        for participant in self.participants:
            if participant.is_owner:
                return participant
        raise ValueError(f"Trip {self.id} has no owner")

    @property
    def invitees(self) -> list[Participant]:
        return [p for p in self.participants if not p.is_owner]


class TripDraft(BaseModel):
    """Trip fields supplied at creation; the repository assigns the id."""

    destination: str = Field(..., min_length=3)
    starts_at: datetime
    ends_at: datetime


class ParticipantDraft(BaseModel):
    email: str
    name: str | None = None
    is_owner: bool = False
    is_confirmed: bool = False


class TripConfirmation(BaseModel):
    """Outcome of a conditional confirm: the trip as stored, and whether it was already confirmed."""

    already_confirmed: bool
    trip: Trip


class ParticipantConfirmation(BaseModel):
    already_confirmed: bool
    participant: Participant
