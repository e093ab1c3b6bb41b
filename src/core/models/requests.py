"""Pydantic models for inbound API requests."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class CreateTripRequest(BaseModel):
    destination: str = Field(..., min_length=3)
    starts_at: datetime
    ends_at: datetime
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: list[EmailStr] = []


class TripPathParams(BaseModel):
    trip_id: UUID


class ParticipantPathParams(BaseModel):
    participant_id: UUID
