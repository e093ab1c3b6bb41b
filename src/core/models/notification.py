"""Pydantic models for outgoing notifications and their delivery outcomes."""

from enum import Enum

from pydantic import BaseModel

SUPPORTED_LOCALES = ("pt-BR", "en-US")


class NotificationKind(str, Enum):
    TRIP_CREATED = "trip_created"
    PARTICIPANT_INVITED = "participant_invited"


class Recipient(BaseModel):
    address: str
    name: str | None = None


class Notification(BaseModel):
    subject: str
    html: str


class DeliveryReceipt(BaseModel):
    recipient: str
    message_id: str


class FanOutReport(BaseModel):
    trip_id: str
    delivered: list[DeliveryReceipt] = []
    failed: dict[str, str] = {}

    @property
    def complete(self) -> bool:
        return not self.failed
