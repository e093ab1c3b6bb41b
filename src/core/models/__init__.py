"""
Pydantic models for Plann.er.
"""

from core.models.notification import DeliveryReceipt, FanOutReport, Notification, NotificationKind, Recipient
from core.models.requests import CreateTripRequest, ParticipantPathParams, TripPathParams
from core.models.trip import (
    Participant,
    ParticipantConfirmation,
    ParticipantDraft,
    Trip,
    TripConfirmation,
    TripDraft,
)

__all__ = [
    "CreateTripRequest",
    "DeliveryReceipt",
    "FanOutReport",
    "Notification",
    "NotificationKind",
    "Participant",
    "ParticipantConfirmation",
    "ParticipantDraft",
    "ParticipantPathParams",
    "Recipient",
    "Trip",
    "TripConfirmation",
    "TripDraft",
    "TripPathParams",
]
