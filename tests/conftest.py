"""Shared test fixtures for Plann.er."""

import asyncio
import os
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from core.config import Config  # noqa: E402
from core.db.repository import TripRepository  # noqa: E402
from core.errors import NotificationDeliveryError  # noqa: E402
from core.mail.interface import NotificationGateway  # noqa: E402
from core.models import (  # noqa: E402
    DeliveryReceipt,
    Participant,
    ParticipantConfirmation,
    Recipient,
    Trip,
    TripConfirmation,
)


class InMemoryTripRepository(TripRepository):
    """Dict-backed TripRepository with lock-guarded conditional confirms."""

    def __init__(self):
        self.trips: dict[uuid.UUID, Trip] = {}
        self.create_calls = 0
        self._lock = asyncio.Lock()

    async def create(self, trip, participants):
        self.create_calls += 1
        trip_id = uuid.uuid4()
        created_at = datetime.now(timezone.utc)
        record = Trip(
            id=trip_id,
            destination=trip.destination,
            starts_at=trip.starts_at,
            ends_at=trip.ends_at,
            created_at=created_at,
            participants=[
                Participant(id=uuid.uuid4(), trip_id=trip_id, created_at=created_at, **draft.model_dump())
                for draft in participants
            ],
        )
        self.trips[trip_id] = record
        return record.model_copy(deep=True)

    async def find_by_id(self, trip_id):
        trip = self.trips.get(trip_id)
        return trip.model_copy(deep=True) if trip else None

    async def confirm_if_pending(self, trip_id):
        async with self._lock:
            trip = self.trips.get(trip_id)
            if trip is None:
                return None
            # let a concurrent caller queue up on the lock
            await asyncio.sleep(0)
            already_confirmed = trip.is_confirmed
            trip.is_confirmed = True
            return TripConfirmation(already_confirmed=already_confirmed, trip=trip.model_copy(deep=True))

    def _participant(self, participant_id):
        for trip in self.trips.values():
            for participant in trip.participants:
                if participant.id == participant_id:
                    return participant
        return None

    async def confirm_participant_if_pending(self, participant_id):
        async with self._lock:
            participant = self._participant(participant_id)
            if participant is None:
                return None
            already_confirmed = participant.is_confirmed
            participant.is_confirmed = True
            return ParticipantConfirmation(already_confirmed=already_confirmed, participant=participant.model_copy())

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return None


class RecordingGateway(NotificationGateway):
    """Records every send.

    Addresses in ``fail_for`` raise NotificationDeliveryError, addresses in
    ``break_for`` raise an unwrapped ConnectionResetError, and addresses in
    ``hang_for`` never return.
    """

    def __init__(self, fail_for=(), hang_for=(), break_for=()):
        self.sent: list[tuple[Recipient, str, str]] = []
        self.fail_for = set(fail_for)
        self.hang_for = set(hang_for)
        self.break_for = set(break_for)

    async def send(self, recipient, subject, html):
        await asyncio.sleep(0)
        if recipient.address in self.hang_for:
            await asyncio.sleep(3600)
        if recipient.address in self.fail_for:
            raise NotificationDeliveryError(f"mailbox unavailable: {recipient.address}")
        if recipient.address in self.break_for:
            raise ConnectionResetError(f"connection reset sending to {recipient.address}")
        self.sent.append((recipient, subject, html))
        return DeliveryReceipt(recipient=recipient.address, message_id=f"msg-{len(self.sent)}")

    @property
    def recipients(self) -> list[str]:
        return [recipient.address for recipient, _, _ in self.sent]


@pytest.fixture
def config():
    return Config(
        aws_region="us-east-1",
        db_host="localhost",
        db_port=5432,
        db_name="planner",
        db_user="planner",
        db_password="localdev",
        front_base_url="http://front.example.com",
        api_base_url="http://api.example.com",
        mail_sender_name="Equipe Plann.er",
        mail_sender_address="oi@planner.com.br",
        notification_timeout_seconds=0.2,
        environment="test",
    )


@pytest.fixture
def repository():
    return InMemoryTripRepository()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def gateway_factory():
    return RecordingGateway


# PostgreSQL fixtures
@pytest.fixture
def pg_connection():
    """Provide a PostgreSQL connection for integration tests."""
    import psycopg
    from core.config import get_config

    config = get_config()
    conn_str = (
        f"host={config.db_host} port={config.db_port} "
        f"dbname={config.db_name} user={config.db_user} "
        f"password={config.db_password}"
    )

    conn = psycopg.connect(conn_str)
    yield conn

    # Rollback any uncommitted changes
    conn.rollback()
    conn.close()
