"""Integration tests for PostgresTripRepository and the trips schema constraints."""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import psycopg.errors
import pytest

from core.config import get_config
from core.db import PostgresTripRepository
from core.errors import StorageError
from core.models import ParticipantDraft, TripDraft

# ── Helpers ───────────────────────────────────────────────────────────────────


def _draft(destination: str = "Florianópolis") -> TripDraft:
    starts_at = datetime.now(timezone.utc) + timedelta(days=1)
    return TripDraft(destination=destination, starts_at=starts_at, ends_at=starts_at + timedelta(days=5))


def _participants() -> list[ParticipantDraft]:
    return [
        ParticipantDraft(email="ana@x.com", name="Ana", is_owner=True, is_confirmed=True),
        ParticipantDraft(email="bob@x.com"),
        ParticipantDraft(email="cid@x.com"),
    ]


@pytest.fixture
def cleanup_trips(pg_connection):
    created: list[uuid.UUID] = []
    yield created
    with pg_connection.cursor() as cur:
        for trip_id in created:
            cur.execute("DELETE FROM trips WHERE id = %s", (trip_id,))
    pg_connection.commit()


# ── Repository tests ──────────────────────────────────────────────────────────


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_and_find_trip(cleanup_trips):
    async with PostgresTripRepository(get_config()) as repo:
        trip = await repo.create(_draft(), _participants())
        cleanup_trips.append(trip.id)

        found = await repo.find_by_id(trip.id)

    assert found.destination == "Florianópolis"
    assert found.is_confirmed is False
    assert [p.email for p in found.participants] == ["ana@x.com", "bob@x.com", "cid@x.com"]
    assert found.owner.is_confirmed is True
    assert all(p.trip_id == trip.id for p in found.participants)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_find_missing_trip_returns_none():
    async with PostgresTripRepository(get_config()) as repo:
        assert await repo.find_by_id(uuid.uuid4()) is None
        assert await repo.confirm_if_pending(uuid.uuid4()) is None
        assert await repo.confirm_participant_if_pending(uuid.uuid4()) is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_confirm_if_pending_flips_once(cleanup_trips):
    async with PostgresTripRepository(get_config()) as repo:
        trip = await repo.create(_draft(), _participants())
        cleanup_trips.append(trip.id)

        first = await repo.confirm_if_pending(trip.id)
        second = await repo.confirm_if_pending(trip.id)

    assert first.already_confirmed is False
    assert second.already_confirmed is True
    assert first.trip.is_confirmed and second.trip.is_confirmed
    assert len(first.trip.participants) == 3


@pytest.mark.integration
@pytest.mark.asyncio
async def test_concurrent_confirms_flip_once(cleanup_trips):
    config = get_config()
    async with PostgresTripRepository(config) as repo:
        trip = await repo.create(_draft(), _participants())
        cleanup_trips.append(trip.id)

    async with PostgresTripRepository(config) as a, PostgresTripRepository(config) as b:
        results = await asyncio.gather(a.confirm_if_pending(trip.id), b.confirm_if_pending(trip.id))

    assert sorted(r.already_confirmed for r in results) == [False, True]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_confirm_participant_if_pending(cleanup_trips):
    async with PostgresTripRepository(get_config()) as repo:
        trip = await repo.create(_draft(), _participants())
        cleanup_trips.append(trip.id)
        bob = trip.invitees[0]

        first = await repo.confirm_participant_if_pending(bob.id)
        second = await repo.confirm_participant_if_pending(bob.id)
        stored = await repo.find_by_id(trip.id)

    assert first.already_confirmed is False
    assert second.already_confirmed is True
    assert first.participant.trip_id == trip.id
    assert [p.is_confirmed for p in stored.participants] == [True, True, False]
    assert stored.is_confirmed is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_is_atomic(pg_connection):
    participants = _participants() + [ParticipantDraft(email="eve@x.com", is_owner=True)]

    async with PostgresTripRepository(get_config()) as repo:
        with pytest.raises(StorageError):
            await repo.create(_draft("Atomicidade"), participants)

    with pg_connection.cursor() as cur:
        cur.execute("SELECT count(*) FROM trips WHERE destination = 'Atomicidade'")
        assert cur.fetchone()[0] == 0


# ── Schema constraint tests ───────────────────────────────────────────────────


@pytest.mark.integration
def test_trip_schedule_check(pg_connection):
    with pg_connection.cursor() as cur:
        with pytest.raises(psycopg.errors.CheckViolation):
            cur.execute(
                "INSERT INTO trips (destination, starts_at, ends_at) VALUES ('Lisboa', NOW(), NOW() - INTERVAL '1 day')"
            )
    pg_connection.rollback()


@pytest.mark.integration
def test_participants_fk_constraint(pg_connection):
    with pg_connection.cursor() as cur:
        with pytest.raises(psycopg.errors.ForeignKeyViolation):
            cur.execute(
                "INSERT INTO participants (trip_id, email) VALUES (%s, 'bob@x.com')",
                (uuid.uuid4(),),
            )
    pg_connection.rollback()


@pytest.mark.integration
def test_cascade_delete(pg_connection):
    with pg_connection.cursor() as cur:
        cur.execute(
            "INSERT INTO trips (destination, starts_at, ends_at) VALUES ('Lisboa', NOW(), NOW()) RETURNING id"
        )
        trip_id = cur.fetchone()[0]
        cur.execute("INSERT INTO participants (trip_id, email) VALUES (%s, 'bob@x.com')", (trip_id,))
        cur.execute("DELETE FROM trips WHERE id = %s", (trip_id,))
        cur.execute("SELECT count(*) FROM participants WHERE trip_id = %s", (trip_id,))
        assert cur.fetchone()[0] == 0
    pg_connection.rollback()
