"""PostgreSQL trip repository — connection management and atomic trip writes."""

import json
import logging
from typing import Any
from uuid import UUID

import psycopg
from psycopg.rows import dict_row

from core.clients import get_secrets_client
from core.config import Config
from core.db.repository import TripRepository
from core.errors import PlannerError, StorageError
from core.models.trip import (
    Participant,
    ParticipantConfirmation,
    ParticipantDraft,
    Trip,
    TripConfirmation,
    TripDraft,
)

logger = logging.getLogger(__name__)

_TRIP_COLUMNS = "id, destination, starts_at, ends_at, is_confirmed, created_at"
_PARTICIPANT_COLUMNS = "id, trip_id, name, email, is_owner, is_confirmed, created_at"

_INSERT_TRIP_SQL = f"""
    INSERT INTO trips (destination, starts_at, ends_at)
    VALUES (%s, %s, %s)
    RETURNING {_TRIP_COLUMNS}
"""

_INSERT_PARTICIPANT_SQL = f"""
    INSERT INTO participants (trip_id, name, email, is_owner, is_confirmed)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING {_PARTICIPANT_COLUMNS}
"""

_SELECT_TRIP_SQL = f"SELECT {_TRIP_COLUMNS} FROM trips WHERE id = %s"

_SELECT_PARTICIPANTS_SQL = f"""
    SELECT {_PARTICIPANT_COLUMNS} FROM participants
    WHERE trip_id = %s
    ORDER BY created_at, id
"""

# The UPDATE only matches a pending row, so concurrent callers serialize on the
# row lock and only one of them sees the flip.
_CONFIRM_TRIP_SQL = """
    WITH flipped AS (
        UPDATE trips SET is_confirmed = TRUE
        WHERE id = %(id)s AND is_confirmed = FALSE
        RETURNING id
    )
    SELECT t.id, t.destination, t.starts_at, t.ends_at, t.created_at,
           NOT EXISTS (SELECT 1 FROM flipped) AS already_confirmed
    FROM trips t
    WHERE t.id = %(id)s
"""

_CONFIRM_PARTICIPANT_SQL = """
    WITH flipped AS (
        UPDATE participants SET is_confirmed = TRUE
        WHERE id = %(id)s AND is_confirmed = FALSE
        RETURNING id
    )
    SELECT p.id, p.trip_id, p.name, p.email, p.is_owner, p.created_at,
           NOT EXISTS (SELECT 1 FROM flipped) AS already_confirmed
    FROM participants p
    WHERE p.id = %(id)s
"""


class PostgresTripRepository(TripRepository):
    def __init__(self, config: Config) -> None:
        self._config = config
        self._conn: psycopg.AsyncConnection | None = None
        self._secret_cache: dict[str, Any] | None = None

    def _get_credentials(self) -> dict[str, Any]:
        if self._config.db_secret_arn:
            if self._secret_cache is None:
                secret = get_secrets_client().get_secret_value(SecretId=self._config.db_secret_arn)
                self._secret_cache = json.loads(secret["SecretString"])
            return self._secret_cache
        return {
            "host": self._config.db_host,
            "port": str(self._config.db_port),
            "dbname": self._config.db_name,
            "user": self._config.db_user,
            "password": self._config.db_password,
        }

    async def connect(self) -> None:
        creds = self._get_credentials()
        try:
            self._conn = await psycopg.AsyncConnection.connect(
                host=creds.get("host", self._config.db_host),
                port=int(creds.get("port", self._config.db_port)),
                dbname=creds.get("dbname", self._config.db_name),
                user=creds.get("username", creds.get("user", self._config.db_user)),
                password=creds.get("password", self._config.db_password),
                row_factory=dict_row,
            )
        except psycopg.Error as e:
            raise StorageError(f"Could not connect to database: {e}") from e

    async def disconnect(self) -> None:
        if self._conn and not self._conn.closed:
            await self._conn.close()
        self._conn = None

    def _require_connection(self) -> psycopg.AsyncConnection:
        """Return the active connection or raise if not connected."""
        if self._conn is None or self._conn.closed:
            raise PlannerError("PostgresTripRepository is not connected. Call connect() first.")
        return self._conn

    async def create(self, trip: TripDraft, participants: list[ParticipantDraft]) -> Trip:
        conn = self._require_connection()
        try:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(_INSERT_TRIP_SQL, (trip.destination, trip.starts_at, trip.ends_at))
                    trip_row = await cur.fetchone()
                    participant_rows = []
                    for draft in participants:
                        await cur.execute(
                            _INSERT_PARTICIPANT_SQL,
                            (trip_row["id"], draft.name, draft.email, draft.is_owner, draft.is_confirmed),
                        )
                        participant_rows.append(await cur.fetchone())
        except psycopg.Error as e:
            raise StorageError(f"Trip creation failed: {e}") from e

        return Trip(**trip_row, participants=[Participant(**row) for row in participant_rows])

    async def find_by_id(self, trip_id: UUID) -> Trip | None:
        conn = self._require_connection()
        try:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(_SELECT_TRIP_SQL, (trip_id,))
                    trip_row = await cur.fetchone()
                    if trip_row is None:
                        return None
                    await cur.execute(_SELECT_PARTICIPANTS_SQL, (trip_id,))
                    participant_rows = await cur.fetchall()
        except psycopg.Error as e:
            raise StorageError(f"Trip lookup failed: {e}") from e

        return Trip(**trip_row, participants=[Participant(**row) for row in participant_rows])

    async def confirm_if_pending(self, trip_id: UUID) -> TripConfirmation | None:
        conn = self._require_connection()
        try:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(_CONFIRM_TRIP_SQL, {"id": trip_id})
                    row = await cur.fetchone()
                    if row is None:
                        return None
                    await cur.execute(_SELECT_PARTICIPANTS_SQL, (trip_id,))
                    participant_rows = await cur.fetchall()
        except psycopg.Error as e:
            raise StorageError(f"Trip confirmation failed: {e}") from e

        already_confirmed = row.pop("already_confirmed")
        trip = Trip(**row, is_confirmed=True, participants=[Participant(**p) for p in participant_rows])
        if not already_confirmed:
            logger.info("Trip %s flipped to confirmed", trip_id)
        return TripConfirmation(already_confirmed=already_confirmed, trip=trip)

    async def confirm_participant_if_pending(self, participant_id: UUID) -> ParticipantConfirmation | None:
        conn = self._require_connection()
        try:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(_CONFIRM_PARTICIPANT_SQL, {"id": participant_id})
                    row = await cur.fetchone()
        except psycopg.Error as e:
            raise StorageError(f"Participant confirmation failed: {e}") from e

        if row is None:
            return None
        already_confirmed = row.pop("already_confirmed")
        return ParticipantConfirmation(
            already_confirmed=already_confirmed,
            participant=Participant(**row, is_confirmed=True),
        )

    async def __aenter__(self) -> "PostgresTripRepository":
        await self.connect()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.disconnect()
