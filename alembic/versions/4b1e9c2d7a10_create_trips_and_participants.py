"""create_trips_and_participants

Revision ID: 4b1e9c2d7a10
Revises: 
Create Date: 2026-10-12 14:05:31.218804

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9c2d7a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; older servers need pgcrypto
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.execute("""
        CREATE TABLE trips (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            destination VARCHAR(255) NOT NULL,
            starts_at TIMESTAMPTZ NOT NULL,
            ends_at TIMESTAMPTZ NOT NULL,
            is_confirmed BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_trips_destination_length CHECK (char_length(destination) >= 3),
            CONSTRAINT chk_trips_schedule CHECK (ends_at >= starts_at)
        )
    """)

    op.execute("""
        CREATE TABLE participants (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            trip_id UUID NOT NULL REFERENCES trips (id) ON DELETE CASCADE,
            name VARCHAR(255),
            email VARCHAR(320) NOT NULL,
            is_owner BOOLEAN NOT NULL DEFAULT FALSE,
            is_confirmed BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
        )
    """)

    op.execute("""
        CREATE INDEX idx_participants_trip_id
        ON participants (trip_id)
    """)

    # At most one owner per trip
    op.execute("""
        CREATE UNIQUE INDEX uq_participants_one_owner
        ON participants (trip_id) WHERE is_owner
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS uq_participants_one_owner")
    op.execute("DROP INDEX IF EXISTS idx_participants_trip_id")
    op.execute("DROP TABLE IF EXISTS participants")
    op.execute("DROP TABLE IF EXISTS trips")
