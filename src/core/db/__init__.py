"""
Database ORM models and repositories for Plann.er.

Importing this package registers all models on Base.metadata,
which Alembic needs for autogenerate.
"""

from core.db.postgres import PostgresTripRepository
from core.db.repository import TripRepository
from core.db.schemas.base import Base
from core.db.schemas.participant import ParticipantRecord
from core.db.schemas.trip import TripRecord

__all__ = ["Base", "ParticipantRecord", "PostgresTripRepository", "TripRecord", "TripRepository"]
