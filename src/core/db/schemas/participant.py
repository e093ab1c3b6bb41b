"""SQLAlchemy ORM model for the participants table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base

if TYPE_CHECKING:
    from core.db.schemas.trip import TripRecord


class ParticipantRecord(Base):
    __tablename__ = "participants"

    id: Mapped[str] = mapped_column(UUID, primary_key=True, server_default=text("gen_random_uuid()"))
    trip_id: Mapped[str] = mapped_column(UUID, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    is_owner: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    is_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    created_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("clock_timestamp()"))

    trip: Mapped["TripRecord"] = relationship(back_populates="participants")

    __table_args__ = (
        Index("idx_participants_trip_id", "trip_id"),
        Index(
            "uq_participants_one_owner",
            "trip_id",
            unique=True,
            postgresql_where=text("is_owner"),
        ),
    )
