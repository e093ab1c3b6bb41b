"""SQLAlchemy ORM model for the trips table."""

from sqlalchemy import Boolean, CheckConstraint, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base


class TripRecord(Base):
    __tablename__ = "trips"

    id: Mapped[str] = mapped_column(UUID, primary_key=True, server_default=text("gen_random_uuid()"))
    destination: Mapped[str] = mapped_column(String(255), nullable=False)
    starts_at = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    ends_at = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    is_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    created_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))

    participants: Mapped[list["ParticipantRecord"]] = relationship(
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="ParticipantRecord.created_at",
    )

    __table_args__ = (
        CheckConstraint("char_length(destination) >= 3", name="chk_trips_destination_length"),
        CheckConstraint("ends_at >= starts_at", name="chk_trips_schedule"),
    )


# Avoid circular import — ParticipantRecord is resolved by string reference above
from core.db.schemas.participant import ParticipantRecord  # noqa: E402, F401
