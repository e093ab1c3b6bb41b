"""
SQLAlchemy declarative base for the trips and participants tables.

The ORM models mirror the Alembic revisions and back local schema creation;
runtime queries go through PostgresTripRepository.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
