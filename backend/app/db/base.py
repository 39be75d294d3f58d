# backend/app/db/base.py
"""
SQLAlchemy declarative base and session re-exports.

Models import Base from here; endpoints import get_db from here so
they only ever depend on one database module.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Usage:
        class Vote(Base):
            __tablename__ = "votes"
            id = Column(Uuid, primary_key=True, default=uuid.uuid4)
            ...
    """
    pass


from backend.app.db.session import (  # noqa: E402
    engine,
    AsyncSessionLocal,
    get_db,
)

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
]
