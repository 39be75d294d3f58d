# backend/app/models/participant.py
import uuid

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Participant(Base):
    """Marathon registration."""
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    phone_number = Column(String(20), nullable=False)
    residence = Column(String(255), nullable=False)
    health_condition = Column(String(255), nullable=False)
    sport_level = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
