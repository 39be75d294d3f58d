# backend/app/models/vote.py
"""
The vote ledger: one row per admitted vote.

device_fingerprint holds sha256(fingerprint-ip-salt), never the raw
browser fingerprint. Its UNIQUE constraint is what actually guarantees
one vote per device hash; the application-level lookup before insert
only exists to answer quickly with "already voted for X".
"""
import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Vote(Base):
    __tablename__ = "votes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    celebrity_id = Column(
        Uuid,
        ForeignKey("celebrities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Hex SHA-256, 64 chars
    device_fingerprint = Column(String(64), unique=True, nullable=False)

    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    screen_resolution = Column(String(20), nullable=True)
    timezone = Column(String(50), nullable=True)
    language = Column(String(10), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    celebrity = relationship("Celebrity", back_populates="votes")
