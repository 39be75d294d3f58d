# backend/app/models/celebrity.py
import uuid

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Celebrity(Base):
    """A contest entrant. Its tally is always COUNT(votes), never stored."""
    __tablename__ = "celebrities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)

    # URL string handed back by the upload service, or a local /path
    image = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)

    # influencer, artist, athlete, content_creator ...
    category = Column(String(100), nullable=False)

    # Ordered list of {"platform": ..., "url": ...}
    social_links = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    votes = relationship(
        "Vote",
        back_populates="celebrity",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
