# backend/app/models/admin.py
import enum
import uuid

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, Uuid
from sqlalchemy.sql import func

from backend.app.db.base import Base


class AdminRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Always stored lower-cased; logins compare against the lower-cased input
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)

    role = Column(
        Enum(AdminRole, name="admin_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=AdminRole.ADMIN,
    )
    is_active = Column(Boolean, nullable=False, default=True)

    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Consecutive failed logins; reset to 0 on success
    login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
