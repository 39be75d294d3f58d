# backend/app/models/__init__.py
# Importing this package registers every table on Base.metadata
from backend.app.models.admin import Admin, AdminRole
from backend.app.models.celebrity import Celebrity
from backend.app.models.participant import Participant
from backend.app.models.vote import Vote

__all__ = ["Admin", "AdminRole", "Celebrity", "Participant", "Vote"]
