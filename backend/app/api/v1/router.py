# backend/app/api/v1/router.py
from fastapi import APIRouter
from backend.app.api.v1.endpoints import auth, celebrities, participants, seed, vote

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vote.router, prefix="/vote", tags=["vote"])
api_router.include_router(celebrities.router, prefix="/admin/celebrities", tags=["admin"])
api_router.include_router(participants.router, tags=["participants"])
# /admin/seed and /vote/seed
api_router.include_router(seed.router, tags=["seed"])
