# backend/app/api/v1/endpoints/vote.py
from typing import Optional

from fastapi import APIRouter, Depends, Header, status

from backend.app.api import deps
from backend.app.schemas.vote import (
    VoteAccepted,
    VoteCreate,
    VoteStatus,
    VoteStatusRequest,
    VoteTallies,
)
from backend.app.services.voting import VoteAdmissionService

router = APIRouter()


# 1. BẢNG XẾP HẠNG (GET) - public, active celebrities only
@router.get("", response_model=VoteTallies)
async def read_tallies(service: VoteAdmissionService = Depends(deps.get_vote_service)):
    return await service.list_tallies()


# 2. BỎ PHIẾU (POST)
@router.post("", response_model=VoteAccepted, status_code=status.HTTP_201_CREATED)
async def submit_vote(
        vote_in: VoteCreate,
        service: VoteAdmissionService = Depends(deps.get_vote_service),
        ip: str = Depends(deps.client_ip),
        user_agent: Optional[str] = Header(None),
):
    return await service.submit(vote_in, ip=ip, user_agent=user_agent)


# 3. KIỂM TRA TRẠNG THÁI (PUT) - read only, lets the page restore "already voted for X"
@router.put("", response_model=VoteStatus)
async def check_vote_status(
        status_in: VoteStatusRequest,
        service: VoteAdmissionService = Depends(deps.get_vote_service),
        ip: str = Depends(deps.client_ip),
):
    return await service.check_status(status_in.fingerprint, ip)
