"""Ballot endpoints for API v1."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from exchange_api.app.api.deps import get_vote_service
from exchange_api.app.core.security import get_secret
from exchange_api.app.schemas.vote import BallotCreate
from exchange_api.app.services.vote_service import VoteService


router = APIRouter()


@router.post("/{exchange_id}/votes", response_model=Dict[str, Any])
async def cast_votes(
    exchange_id: int,
    ballot: BallotCreate,
    service: VoteService = Depends(get_vote_service),
) -> Dict[str, Any]:
    """Cast or replace a participant's ballot (voting stage only)."""
    votes = await service.cast_votes(exchange_id, ballot)
    return {"detail": "Votes accepted", "votes": len(votes)}


@router.delete("/{exchange_id}/votes/{name}", response_model=Dict[str, Any])
async def delete_votes(
    exchange_id: int,
    name: str,
    secret: Optional[str] = Depends(get_secret),
    service: VoteService = Depends(get_vote_service),
) -> Dict[str, Any]:
    await service.delete_votes(exchange_id, secret, name)
    return {"detail": "Votes deleted"}
