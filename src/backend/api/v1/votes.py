"""
Vote submission endpoint.

The vote itself is recorded by the database's submit_vote function, which
enforces one vote per member per district and round. Rejections are passed
through verbatim.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.deps import get_election_service
from schemas.ballot import VoteResponse, VoteSubmission
from services.election_service import ElectionService

router = APIRouter()


@router.post("", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteSubmission,
    service: Annotated[ElectionService, Depends(get_election_service)],
) -> VoteResponse:
    """Cast a vote in one district."""
    await service.submit_vote(vote_data)
    return VoteResponse(success=True, message="Vote recorded successfully")
