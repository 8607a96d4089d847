"""
Member election endpoints.

Current elections and the caller's ballots.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.deps import get_election_service
from models.election import Election
from schemas.ballot import Ballot, MyBallotInfo
from services.election_service import ElectionService

router = APIRouter()


@router.get("/active", response_model=list[Election])
async def list_active_elections(
    service: Annotated[ElectionService, Depends(get_election_service)],
) -> list[Election]:
    """Elections open for voting or nomination, newest first."""
    return await service.get_active_elections()


@router.get("/{election_id}/ballots", response_model=list[Ballot])
async def list_my_ballots(
    election_id: str,
    service: Annotated[ElectionService, Depends(get_election_service)],
) -> list[Ballot]:
    """
    The caller's ballots for an election.

    Local districts come first, the common district last. Each ballot says
    whether the caller already voted there and whether the district is
    uncontested.
    """
    return await service.get_my_ballot_list(election_id)


@router.get("/{election_id}/ballot", response_model=MyBallotInfo, deprecated=True)
async def get_my_ballot(
    election_id: str,
    service: Annotated[ElectionService, Depends(get_election_service)],
) -> MyBallotInfo:
    """Single-district ballot view. Use /ballots instead."""
    return await service.get_my_ballot_info(election_id)
