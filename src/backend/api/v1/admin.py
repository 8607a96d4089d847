"""
Election administration endpoints.

All endpoints require the caller to pass the database's admin check.
Row-level security on the database side is the actual protection; the
check here only turns away non-admins early.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_admin_service, get_election_session
from core.config import settings
from models.action_log import ActionLog
from models.election import Candidate, Election
from schemas.candidate import CandidateReview, ProofUrl
from schemas.election import AdminCheck, ElectionStatusUpdate
from schemas.stats import ElectionResults, TurnoutStats
from services.admin_service import AdminService
from services.session import ElectionSession

router = APIRouter()


@router.get("/me", response_model=AdminCheck)
async def check_admin(
    session: Annotated[ElectionSession, Depends(get_election_session)],
) -> AdminCheck:
    """Whether the caller is an election admin (for UI gating)."""
    return AdminCheck(is_admin=await AdminService(session).is_admin())


@router.get("/elections", response_model=list[Election])
async def list_elections(
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> list[Election]:
    """Election history, newest first."""
    return await service.get_all_elections()


@router.get("/elections/latest", response_model=Election)
async def get_latest_election(
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> Election:
    """The most recently created election."""
    election = await service.get_election_info()
    if election is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No election found")
    return election


@router.patch("/elections/{election_id}/status", status_code=status.HTTP_204_NO_CONTENT)
async def update_election_status(
    election_id: str,
    update: ElectionStatusUpdate,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> None:
    """Change an election's status (open, pause, close, publish ...)."""
    await service.update_status(election_id, update.status)


@router.get("/elections/{election_id}/candidates/pending", response_model=list[Candidate])
async def list_pending_candidates(
    election_id: str,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> list[Candidate]:
    """Candidates awaiting review."""
    return await service.get_pending_candidates(election_id)


@router.post("/candidates/{candidate_id}/review", status_code=status.HTTP_204_NO_CONTENT)
async def review_candidate(
    candidate_id: str,
    review: CandidateReview,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> None:
    """Approve or reject a candidate; recorded in the candidate's election log."""
    await service.review_candidate(candidate_id, review.decision)


@router.get("/candidates/{candidate_id}/proof", response_model=ProofUrl)
async def get_candidate_proof(
    candidate_id: str,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ProofUrl:
    """Signed download link for a candidate's proof document."""
    candidate = await service.get_candidate(candidate_id)
    url = await service.get_proof_url(candidate)
    if url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No proof document uploaded")
    return ProofUrl(url=url, expires_in=settings.PROOF_SIGNED_URL_EXPIRES_SECONDS)



@router.get("/elections/{election_id}/turnout", response_model=TurnoutStats)
async def get_turnout(
    election_id: str,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> TurnoutStats:
    """Live turnout."""
    return await service.get_turnout_stats(election_id)


@router.get("/elections/{election_id}/results", response_model=ElectionResults)
async def get_results(
    election_id: str,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ElectionResults:
    """Per-district tally."""
    return await service.get_results(election_id)


@router.get("/elections/{election_id}/logs", response_model=list[ActionLog])
async def list_action_logs(
    election_id: str,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> list[ActionLog]:
    """Most recent admin actions on an election."""
    return await service.get_action_logs(election_id)
