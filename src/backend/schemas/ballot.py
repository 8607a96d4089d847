"""
Ballot-related Pydantic schemas.

A Ballot is a per-request view of one (voter, district) pair. It is rebuilt
from current rows on every read and never stored.
"""

from typing import Optional

from pydantic import BaseModel, Field

from models.election import Candidate, District


class Ballot(BaseModel):
    """One district a voter can vote in, with its approved candidates."""

    district_id: str
    district: District
    candidates: list[Candidate] = Field(default_factory=list)
    has_voted: bool = False
    is_uncontested: bool = Field(
        False, description="Approved candidates do not exceed the seats to fill"
    )


class MyBallotInfo(BaseModel):
    """Single-district ballot view kept for older clients."""

    district_id: str
    district: District
    candidates: list[Candidate] = Field(default_factory=list)
    has_voted: bool = False


class VoteSubmission(BaseModel):
    """Schema for casting a vote in one district."""

    election_id: str
    district_id: str
    round: int = Field(1, ge=1)
    candidate_id: Optional[str] = Field(None, description="Chosen candidate (CANDIDATE districts)")
    choice: Optional[str] = Field(None, description="Chosen answer (BINARY districts)")


class VoteResponse(BaseModel):
    """Response after successfully casting a vote."""

    success: bool
    message: str
