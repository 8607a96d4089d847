"""
Candidate application and review schemas.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CandidateApplication(BaseModel):
    """Fields submitted with a candidacy (files travel separately)."""

    election_id: str
    district_id: str
    name: str = Field(..., min_length=1, max_length=100)
    manifesto: Optional[str] = Field(None, max_length=5000)


class ReviewDecision(str, Enum):
    """Outcome of an admin review."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CandidateReview(BaseModel):
    """Admin decision on a pending candidate."""

    decision: ReviewDecision


class ProofUrl(BaseModel):
    """Time-limited download link for a candidate's proof document."""

    url: str
    expires_in: int = Field(..., description="Seconds until the link expires")
