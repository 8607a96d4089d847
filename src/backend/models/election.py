"""
Election, district and candidate rows.

Tables:
- elections: one row per election, newest first by created_at
- districts: voting constituencies with a vote type and seat quota
- candidates: applications per district, reviewed by admins
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from models.base import TableRow


class ElectionStatus(str, Enum):
    """Election lifecycle status."""

    NOMINATION = "NOMINATION"  # Candidates may apply
    OPEN = "OPEN"  # Voting is open
    PAUSED = "PAUSED"  # Voting temporarily suspended
    CLOSED = "CLOSED"  # Voting ended, results not yet public
    PUBLISHED = "PUBLISHED"  # Results are public


# Statuses shown to members as "current" elections
ACTIVE_ELECTION_STATUSES = (ElectionStatus.OPEN, ElectionStatus.NOMINATION)


class VoteType(str, Enum):
    """How a district is voted on."""

    CANDIDATE = "CANDIDATE"  # Pick among approved candidates
    BINARY = "BINARY"  # Yes/no question, no candidate list


class CandidateStatus(str, Enum):
    """Candidate application review status."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Election(TableRow):
    """Row of the elections table."""

    id: str
    title: Optional[str] = None
    status: ElectionStatus
    created_at: Optional[datetime] = None


class District(TableRow):
    """Row of the districts table."""

    id: Optional[str] = None
    name: str
    vote_type: VoteType = VoteType.CANDIDATE
    quota: int = Field(1, ge=0)  # Seats to fill
    is_common: bool = False  # At-large district, listed after local ones


class DistrictRef(TableRow):
    """District columns embedded in another row (``districts(name)``)."""

    name: Optional[str] = None
    vote_type: Optional[VoteType] = None


class Candidate(TableRow):
    """Row of the candidates table."""

    id: str
    election_id: Optional[str] = None
    district_id: Optional[str] = None
    member_uuid: Optional[str] = None
    name: str
    symbol: Optional[str] = None  # Ballot number shown next to the name
    status: CandidateStatus = CandidateStatus.PENDING
    photo_url: Optional[str] = None
    proof_path: Optional[str] = None  # Object path in the private proof bucket
    manifesto: Optional[str] = None
    created_at: Optional[datetime] = None
    districts: Optional[DistrictRef] = None  # Present when selected with districts(name)

    @property
    def district_name(self) -> Optional[str]:
        return self.districts.name if self.districts else None
