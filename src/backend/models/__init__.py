"""Row models for the Supabase tables."""

from models.action_log import ActionLog, ActionType
from models.election import (
    ACTIVE_ELECTION_STATUSES,
    Candidate,
    CandidateStatus,
    District,
    Election,
    ElectionStatus,
    VoteType,
)
from models.member import AuthUser, CoopMember
from models.vote import BallotRecord

__all__ = [
    "ACTIVE_ELECTION_STATUSES",
    "ActionLog",
    "ActionType",
    "AuthUser",
    "BallotRecord",
    "Candidate",
    "CandidateStatus",
    "CoopMember",
    "District",
    "Election",
    "ElectionStatus",
    "VoteType",
]
