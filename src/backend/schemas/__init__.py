"""Pydantic schemas for request/response validation."""

from schemas.ballot import Ballot, MyBallotInfo, VoteResponse, VoteSubmission
from schemas.candidate import CandidateApplication, CandidateReview, ProofUrl, ReviewDecision
from schemas.election import AdminCheck, ElectionStatusUpdate
from schemas.stats import DistrictResult, ElectionResults, ResultEntry, TurnoutStats

__all__ = [
    "AdminCheck",
    "Ballot",
    "CandidateApplication",
    "CandidateReview",
    "DistrictResult",
    "ElectionResults",
    "ElectionStatusUpdate",
    "MyBallotInfo",
    "ProofUrl",
    "ResultEntry",
    "ReviewDecision",
    "TurnoutStats",
    "VoteResponse",
    "VoteSubmission",
]
