"""Repository modules for Supabase table access."""

from repositories.action_log_repository import ActionLogRepository
from repositories.candidate_repository import CandidateRepository
from repositories.election_repository import DistrictRepository, ElectionRepository
from repositories.member_repository import MemberRepository
from repositories.provider import VotingDataStore
from repositories.vote_repository import VoteRepository
from repositories.voter_repository import VoterRepository

__all__ = [
    "ActionLogRepository",
    "CandidateRepository",
    "DistrictRepository",
    "ElectionRepository",
    "MemberRepository",
    "VoteRepository",
    "VoterRepository",
    "VotingDataStore",
]
