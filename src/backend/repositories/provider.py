"""
Repository provider.

Bundles every repository over one Supabase client into a VotingDataStore,
the record-oriented interface the services depend on.

Usage:
    store = VotingDataStore.from_client(client)
    districts = await store.voters.list_district_ids(election_id, member_id)
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from supabase import AsyncClient

from models.election import CandidateStatus, ElectionStatus
from repositories.action_log_repository import ActionLogRepository
from repositories.candidate_repository import CandidateRepository
from repositories.election_repository import DistrictRepository, ElectionRepository
from repositories.member_repository import MemberRepository
from repositories.vote_repository import VoteRepository
from repositories.voter_repository import VoterRepository

# =============================================================================
# Repository Protocols (Interfaces)
# =============================================================================


@runtime_checkable
class ElectionRepositoryProtocol(Protocol):
    """Protocol defining election repository operations."""

    async def list_by_status(self, statuses: Sequence[ElectionStatus]): ...
    async def list_all(self): ...
    async def get_latest(self): ...
    async def update_status(self, election_id: str, status: ElectionStatus) -> None: ...


@runtime_checkable
class CandidateRepositoryProtocol(Protocol):
    """Protocol defining candidate repository operations."""

    async def get_by_id(self, candidate_id: str): ...
    async def list_approved(self, election_id: str, district_id: str): ...
    async def list_pending(self, election_id: str): ...
    async def create(self, election_id: str, district_id: str, member_uuid: str, name: str, photo_url: str, **kwargs): ...
    async def update_status(self, candidate_id: str, status: CandidateStatus) -> None: ...


@runtime_checkable
class VoterRepositoryProtocol(Protocol):
    """Protocol defining voter roll / vote log operations."""

    async def list_district_ids(self, election_id: str, member_uuid: str) -> list[str]: ...
    async def has_voted(self, election_id: str, district_id: str, member_uuid: str) -> bool: ...
    async def count_voters(self, election_id: str) -> int: ...
    async def count_votes_cast(self, election_id: str) -> int: ...


@runtime_checkable
class VoteRepositoryProtocol(Protocol):
    """Protocol defining vote submission operations."""

    async def submit_vote(
        self,
        election_id: str,
        district_id: str,
        round: int,
        candidate_id: Optional[str] = None,
        choice: Optional[str] = None,
    ) -> None: ...
    async def list_ballots(self, election_id: str): ...


@runtime_checkable
class ActionLogRepositoryProtocol(Protocol):
    """Protocol defining audit log operations."""

    async def append(self, election_id: str, admin_uuid: str, action_type: str, details: Optional[dict[str, Any]] = None) -> None: ...
    async def list_recent(self, election_id: str, limit: int): ...


# =============================================================================
# Data store bundle
# =============================================================================


@dataclass
class VotingDataStore:
    """All repositories bound to the same client."""

    elections: ElectionRepositoryProtocol
    districts: DistrictRepository
    candidates: CandidateRepositoryProtocol
    voters: VoterRepositoryProtocol
    votes: VoteRepositoryProtocol
    members: MemberRepository
    action_logs: ActionLogRepositoryProtocol

    @classmethod
    def from_client(cls, client: AsyncClient) -> "VotingDataStore":
        """Build every repository over ``client``."""
        return cls(
            elections=ElectionRepository(client),
            districts=DistrictRepository(client),
            candidates=CandidateRepository(client),
            voters=VoterRepository(client),
            votes=VoteRepository(client),
            members=MemberRepository(client),
            action_logs=ActionLogRepository(client),
        )
