"""
Vote repository.

Casting a vote is a single call to the submit_vote database function, which
owns one-vote-per-voter enforcement and round handling. This module never
writes ballots or vote logs itself.
"""

from typing import Optional

import httpx
import structlog
from postgrest.exceptions import APIError
from supabase import AsyncClient

from core.exceptions import DataLoadFailure, VoteRejected
from db.supabase_session import BALLOTS_TABLE, SUBMIT_VOTE_RPC, fetch_rows
from models.vote import BallotRecord

logger = structlog.get_logger(__name__)


class VoteRepository:
    """Repository for vote submission and ballot reads."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def submit_vote(
        self,
        election_id: str,
        district_id: str,
        round: int,
        candidate_id: Optional[str] = None,
        choice: Optional[str] = None,
    ) -> None:
        """
        Cast a vote through the submit_vote function.

        Raises:
            VoteRejected: If the function refused the vote (reason verbatim)
            DataLoadFailure: If the request never reached the database
        """
        params = {
            "p_election_id": election_id,
            "p_district_id": district_id,
            "p_round": round,
            "p_candidate_id": candidate_id or None,
            "p_choice": choice or None,
        }
        try:
            await self.client.rpc(SUBMIT_VOTE_RPC, params).execute()
        except APIError as e:
            logger.warning(
                "vote_rejected",
                election_id=election_id,
                district_id=district_id,
                reason=e.message,
            )
            raise VoteRejected(e.message or "Vote was rejected") from e
        except httpx.HTTPError as e:
            logger.error("vote_submit_failed", election_id=election_id, error=str(e))
            raise DataLoadFailure(f"submit vote failed: {e}") from e

    async def list_ballots(self, election_id: str) -> list[BallotRecord]:
        """All ballots of an election with district and candidate names (admin only under RLS)."""
        rows = await fetch_rows(
            self.client.table(BALLOTS_TABLE)
            .select("district_id, candidate_id, choice, round, districts(name, vote_type), candidates(name)")
            .eq("election_id", election_id),
            "list ballots",
        )
        return [BallotRecord(**row) for row in rows]
