"""
Administrator-facing election service.

Election lifecycle, candidate review, turnout monitoring and result tallying.
The admin check here only gates the UI flow; the database's row-level
security policies are what actually protect admin data.
"""

import asyncio
from typing import Any, Optional

import httpx
import structlog
from postgrest.exceptions import APIError

from core.config import settings
from core.exceptions import CandidateNotFound, UploadError
from core.fallback import FallbackPolicy, load_with_fallback
from models.action_log import ActionLog, ActionType
from models.election import Candidate, CandidateStatus, District, Election, ElectionStatus
from schemas.candidate import ReviewDecision
from schemas.stats import ElectionResults, TurnoutStats
from services.ballot_aggregator import compute_turnout, tally_results
from services.session import ElectionSession

logger = structlog.get_logger(__name__)


class AdminService:
    """Election administration on behalf of the session's user."""

    def __init__(self, session: ElectionSession):
        self.session = session
        self.store = session.store

    async def is_admin(self) -> bool:
        """
        Whether the current user passes the database's admin check.

        Any failure of the check counts as "not admin".
        """
        user = await self.session.current_user()
        if user is None:
            return False

        try:
            response = await self.session.client.rpc(settings.ADMIN_CHECK_RPC, {}).execute()
        except (APIError, httpx.HTTPError) as e:
            logger.warning("admin_check_failed", user_id=user.id, error=str(e))
            return False
        return response.data is True

    async def log_action(
        self,
        election_id: str,
        action_type: ActionType,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """Append an entry to the election's audit log."""
        user = await self.session.require_user()
        await self.store.action_logs.append(election_id, user.id, action_type.value, details)

    async def get_election_info(self) -> Optional[Election]:
        """The most recently created election."""
        return await self.store.elections.get_latest()

    async def get_all_elections(self) -> list[Election]:
        """Election history, newest first; empty when the history cannot be loaded."""
        return await load_with_fallback(
            self.store.elections.list_all,
            FallbackPolicy.EMPTY,
            list,
            operation="get_all_elections",
        )

    async def update_status(self, election_id: str, new_status: ElectionStatus) -> None:
        """Move an election to ``new_status`` and record the change."""
        await self.store.elections.update_status(election_id, new_status)
        logger.info("election_status_changed", election_id=election_id, status=new_status.value)
        await self.log_action(election_id, ActionType.STATUS_CHANGE, {"status": new_status.value})

    async def get_pending_candidates(self, election_id: str) -> list[Candidate]:
        """Candidates awaiting review, with district names."""
        return await self.store.candidates.list_pending(election_id)

    async def get_candidate(self, candidate_id: str) -> Candidate:
        """
        Get a candidacy by id.

        Raises:
            CandidateNotFound: If no such candidate is visible to the caller
        """
        candidate = await self.store.candidates.get_by_id(candidate_id)
        if candidate is None:
            raise CandidateNotFound(candidate_id)
        return candidate

    async def review_candidate(self, candidate_id: str, decision: ReviewDecision) -> None:
        """Approve or reject a candidate and record it in the candidate's election log."""
        candidate = await self.get_candidate(candidate_id)
        await self.store.candidates.update_status(candidate_id, CandidateStatus(decision.value))
        logger.info("candidate_reviewed", candidate_id=candidate_id, decision=decision.value)
        await self.log_action(
            candidate.election_id,
            ActionType.CANDIDATE_REVIEW,
            {"candidate_id": candidate_id, "decision": decision.value},
        )

    async def get_proof_url(self, candidate: Candidate) -> Optional[str]:
        """Signed download URL of a candidate's proof document, if one was uploaded."""
        if not candidate.proof_path:
            return None
        try:
            return await self.session.storage.signed_url(
                settings.CANDIDATE_PROOF_BUCKET,
                candidate.proof_path,
                settings.PROOF_SIGNED_URL_EXPIRES_SECONDS,
            )
        except UploadError:
            logger.warning("proof_url_unavailable", candidate_id=candidate.id)
            raise

    async def get_turnout_stats(self, election_id: str) -> TurnoutStats:
        """Live turnout: vote logs against the voter roll."""
        total_voters, votes_cast = await asyncio.gather(
            self.store.voters.count_voters(election_id),
            self.store.voters.count_votes_cast(election_id),
        )
        return compute_turnout(total_voters, votes_cast)

    async def get_results(self, election_id: str) -> ElectionResults:
        """Tally of every district of an election."""
        ballots = await self.store.votes.list_ballots(election_id)
        district_ids = sorted({b.district_id for b in ballots if b.district_id})
        districts: dict[str, District] = await self.store.districts.list_by_ids(district_ids)
        results = tally_results(ballots, districts)
        return ElectionResults(
            election_id=election_id,
            total_ballots=sum(r.total_ballots for r in results),
            districts=results,
        )

    async def get_action_logs(self, election_id: str) -> list[ActionLog]:
        """Audit tail (most recent entries); empty when the log cannot be loaded."""
        return await load_with_fallback(
            lambda: self.store.action_logs.list_recent(election_id, settings.ACTION_LOG_LIMIT),
            FallbackPolicy.EMPTY,
            list,
            operation="get_action_logs",
        )
