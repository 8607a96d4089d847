"""
Member-facing election service.

Loads what a member needs to vote or to stand as a candidate: current
elections, their ballot list, vote submission and candidacy applications.
Per-district rows are fetched concurrently and handed to the ballot
aggregator once all of them have resolved.
"""

import asyncio
from typing import Optional

import structlog

from core.exceptions import MemberNotFound, NotAuthenticated, NotEnrolled, PhotoRequired
from core.fallback import FallbackPolicy, load_with_fallback
from models.election import ACTIVE_ELECTION_STATUSES, Candidate, District, Election, VoteType
from models.member import CoopMember
from schemas.ballot import Ballot, MyBallotInfo, VoteSubmission
from schemas.candidate import CandidateApplication
from services.ballot_aggregator import build_voter_ballots
from services.session import ElectionSession
from services.storage_service import FileUpload

logger = structlog.get_logger(__name__)


class ElectionService:
    """Election operations performed on behalf of the session's member."""

    def __init__(self, session: ElectionSession):
        self.session = session
        self.store = session.store

    async def initialize(self) -> Optional[CoopMember]:
        """
        Load the member profile of the logged-in user.

        Returns:
            The member profile, or None when not logged in

        Raises:
            MemberNotFound: If the user has no cooperative member profile
        """
        profile = await self.session.load_member_profile()
        if profile is None:
            user = await self.session.current_user()
            if user is None:
                return None
            logger.error("member_profile_missing", user_id=user.id)
            raise MemberNotFound(
                "Cooperative member profile not found.",
                context={"user_id": user.id},
            )
        return profile

    async def _require_member(self) -> CoopMember:
        profile = await self.initialize()
        if profile is None:
            raise NotAuthenticated("Please log in to continue.")
        return profile

    async def get_active_elections(self) -> list[Election]:
        """Every election in OPEN or NOMINATION status, newest first."""
        return await load_with_fallback(
            lambda: self.store.elections.list_by_status(ACTIVE_ELECTION_STATUSES),
            FallbackPolicy.EMPTY,
            list,
            operation="get_active_elections",
        )

    async def _load_district_rows(
        self, election_id: str, district_id: str, member_id: str
    ) -> tuple[District, list[Candidate], bool]:
        """District row, approved candidates (candidate districts only) and vote log flag."""
        district, has_voted = await asyncio.gather(
            self.store.districts.get_by_id(district_id),
            self.store.voters.has_voted(election_id, district_id, member_id),
        )
        candidates: list[Candidate] = []
        if district.vote_type == VoteType.CANDIDATE:
            candidates = await self.store.candidates.list_approved(election_id, district_id)
        return district, candidates, has_voted

    async def get_my_ballot_list(self, election_id: str) -> list[Ballot]:
        """
        Ballots of the current member for one election.

        Critical read: any fetch failure aborts the request.

        Raises:
            NotEnrolled: If the member has no district in this election
            DataLoadFailure: If any district, candidate or vote log read fails
        """
        member = await self._require_member()
        district_ids = await self.store.voters.list_district_ids(election_id, member.id)
        if not district_ids:
            logger.info("member_not_enrolled", election_id=election_id, member_id=member.id)
            raise NotEnrolled(election_id)

        loaded = await asyncio.gather(
            *(self._load_district_rows(election_id, district_id, member.id) for district_id in district_ids)
        )

        districts = {}
        candidates = {}
        voted = set()
        for district_id, (district, district_candidates, has_voted) in zip(district_ids, loaded):
            districts[district_id] = district
            candidates[district_id] = district_candidates
            if has_voted:
                voted.add(district_id)

        return build_voter_ballots(district_ids, districts, candidates, voted)

    async def get_my_ballot_info(self, election_id: str) -> MyBallotInfo:
        """
        Single-district ballot view for older clients.

        Returns the first ballot of the ordered list, so a member enrolled in
        several districts sees their local district.
        """
        ballots = await self.get_my_ballot_list(election_id)
        first = ballots[0]
        return MyBallotInfo(
            district_id=first.district_id,
            district=first.district,
            candidates=first.candidates,
            has_voted=first.has_voted,
        )

    async def submit_vote(self, submission: VoteSubmission) -> bool:
        """
        Cast a vote through the database's submit_vote function.

        Raises:
            VoteRejected: The function refused the vote; never retried here
        """
        await self.session.require_user()
        await self.store.votes.submit_vote(
            election_id=submission.election_id,
            district_id=submission.district_id,
            round=submission.round,
            candidate_id=submission.candidate_id,
            choice=submission.choice,
        )
        logger.info(
            "vote_submitted",
            election_id=submission.election_id,
            district_id=submission.district_id,
            round=submission.round,
        )
        return True

    async def upload_candidate_photo(self, upload: FileUpload, user_id: str) -> str:
        """Upload a profile photo and return its public URL."""
        return await self.session.storage.upload_candidate_photo(upload, user_id)

    async def upload_proof_doc(self, upload: FileUpload, user_id: str) -> str:
        """Upload a proof document to the private bucket and return its path."""
        return await self.session.storage.upload_proof_doc(upload, user_id)

    async def apply_candidate(
        self,
        application: CandidateApplication,
        photo: Optional[FileUpload],
        proof: Optional[FileUpload] = None,
    ) -> Candidate:
        """
        Submit a candidacy for review.

        The photo is required and uploaded first; nothing is written to the
        candidates table if an upload fails.

        Raises:
            NotAuthenticated: If the login session has expired
            UploadError: If the photo is missing or an upload fails
            DataLoadFailure: If saving the application fails
        """
        user = await self.session.require_user()

        if photo is None:
            raise PhotoRequired()
        photo_url = await self.upload_candidate_photo(photo, user.id)

        proof_path = None
        if proof is not None:
            proof_path = await self.upload_proof_doc(proof, user.id)

        return await self.store.candidates.create(
            election_id=application.election_id,
            district_id=application.district_id,
            member_uuid=user.id,
            name=application.name,
            photo_url=photo_url,
            manifesto=application.manifesto,
            proof_path=proof_path,
        )
