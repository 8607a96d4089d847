"""
Tests for the member-facing ElectionService.
"""

import pytest

from core.exceptions import (
    DataLoadFailure,
    MemberNotFound,
    NotAuthenticated,
    NotEnrolled,
    PhotoRequired,
    UploadError,
    VoteRejected,
)
from models.election import Candidate, CandidateStatus, Election, ElectionStatus
from schemas.ballot import VoteSubmission
from schemas.candidate import CandidateApplication
from services.election_service import ElectionService
from services.storage_service import FileUpload


@pytest.fixture
def service(session):
    return ElectionService(session)


@pytest.fixture
def enrolled(mock_store, sample_districts, make_candidate):
    """Member enrolled in the common, binary and north districts; voted in the bylaw."""
    mock_store.voters.list_district_ids.return_value = ["d-common", "d-bylaw", "d-north"]
    mock_store.districts.get_by_id.side_effect = lambda district_id: sample_districts[district_id]
    mock_store.voters.has_voted.side_effect = lambda election_id, district_id, member_id: district_id == "d-bylaw"
    candidates = {
        "d-north": [make_candidate("c1", "Lee"), make_candidate("c2", "Park")],
        "d-common": [make_candidate("c3", "Choi", "d-common"), make_candidate("c4", "Ahn", "d-common")],
    }
    mock_store.candidates.list_approved.side_effect = lambda election_id, district_id: candidates[district_id]
    return mock_store


@pytest.mark.unit
class TestInitialize:
    """Tests for member profile loading."""

    async def test_returns_profile(self, service, mock_store):
        profile = await service.initialize()

        assert profile.id == "member-1"
        mock_store.members.get_by_id.assert_awaited_once_with("member-1")

    async def test_profile_is_loaded_once(self, service, mock_store):
        await service.initialize()
        await service.initialize()

        assert mock_store.members.get_by_id.await_count == 1

    async def test_not_logged_in_returns_none(self, anonymous_session):
        assert await ElectionService(anonymous_session).initialize() is None

    async def test_missing_profile_raises(self, service, mock_store):
        mock_store.members.get_by_id.return_value = None

        with pytest.raises(MemberNotFound):
            await service.initialize()


@pytest.mark.unit
class TestActiveElections:
    """Tests for get_active_elections."""

    async def test_returns_open_and_nomination_elections(self, service, mock_store):
        elections = [
            Election(id="e2", status=ElectionStatus.OPEN),
            Election(id="e1", status=ElectionStatus.NOMINATION),
        ]
        mock_store.elections.list_by_status.return_value = elections

        result = await service.get_active_elections()

        assert result == elections
        statuses = mock_store.elections.list_by_status.await_args.args[0]
        assert set(statuses) == {ElectionStatus.OPEN, ElectionStatus.NOMINATION}

    async def test_load_failure_degrades_to_empty(self, service, mock_store):
        mock_store.elections.list_by_status.side_effect = DataLoadFailure("list elections failed")

        assert await service.get_active_elections() == []


@pytest.mark.unit
class TestBallotList:
    """Tests for get_my_ballot_list / get_my_ballot_info."""

    async def test_ballots_are_ordered_and_flagged(self, service, enrolled):
        ballots = await service.get_my_ballot_list("election-1")

        assert [b.district_id for b in ballots] == ["d-bylaw", "d-north", "d-common"]
        by_id = {b.district_id: b for b in ballots}
        assert by_id["d-bylaw"].has_voted is True
        assert by_id["d-north"].has_voted is False
        assert by_id["d-north"].is_uncontested is True
        assert by_id["d-common"].is_uncontested is False

    async def test_binary_district_skips_candidate_fetch(self, service, enrolled):
        await service.get_my_ballot_list("election-1")

        fetched = {call.args[1] for call in enrolled.candidates.list_approved.await_args_list}
        assert fetched == {"d-north", "d-common"}

    async def test_vote_log_checked_per_district_for_member(self, service, enrolled):
        await service.get_my_ballot_list("election-1")

        checked = {call.args for call in enrolled.voters.has_voted.await_args_list}
        assert checked == {
            ("election-1", "d-common", "member-1"),
            ("election-1", "d-bylaw", "member-1"),
            ("election-1", "d-north", "member-1"),
        }

    async def test_not_enrolled(self, service, mock_store):
        mock_store.voters.list_district_ids.return_value = []

        with pytest.raises(NotEnrolled):
            await service.get_my_ballot_list("election-1")

    async def test_critical_read_failure_propagates(self, service, enrolled):
        enrolled.districts.get_by_id.side_effect = DataLoadFailure("get district failed")

        with pytest.raises(DataLoadFailure):
            await service.get_my_ballot_list("election-1")

    async def test_requires_login(self, anonymous_session):
        with pytest.raises(NotAuthenticated):
            await ElectionService(anonymous_session).get_my_ballot_list("election-1")

    async def test_legacy_view_returns_first_ballot(self, service, enrolled):
        info = await service.get_my_ballot_info("election-1")

        assert info.district_id == "d-bylaw"
        assert info.has_voted is True
        assert info.candidates == []


@pytest.mark.unit
class TestSubmitVote:
    """Tests for submit_vote."""

    async def test_passes_submission_to_rpc(self, service, mock_store):
        submission = VoteSubmission(election_id="election-1", district_id="d-north", round=2, candidate_id="c1")

        assert await service.submit_vote(submission) is True
        mock_store.votes.submit_vote.assert_awaited_once_with(
            election_id="election-1",
            district_id="d-north",
            round=2,
            candidate_id="c1",
            choice=None,
        )

    async def test_rejection_is_not_retried(self, service, mock_store):
        mock_store.votes.submit_vote.side_effect = VoteRejected("already voted")
        submission = VoteSubmission(election_id="election-1", district_id="d-bylaw", choice="YES")

        with pytest.raises(VoteRejected, match="already voted"):
            await service.submit_vote(submission)

        assert mock_store.votes.submit_vote.await_count == 1

    async def test_requires_login(self, anonymous_session, mock_store):
        submission = VoteSubmission(election_id="election-1", district_id="d-bylaw", choice="YES")

        with pytest.raises(NotAuthenticated):
            await ElectionService(anonymous_session).submit_vote(submission)

        mock_store.votes.submit_vote.assert_not_awaited()


@pytest.mark.unit
class TestApplyCandidate:
    """Tests for apply_candidate."""

    @pytest.fixture
    def application(self):
        return CandidateApplication(
            election_id="election-1",
            district_id="d-north",
            name="Kim Member",
            manifesto="Lower fees",
        )

    @pytest.fixture
    def photo(self):
        return FileUpload(filename="me.jpg", content=b"jpeg-bytes", content_type="image/jpeg")

    async def test_uploads_photo_then_saves_pending_row(self, service, mock_store, mock_storage, application, photo):
        mock_storage.upload_candidate_photo.return_value = "https://cdn.example/me.jpg"
        mock_store.candidates.create.return_value = Candidate(
            id="cand-1", name="Kim Member", status=CandidateStatus.PENDING
        )

        candidate = await service.apply_candidate(application, photo)

        assert candidate.status == CandidateStatus.PENDING
        mock_storage.upload_candidate_photo.assert_awaited_once_with(photo, "member-1")
        mock_storage.upload_proof_doc.assert_not_awaited()
        kwargs = mock_store.candidates.create.await_args.kwargs
        assert kwargs["photo_url"] == "https://cdn.example/me.jpg"
        assert kwargs["member_uuid"] == "member-1"
        assert kwargs["proof_path"] is None

    async def test_proof_document_path_is_stored(self, service, mock_store, mock_storage, application, photo):
        mock_storage.upload_candidate_photo.return_value = "https://cdn.example/me.jpg"
        mock_storage.upload_proof_doc.return_value = "member-1/1_proof_abc.pdf"
        proof = FileUpload(filename="proof.pdf", content=b"%PDF")

        await service.apply_candidate(application, photo, proof)

        assert mock_store.candidates.create.await_args.kwargs["proof_path"] == "member-1/1_proof_abc.pdf"

    async def test_photo_is_required(self, service, mock_store, application):
        with pytest.raises(PhotoRequired):
            await service.apply_candidate(application, None)

        mock_store.candidates.create.assert_not_awaited()

    async def test_upload_failure_stops_before_insert(self, service, mock_store, mock_storage, application, photo):
        mock_storage.upload_candidate_photo.side_effect = UploadError("Upload failed: quota exceeded")

        with pytest.raises(UploadError, match="quota exceeded"):
            await service.apply_candidate(application, photo)

        mock_store.candidates.create.assert_not_awaited()

    async def test_expired_session(self, anonymous_session, application, photo):
        with pytest.raises(NotAuthenticated):
            await ElectionService(anonymous_session).apply_candidate(application, photo)
