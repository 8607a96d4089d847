"""
Tests for candidate repository.
"""

import pytest
from postgrest.exceptions import APIError

from core.exceptions import DataLoadFailure
from models.election import CandidateStatus
from repositories.candidate_repository import CandidateRepository


@pytest.mark.unit
class TestCandidateRepository:
    """Test CandidateRepository operations."""

    async def test_list_approved_filters(self, fake_client) -> None:
        """Test that only approved candidates of the district are selected, by name."""
        query = fake_client.queue("candidates", data=[{"id": "c1", "name": "Lee", "status": "APPROVED"}])

        candidates = await CandidateRepository(fake_client).list_approved("election-1", "d-north")

        assert candidates[0].status == CandidateStatus.APPROVED
        assert query.called("eq") == [
            (("election_id", "election-1"), {}),
            (("district_id", "d-north"), {}),
            (("status", "APPROVED"), {}),
        ]
        assert query.called("order") == [(("name",), {})]

    async def test_list_pending_embeds_district_name(self, fake_client) -> None:
        """Test pending candidates carry their district name."""
        fake_client.queue(
            "candidates",
            data=[{"id": "c1", "name": "Lee", "status": "PENDING", "districts": {"name": "North"}}],
        )

        candidates = await CandidateRepository(fake_client).list_pending("election-1")

        assert candidates[0].district_name == "North"

    async def test_create_inserts_pending_row(self, fake_client) -> None:
        """Test the inserted row is PENDING and keeps the proof path."""
        query = fake_client.queue(
            "candidates",
            data=[{"id": "c9", "name": "Kim", "status": "PENDING", "proof_path": "member-1/p.pdf"}],
        )

        candidate = await CandidateRepository(fake_client).create(
            election_id="election-1",
            district_id="d-north",
            member_uuid="member-1",
            name="Kim",
            photo_url="https://cdn.example/kim.jpg",
            proof_path="member-1/p.pdf",
        )

        row = query.called("insert")[0][0][0]
        assert row["status"] == "PENDING"
        assert row["proof_path"] == "member-1/p.pdf"
        assert row["member_uuid"] == "member-1"
        assert "created_at" in row
        assert candidate.id == "c9"

    async def test_create_without_proof_omits_column(self, fake_client) -> None:
        """Test that no proof path column is sent without a document."""
        query = fake_client.queue("candidates", data=[{"id": "c9", "name": "Kim"}])

        await CandidateRepository(fake_client).create(
            election_id="election-1",
            district_id="d-north",
            member_uuid="member-1",
            name="Kim",
            photo_url="https://cdn.example/kim.jpg",
        )

        assert "proof_path" not in query.called("insert")[0][0][0]

    async def test_create_failure_keeps_remote_message(self, fake_client) -> None:
        """Test insert failures surface the remote message."""
        fake_client.queue("candidates", error=APIError({"message": "duplicate key value", "code": "23505"}))

        with pytest.raises(DataLoadFailure, match="duplicate key value"):
            await CandidateRepository(fake_client).create(
                election_id="election-1",
                district_id="d-north",
                member_uuid="member-1",
                name="Kim",
                photo_url="https://cdn.example/kim.jpg",
            )

    async def test_update_status(self, fake_client) -> None:
        """Test review decisions are written by candidate id."""
        query = fake_client.queue("candidates", data=[])

        await CandidateRepository(fake_client).update_status("c1", CandidateStatus.REJECTED)

        assert query.called("update") == [(({"status": "REJECTED"},), {})]
        assert query.called("eq") == [(("id", "c1"), {})]

    async def test_get_by_id(self, fake_client) -> None:
        """Test a single candidate is fetched by id."""
        query = fake_client.queue("candidates", data={"id": "c1", "election_id": "election-1", "name": "Lee"})

        candidate = await CandidateRepository(fake_client).get_by_id("c1")

        assert candidate.election_id == "election-1"
        assert query.called("eq") == [(("id", "c1"), {})]
        assert query.called("maybe_single") == [((), {})]

    async def test_get_missing_candidate(self, fake_client) -> None:
        fake_client.queue("candidates", data=None)

        assert await CandidateRepository(fake_client).get_by_id("c404") is None
