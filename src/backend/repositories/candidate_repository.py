"""
Candidate repository.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from supabase import AsyncClient

from core.exceptions import DataLoadFailure
from db.supabase_session import CANDIDATES_TABLE, fetch_one, fetch_rows, write_rows
from models.election import Candidate, CandidateStatus

logger = structlog.get_logger(__name__)


class CandidateRepository:
    """Repository for the candidates table."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def get_by_id(self, candidate_id: str) -> Optional[Candidate]:
        row = await fetch_one(
            self.client.table(CANDIDATES_TABLE).select("*").eq("id", candidate_id).maybe_single(),
            "get candidate",
        )
        return Candidate(**row) if row else None

    async def list_approved(self, election_id: str, district_id: str) -> list[Candidate]:
        """Approved candidates of one district, by name."""
        rows = await fetch_rows(
            self.client.table(CANDIDATES_TABLE)
            .select("*")
            .eq("election_id", election_id)
            .eq("district_id", district_id)
            .eq("status", CandidateStatus.APPROVED.value)
            .order("name"),
            "list approved candidates",
        )
        return [Candidate(**row) for row in rows]

    async def list_pending(self, election_id: str) -> list[Candidate]:
        """Candidates awaiting review, with their district name embedded."""
        rows = await fetch_rows(
            self.client.table(CANDIDATES_TABLE)
            .select("*, districts(name)")
            .eq("election_id", election_id)
            .eq("status", CandidateStatus.PENDING.value),
            "list pending candidates",
        )
        return [Candidate(**row) for row in rows]

    async def create(
        self,
        election_id: str,
        district_id: str,
        member_uuid: str,
        name: str,
        photo_url: str,
        manifesto: Optional[str] = None,
        proof_path: Optional[str] = None,
    ) -> Candidate:
        """
        Insert a candidacy in PENDING status.

        Raises:
            DataLoadFailure: If the insert fails; the remote message is appended
        """
        row = {
            "election_id": election_id,
            "district_id": district_id,
            "member_uuid": member_uuid,
            "name": name,
            "photo_url": photo_url,
            "manifesto": manifesto,
            "status": CandidateStatus.PENDING.value,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        if proof_path:
            row["proof_path"] = proof_path

        rows = await write_rows(self.client.table(CANDIDATES_TABLE).insert(row), "save candidate application")
        if not rows:
            raise DataLoadFailure("save candidate application failed: no row returned")

        logger.info("candidate_applied", election_id=election_id, district_id=district_id)
        return Candidate(**rows[0])

    async def update_status(self, candidate_id: str, status: CandidateStatus) -> None:
        await write_rows(
            self.client.table(CANDIDATES_TABLE).update({"status": status.value}).eq("id", candidate_id),
            "review candidate",
        )
