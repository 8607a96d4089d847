"""
Voter roll and vote log repository.

Answers "where does this member vote" and "has this member voted there"
without ever touching ballot content.
"""

from supabase import AsyncClient

from db.supabase_session import (
    ELECTION_VOTERS_TABLE,
    VOTE_LOGS_TABLE,
    fetch_count,
    fetch_rows,
)


class VoterRepository:
    """Repository for the election_voters and vote_logs tables."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def list_district_ids(self, election_id: str, member_uuid: str) -> list[str]:
        """District ids the member is enrolled in for an election."""
        rows = await fetch_rows(
            self.client.table(ELECTION_VOTERS_TABLE)
            .select("district_id")
            .eq("election_id", election_id)
            .eq("member_uuid", member_uuid),
            "list voter assignments",
        )
        return [row["district_id"] for row in rows if row.get("district_id")]

    async def has_voted(self, election_id: str, district_id: str, member_uuid: str) -> bool:
        """Whether a vote log exists for (election, district, member)."""
        rows = await fetch_rows(
            self.client.table(VOTE_LOGS_TABLE)
            .select("id")
            .eq("election_id", election_id)
            .eq("district_id", district_id)
            .eq("member_uuid", member_uuid)
            .limit(1),
            "check vote log",
        )
        return len(rows) > 0

    async def count_voters(self, election_id: str) -> int:
        """Eligible voters on the roll of an election."""
        return await fetch_count(
            self.client.table(ELECTION_VOTERS_TABLE)
            .select("*", count="exact", head=True)
            .eq("election_id", election_id),
            "count voters",
        )

    async def count_votes_cast(self, election_id: str) -> int:
        """Vote log rows of an election."""
        return await fetch_count(
            self.client.table(VOTE_LOGS_TABLE)
            .select("*", count="exact", head=True)
            .eq("election_id", election_id),
            "count votes cast",
        )
