"""
Election and district repositories.
"""

from typing import Optional, Sequence

from supabase import AsyncClient

from core.exceptions import DataLoadFailure
from db.supabase_session import (
    DISTRICTS_TABLE,
    ELECTIONS_TABLE,
    fetch_one,
    fetch_rows,
    write_rows,
)
from models.election import District, Election, ElectionStatus


class ElectionRepository:
    """Repository for the elections table."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def list_by_status(self, statuses: Sequence[ElectionStatus]) -> list[Election]:
        """Elections in any of ``statuses``, newest first."""
        rows = await fetch_rows(
            self.client.table(ELECTIONS_TABLE)
            .select("*")
            .in_("status", [s.value for s in statuses])
            .order("created_at", desc=True),
            "list elections by status",
        )
        return [Election(**row) for row in rows]

    async def list_all(self) -> list[Election]:
        """Every election, newest first."""
        rows = await fetch_rows(
            self.client.table(ELECTIONS_TABLE).select("*").order("created_at", desc=True),
            "list elections",
        )
        return [Election(**row) for row in rows]

    async def get_latest(self) -> Optional[Election]:
        """The most recently created election, if any."""
        rows = await fetch_rows(
            self.client.table(ELECTIONS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(1),
            "get latest election",
        )
        return Election(**rows[0]) if rows else None

    async def update_status(self, election_id: str, status: ElectionStatus) -> None:
        await write_rows(
            self.client.table(ELECTIONS_TABLE).update({"status": status.value}).eq("id", election_id),
            "update election status",
        )


class DistrictRepository:
    """Repository for the districts table."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def get_by_id(self, district_id: str) -> District:
        """
        Get a district by id.

        Raises:
            DataLoadFailure: If the district does not exist (or is not visible)
        """
        row = await fetch_one(
            self.client.table(DISTRICTS_TABLE)
            .select("id, name, vote_type, quota, is_common")
            .eq("id", district_id)
            .maybe_single(),
            "get district",
        )
        if row is None:
            raise DataLoadFailure("District not found", context={"district_id": district_id})
        return District(**row)

    async def list_by_ids(self, district_ids: Sequence[str]) -> dict[str, District]:
        """Districts keyed by id."""
        if not district_ids:
            return {}
        rows = await fetch_rows(
            self.client.table(DISTRICTS_TABLE)
            .select("id, name, vote_type, quota, is_common")
            .in_("id", list(district_ids)),
            "list districts",
        )
        return {row["id"]: District(**row) for row in rows}
