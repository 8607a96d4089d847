"""
Cooperative member repository.
"""

from typing import Optional

from supabase import AsyncClient

from db.supabase_session import COOP_MEMBERS_TABLE, fetch_one
from models.member import CoopMember


class MemberRepository:
    """Repository for the coop_members table."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def get_by_id(self, member_id: str) -> Optional[CoopMember]:
        row = await fetch_one(
            self.client.table(COOP_MEMBERS_TABLE).select("*").eq("id", member_id).maybe_single(),
            "get member profile",
        )
        return CoopMember(**row) if row else None
