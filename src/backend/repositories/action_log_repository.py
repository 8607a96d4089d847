"""
Admin action log repository (append-only).
"""

from datetime import datetime, timezone
from typing import Any, Optional

from supabase import AsyncClient

from db.supabase_session import ELECTION_LOGS_TABLE, fetch_rows, write_rows
from models.action_log import ActionLog


class ActionLogRepository:
    """Repository for the election_logs table."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def append(
        self,
        election_id: str,
        admin_uuid: str,
        action_type: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        await write_rows(
            self.client.table(ELECTION_LOGS_TABLE).insert(
                {
                    "election_id": election_id,
                    "admin_uuid": admin_uuid,
                    "action_type": action_type,
                    "details": details or {},
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }
            ),
            "append action log",
        )

    async def list_recent(self, election_id: str, limit: int) -> list[ActionLog]:
        """Most recent entries of an election, newest first."""
        rows = await fetch_rows(
            self.client.table(ELECTION_LOGS_TABLE)
            .select("*")
            .eq("election_id", election_id)
            .order("created_at", desc=True)
            .limit(limit),
            "list action logs",
        )
        return [ActionLog(**row) for row in rows]
