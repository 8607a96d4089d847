"""
Admin action log rows (append-only audit trail).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from models.base import TableRow


class ActionType(str, Enum):
    """Kinds of admin actions written to the audit log."""

    STATUS_CHANGE = "STATUS_CHANGE"
    CANDIDATE_REVIEW = "CANDIDATE_REVIEW"


class ActionLog(TableRow):
    """Row of the election_logs table."""

    id: Optional[str] = None
    election_id: Optional[str] = None
    admin_uuid: Optional[str] = None
    action_type: str
    details: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
