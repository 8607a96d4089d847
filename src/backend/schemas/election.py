"""
Election administration schemas.
"""

from pydantic import BaseModel

from models.election import ElectionStatus


class ElectionStatusUpdate(BaseModel):
    """Request body for changing an election's status."""

    status: ElectionStatus


class AdminCheck(BaseModel):
    """Result of the advisory admin check."""

    is_admin: bool
