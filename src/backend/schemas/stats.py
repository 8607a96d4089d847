"""
Turnout and result schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field

from models.election import VoteType


class TurnoutStats(BaseModel):
    """Votes cast against eligible voters for one election."""

    total: int = 0
    current: int = 0
    percent: float = 0


class ResultEntry(BaseModel):
    """Aggregated count for one candidate or one binary answer."""

    candidate_id: Optional[str] = None
    choice: Optional[str] = None
    label: str
    vote_count: int
    vote_percentage: float
    is_leading: bool = Field(False, description="Within the district's seat quota")


class DistrictResult(BaseModel):
    """Tally of one district."""

    district_id: str
    district_name: str
    vote_type: VoteType
    round: int = Field(1, description="Round the counts belong to (latest round held)")
    quota: Optional[int] = None
    total_ballots: int
    entries: list[ResultEntry]


class ElectionResults(BaseModel):
    """Tally of every district of an election."""

    election_id: str
    total_ballots: int
    districts: list[DistrictResult]
