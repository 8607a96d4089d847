"""
Ballot rows.

Ballots hold the vote content but no member reference; the separate vote log
records only that a member voted in a district. Both tables are written
exclusively by the submit_vote function in the database.
"""

from typing import Optional

from models.base import TableRow
from models.election import DistrictRef


class CandidateRef(TableRow):
    """Candidate columns embedded in a ballot row."""

    name: Optional[str] = None


class BallotRecord(TableRow):
    """
    Anonymous ballot row used for tallying.

    Selected with ``districts(name, vote_type)`` and ``candidates(name)``.
    """

    district_id: Optional[str] = None
    candidate_id: Optional[str] = None
    choice: Optional[str] = None
    round: Optional[int] = None
    districts: Optional[DistrictRef] = None
    candidates: Optional[CandidateRef] = None
