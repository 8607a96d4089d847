"""
Ballot assembly and turnout/result aggregation.

Pure functions over rows that have already been fetched. Nothing in this
module performs I/O, caches, or mutates its inputs; callers fetch the data
(concurrently, if they like) and pass fully resolved lookups in.
"""

import locale
import unicodedata
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Optional, Union

from core.exceptions import NotEnrolled
from models.election import Candidate, District, VoteType
from models.vote import BallotRecord
from schemas.ballot import Ballot
from schemas.stats import DistrictResult, ResultEntry, TurnoutStats

DistrictLookup = Union[Mapping[str, District], Callable[[str], District]]
CandidateLookup = Union[Mapping[str, Sequence[Candidate]], Callable[[str], Sequence[Candidate]]]
VoteLogLookup = Union[Mapping[str, bool], set, frozenset, Callable[[str], bool]]


def _base_letters(name: str) -> str:
    """Casefolded name with accents and other combining marks removed."""
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def _name_key(name: str) -> tuple[str, str, str]:
    """
    Locale-aware sort key.

    Names compare by their base letters under the process collation
    (LC_COLLATE), so "Émile" sorts with "E" even in the C locale. Accents,
    then the raw name, break ties deterministically.
    """
    return (locale.strxfrm(_base_letters(name)), locale.strxfrm(name.casefold()), name)


def _resolve(lookup, key: str):
    if callable(lookup):
        return lookup(key)
    return lookup[key]


def _has_voted(lookup: VoteLogLookup, district_id: str) -> bool:
    if isinstance(lookup, (set, frozenset)):
        return district_id in lookup
    if isinstance(lookup, Mapping):
        return bool(lookup.get(district_id, False))
    return bool(lookup(district_id))


def is_eligible_for_uncontested(vote_type: VoteType, candidate_count: int, quota: int) -> bool:
    """
    Whether a district can be decided without a contest.

    True only for candidate districts with at least one approved candidate
    and no more candidates than seats. Binary districts are never uncontested.
    """
    if vote_type != VoteType.CANDIDATE:
        return False
    return 0 < candidate_count <= quota


def sort_ballots(ballots: Iterable[Ballot]) -> list[Ballot]:
    """Local districts first, common (at-large) districts last, each group by name."""
    return sorted(
        ballots,
        key=lambda b: (b.district.is_common, _name_key(b.district.name)),
    )


def build_voter_ballots(
    voter_assignments: Sequence[str],
    district_lookup: DistrictLookup,
    candidate_lookup: CandidateLookup,
    vote_log_lookup: VoteLogLookup,
) -> list[Ballot]:
    """
    Build the ordered ballot list of one voter.

    Args:
        voter_assignments: District ids the voter is enrolled in
        district_lookup: District id -> District (mapping or callable)
        candidate_lookup: District id -> approved candidates; only consulted
            for CANDIDATE districts
        vote_log_lookup: District id -> whether a vote log exists (mapping,
            set of voted district ids, or predicate)

    Returns:
        Ballots sorted with common districts last and by name within each group

    Raises:
        NotEnrolled: If the voter has no assignments
    """
    if not voter_assignments:
        raise NotEnrolled()

    ballots = []
    for district_id in voter_assignments:
        district = _resolve(district_lookup, district_id)

        candidates: list[Candidate] = []
        if district.vote_type == VoteType.CANDIDATE:
            candidates = sorted(
                _resolve(candidate_lookup, district_id),
                key=lambda c: _name_key(c.name),
            )

        ballots.append(
            Ballot(
                district_id=district_id,
                district=district,
                candidates=candidates,
                has_voted=_has_voted(vote_log_lookup, district_id),
                is_uncontested=is_eligible_for_uncontested(
                    district.vote_type, len(candidates), district.quota
                ),
            )
        )

    return sort_ballots(ballots)


def compute_turnout(total_voter_count: Optional[int], cast_vote_count: Optional[int]) -> TurnoutStats:
    """
    Turnout of an election.

    Missing counts are treated as zero. The percentage is rounded to one
    decimal and is 0 when there are no eligible voters.
    """
    total = total_voter_count or 0
    current = cast_vote_count or 0
    percent = round(current / total * 100, 1) if total > 0 else 0
    return TurnoutStats(total=total, current=current, percent=percent)


def _percentage(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total > 0 else 0.0


def tally_results(
    ballot_records: Iterable[BallotRecord],
    districts: Optional[Mapping[str, District]] = None,
) -> list[DistrictResult]:
    """
    Aggregate raw ballot rows into per-district results.

    Candidate districts are counted per candidate, binary districts per
    answer. Entries are ordered by vote count (highest first), then label.
    In candidate districts the top ``quota`` entries are flagged as leading.

    Only the latest round of each district is counted: a runoff replaces the
    round before it. Ballots without a round belong to round 1.

    Args:
        ballot_records: Ballot rows with embedded district/candidate names
        districts: Optional district rows by id; supplies quota and the
            common-last ordering

    Returns:
        One DistrictResult per district that received ballots
    """
    districts = districts or {}
    grouped: dict[str, list[BallotRecord]] = {}
    for record in ballot_records:
        if not record.district_id:
            continue
        grouped.setdefault(record.district_id, []).append(record)

    results = []
    for district_id, all_records in grouped.items():
        latest_round = max(record.round or 1 for record in all_records)
        records = [record for record in all_records if (record.round or 1) == latest_round]
        district = districts.get(district_id)
        embedded = records[0].districts
        name = district.name if district else (embedded.name if embedded and embedded.name else district_id)
        vote_type = (
            district.vote_type
            if district
            else (embedded.vote_type if embedded and embedded.vote_type else VoteType.CANDIDATE)
        )
        quota = district.quota if district else None

        counts: dict[tuple[Optional[str], Optional[str]], int] = {}
        labels: dict[tuple[Optional[str], Optional[str]], str] = {}
        for record in records:
            if vote_type == VoteType.CANDIDATE:
                key = (record.candidate_id, None)
                label = record.candidates.name if record.candidates and record.candidates.name else None
            else:
                key = (None, record.choice)
                label = record.choice
            counts[key] = counts.get(key, 0) + 1
            labels.setdefault(key, label or "(blank)")

        total = len(records)
        ordered = sorted(counts, key=lambda k: (-counts[k], _name_key(labels[k])))
        entries = [
            ResultEntry(
                candidate_id=key[0],
                choice=key[1],
                label=labels[key],
                vote_count=counts[key],
                vote_percentage=_percentage(counts[key], total),
                is_leading=(
                    vote_type == VoteType.CANDIDATE
                    and quota is not None
                    and rank < quota
                ),
            )
            for rank, key in enumerate(ordered)
        ]

        results.append(
            DistrictResult(
                district_id=district_id,
                district_name=name,
                vote_type=vote_type,
                round=latest_round,
                quota=quota,
                total_ballots=total,
                entries=entries,
            )
        )

    return sorted(
        results,
        key=lambda r: (
            districts[r.district_id].is_common if r.district_id in districts else False,
            _name_key(r.district_name),
        ),
    )
