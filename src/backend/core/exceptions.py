"""
Election error hierarchy.

Every error raised by the services derives from ElectionError so the API
layer can map the whole family to HTTP responses in one place. Errors carry
an optional context dict that is rendered into str() for logging.
"""

from typing import Any, Optional


class ElectionError(Exception):
    """Base exception for all election backend errors."""

    status_code: int = 500

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class NotAuthenticated(ElectionError):
    """No valid login session."""

    status_code = 401


class MemberNotFound(ElectionError):
    """The authenticated user has no cooperative member profile."""

    status_code = 404


class NotEnrolled(ElectionError):
    """The voter has no district assignment for the election."""

    status_code = 403

    def __init__(self, election_id: Optional[str] = None):
        super().__init__(
            "You are not assigned to a district in this election. Please contact an administrator.",
            context={"election_id": election_id} if election_id else None,
        )


class CandidateNotFound(ElectionError):
    """No candidacy with the given id is visible to the caller."""

    status_code = 404

    def __init__(self, candidate_id: str):
        super().__init__("Candidate not found", context={"candidate_id": candidate_id})


class AdminRequired(ElectionError):
    """The current user failed the election admin check."""

    status_code = 403


class UploadError(ElectionError):
    """File storage write failed."""

    status_code = 502


class BucketNotFound(UploadError):
    """The target storage bucket does not exist."""

    def __init__(self, bucket: str):
        self.bucket = bucket
        super().__init__(
            f"Storage bucket ({bucket}) does not exist. Please contact an administrator.",
            context={"bucket": bucket},
        )


class PhotoRequired(UploadError):
    """A candidacy was submitted without a profile photo."""

    status_code = 422

    def __init__(self):
        super().__init__("A profile photo is required.")


class VoteRejected(ElectionError):
    """
    The vote submission transaction refused the vote.

    The reason is the remote message verbatim (duplicate vote, election not
    open, ...). Rejected votes are never retried.
    """

    status_code = 409

    def __init__(self, reason: str, context: Optional[dict[str, Any]] = None):
        self.reason = reason
        super().__init__(reason, context=context)


class DataLoadFailure(ElectionError):
    """A read from or write to the data store failed."""

    status_code = 502
