"""
Supabase client management and query helpers.

Every request gets its own client carrying the member's access token, so
that the database's row-level security policies see the member as the
caller. The client is closed when the request ends.

The helpers below execute PostgREST queries and translate transport and API
errors into DataLoadFailure, so repositories never leak library exceptions.
"""

from typing import Any, Optional

import httpx
import structlog
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from core.config import settings
from core.exceptions import DataLoadFailure

logger = structlog.get_logger(__name__)

# Table names
ELECTIONS_TABLE = "elections"
DISTRICTS_TABLE = "districts"
CANDIDATES_TABLE = "candidates"
ELECTION_VOTERS_TABLE = "election_voters"
VOTE_LOGS_TABLE = "vote_logs"
BALLOTS_TABLE = "ballots"
COOP_MEMBERS_TABLE = "coop_members"
ELECTION_LOGS_TABLE = "election_logs"

# Remote functions
SUBMIT_VOTE_RPC = "submit_vote"


async def create_user_client(access_token: str) -> AsyncClient:
    """
    Create a client that acts as the member owning ``access_token``.

    Args:
        access_token: The member's Supabase access token (JWT)

    Returns:
        AsyncClient whose table, RPC and storage requests carry the token
    """
    options = AsyncClientOptions(headers={"Authorization": f"Bearer {access_token}"})
    return await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY, options=options)


async def close_client(client: AsyncClient) -> None:
    """Close the HTTP sessions behind a client's auth, table and storage interfaces."""
    await client.auth.close()
    await client.postgrest.aclose()
    await client.storage.session.aclose()


# ============================================================================
# Query helpers
# ============================================================================


async def _execute(query: Any, operation: str) -> Any:
    try:
        return await query.execute()
    except APIError as e:
        logger.error("supabase_query_failed", operation=operation, error=e.message, code=e.code)
        raise DataLoadFailure(f"{operation} failed: {e.message}", context={"code": e.code}) from e
    except httpx.HTTPError as e:
        logger.error("supabase_transport_failed", operation=operation, error=str(e))
        raise DataLoadFailure(f"{operation} failed: {e}") from e


async def fetch_rows(query: Any, operation: str) -> list[dict[str, Any]]:
    """
    Execute a select query and return its rows.

    Args:
        query: PostgREST request builder (not yet executed)
        operation: Short description used in logs and error messages

    Returns:
        List of row dicts (empty when nothing matched)
    """
    response = await _execute(query, operation)
    return list(response.data or [])


async def fetch_one(query: Any, operation: str) -> Optional[dict[str, Any]]:
    """
    Execute a ``maybe_single()`` query.

    Returns:
        The row dict, or None when no row matched
    """
    response = await _execute(query, operation)
    if response is None or not response.data:
        return None
    return response.data


async def fetch_count(query: Any, operation: str) -> int:
    """
    Execute a ``count="exact", head=True`` query and return the count.

    A missing count is treated as 0.
    """
    response = await _execute(query, operation)
    return response.count or 0


async def write_rows(query: Any, operation: str) -> list[dict[str, Any]]:
    """Execute an insert/update query and return the affected rows."""
    response = await _execute(query, operation)
    return list(response.data or [])
