"""
Shared dependencies for API endpoints.

Includes:
- Per-request election session from the member's Supabase access token
- Service construction
- Advisory admin gate
"""

from collections.abc import AsyncGenerator
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AdminRequired
from db.supabase_session import close_client, create_user_client
from services.admin_service import AdminService
from services.election_service import ElectionService
from services.session import ElectionSession

logger = structlog.get_logger(__name__)

# Security schemes
security = HTTPBearer()


async def get_election_session(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> AsyncGenerator[ElectionSession, None]:
    """
    Build an ElectionSession acting as the bearer of the access token.

    Raises:
        HTTPException: If the token does not resolve to a user
    """
    token = credentials.credentials
    client = await create_user_client(token)
    try:
        session = ElectionSession(client, access_token=token)
        if await session.current_user() is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            )
        yield session
    finally:
        await close_client(client)


async def get_election_service(
    session: Annotated[ElectionSession, Depends(get_election_session)],
) -> ElectionService:
    """Member-facing service bound to the request's session."""
    return ElectionService(session)


async def get_admin_service(
    session: Annotated[ElectionSession, Depends(get_election_session)],
) -> AdminService:
    """
    Admin service for users passing the database's admin check.

    The database enforces admin rights on every query; this check only
    rejects obviously unauthorized callers early.

    Raises:
        AdminRequired: If the user is not an election admin
    """
    service = AdminService(session)
    if not await service.is_admin():
        user = await session.current_user()
        logger.warning("non_admin_access_attempt", user_id=user.id if user else None)
        raise AdminRequired("Admin access required", context={"user_id": user.id if user else None})
    return service
