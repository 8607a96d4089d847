"""
Per-request election session.

Holds the Supabase client acting for one member, the resolved auth user and
the member profile once loaded. A session is created per request and passed
explicitly to the services; nothing here is process-wide.
"""

from typing import Optional

import structlog
from supabase import AsyncClient, AuthError

from core.exceptions import DataLoadFailure, NotAuthenticated
from models.member import AuthUser, CoopMember
from repositories.provider import VotingDataStore
from services.storage_service import StorageService

logger = structlog.get_logger(__name__)


class ElectionSession:
    """Authentication and data access context for one caller."""

    def __init__(
        self,
        client: AsyncClient,
        access_token: Optional[str] = None,
        user: Optional[AuthUser] = None,
        store: Optional[VotingDataStore] = None,
        storage: Optional[StorageService] = None,
    ):
        self.client = client
        self.access_token = access_token
        self.store = store or VotingDataStore.from_client(client)
        self.storage = storage or StorageService(client)
        self._user = user
        self.member_profile: Optional[CoopMember] = None

    async def current_user(self) -> Optional[AuthUser]:
        """
        The authenticated user, or None when there is no valid session.

        The user is looked up once from the access token and then reused.
        """
        if self._user is not None:
            return self._user
        if not self.access_token:
            return None

        try:
            response = await self.client.auth.get_user(self.access_token)
        except AuthError as e:
            logger.info("auth_user_lookup_failed", error=str(e))
            return None

        if response is None or response.user is None:
            return None

        self._user = AuthUser(id=str(response.user.id), email=response.user.email)
        return self._user

    async def current_session(self) -> Optional[dict]:
        """Access token and user of a valid session, or None."""
        user = await self.current_user()
        if user is None:
            return None
        return {"access_token": self.access_token, "user": user}

    async def require_user(self) -> AuthUser:
        """
        The authenticated user.

        Raises:
            NotAuthenticated: If the session is missing or expired
        """
        user = await self.current_user()
        if user is None:
            raise NotAuthenticated("Your login session has expired. Please log in again.")
        return user

    async def load_member_profile(self) -> Optional[CoopMember]:
        """
        Member profile of the current user, loaded once per session.

        Returns:
            The profile, or None when not logged in
        """
        if self.member_profile is not None:
            return self.member_profile

        user = await self.current_user()
        if user is None:
            logger.info("session_not_logged_in")
            return None

        try:
            self.member_profile = await self.store.members.get_by_id(user.id)
        except DataLoadFailure:
            logger.error("member_profile_load_failed", user_id=user.id)
            raise
        return self.member_profile
