"""
Pytest fixtures for CoopVote backend tests.
"""

import os
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test.anon.key")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")


# =============================================================================
# Fake Supabase query builder
# =============================================================================


class FakeQuery:
    """
    Stand-in for a PostgREST request builder.

    Every builder method (select, eq, in_, order, limit, maybe_single,
    insert, update, ...) is recorded and returns the same query, so chained
    calls work. ``execute`` returns the configured data/count or raises the
    configured error.
    """

    def __init__(self, data: Any = None, count: Optional[int] = None, error: Optional[Exception] = None):
        self.data = data
        self.count = count
        self.error = error
        self.calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def called(self, name: str) -> list[tuple[tuple, dict]]:
        """Arguments of every call to builder method ``name``."""
        return [(args, kwargs) for call_name, args, kwargs in self.calls if call_name == name]

    async def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data, count=self.count)


class FakeSupabaseClient:
    """Minimal Supabase AsyncClient double: tables, RPC, storage and auth."""

    def __init__(self):
        self._queued: dict[str, list[FakeQuery]] = {}
        self.table_names: list[str] = []
        self.rpc_calls: list[tuple[str, dict]] = []
        self.rpc_query = FakeQuery()
        self.bucket = MagicMock()
        self.bucket.upload = AsyncMock(return_value={"Key": "ok"})
        self.bucket.create_signed_url = AsyncMock(return_value={"signedURL": "https://signed.example/doc"})
        self.bucket.get_public_url = AsyncMock(return_value="https://cdn.example/public/photo.jpg")
        self.storage = MagicMock()
        self.storage.from_ = MagicMock(return_value=self.bucket)
        self.auth = MagicMock()
        self.auth.get_user = AsyncMock(return_value=None)

    def queue(self, table: str, **kwargs) -> FakeQuery:
        """Queue the response of the next query against ``table``."""
        query = FakeQuery(**kwargs)
        self._queued.setdefault(table, []).append(query)
        return query

    def table(self, name: str) -> FakeQuery:
        self.table_names.append(name)
        queued = self._queued.get(name)
        if queued:
            return queued.pop(0)
        return FakeQuery(data=[])

    def rpc(self, fn: str, params: dict) -> FakeQuery:
        self.rpc_calls.append((fn, params))
        return self.rpc_query


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    """Fresh fake Supabase client."""
    return FakeSupabaseClient()


# =============================================================================
# Sessions and stores
# =============================================================================


@pytest.fixture
def mock_store():
    """VotingDataStore whose repositories are all AsyncMocks."""
    from repositories.provider import VotingDataStore

    return VotingDataStore(
        elections=AsyncMock(),
        districts=AsyncMock(),
        candidates=AsyncMock(),
        voters=AsyncMock(),
        votes=AsyncMock(),
        members=AsyncMock(),
        action_logs=AsyncMock(),
    )


@pytest.fixture
def mock_storage() -> AsyncMock:
    """StorageService double."""
    return AsyncMock()


@pytest.fixture
def sample_user():
    """Authenticated member."""
    from models.member import AuthUser

    return AuthUser(id="member-1", email="member@example.com")


@pytest.fixture
def session(fake_client, mock_store, mock_storage, sample_user):
    """Logged-in session over mocked repositories."""
    from models.member import CoopMember
    from services.session import ElectionSession

    mock_store.members.get_by_id.return_value = CoopMember(id=sample_user.id, name="Kim Member")
    return ElectionSession(
        fake_client,
        access_token="test-access-token",
        user=sample_user,
        store=mock_store,
        storage=mock_storage,
    )


@pytest.fixture
def anonymous_session(fake_client, mock_store, mock_storage):
    """Session without a logged-in user."""
    from services.session import ElectionSession

    return ElectionSession(fake_client, store=mock_store, storage=mock_storage)


# =============================================================================
# Sample rows
# =============================================================================


@pytest.fixture
def sample_districts():
    """A local candidate district, a binary district and a common district."""
    from models.election import District, VoteType

    return {
        "d-north": District(id="d-north", name="North", vote_type=VoteType.CANDIDATE, quota=2),
        "d-bylaw": District(id="d-bylaw", name="Bylaw Amendment", vote_type=VoteType.BINARY, quota=1),
        "d-common": District(id="d-common", name="At-Large", vote_type=VoteType.CANDIDATE, quota=1, is_common=True),
    }


@pytest.fixture
def make_candidate():
    """Factory for approved candidate rows."""
    from models.election import Candidate, CandidateStatus

    def _make(candidate_id: str, name: str, district_id: str = "d-north") -> Candidate:
        return Candidate(
            id=candidate_id,
            election_id="election-1",
            district_id=district_id,
            name=name,
            status=CandidateStatus.APPROVED,
        )

    return _make


# =============================================================================
# API client
# =============================================================================


@pytest.fixture
async def app() -> Any:
    """Create FastAPI application for testing."""
    from main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header; the session dependency is overridden in API tests."""
    return {"Authorization": "Bearer test-access-token"}
