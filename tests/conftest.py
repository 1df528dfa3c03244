"""Shared test fixtures."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.cg_auth.service import CredentialService
from src.cg_common.database import get_db_session
from src.cg_gateway.api.router import get_credential_service
from src.main import app
from tests.fakes import FakeSession, InMemoryUserRepository


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def fake_db() -> FakeSession:
    return FakeSession()


@pytest.fixture
async def client(
    user_repository: InMemoryUserRepository, fake_db: FakeSession
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app with the store swapped for a fake."""
    service = CredentialService(repository=user_repository)

    async def _db() -> AsyncIterator[FakeSession]:
        yield fake_db

    app.dependency_overrides[get_db_session] = _db
    app.dependency_overrides[get_credential_service] = lambda: service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
