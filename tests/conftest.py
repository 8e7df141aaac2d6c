"""Pytest fixtures for the invoice dashboard tests.

The database session and the Redis view cache are replaced with in-process
doubles so the suite runs without PostgreSQL or Redis.
"""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import app
from src.database.session import get_db
from src.middleware.rate_limit import limiter
from src.modules.auth.dependencies import get_current_user
from src.modules.auth.schemas import AuthenticatedUser
from src.modules.views.cache import get_view_cache


class FakeViewCache:
    """Dict-backed stand-in for ViewCache that records invalidations."""

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.invalidated: list[str] = []

    async def invalidate(self, path: str) -> int:
        self.invalidated.append(path)
        stale = [key for key in self.store if key == path or key.startswith(f"{path}:")]
        for key in stale:
            del self.store[key]
        return len(stale)

    async def get_or_set(
        self,
        path: str,
        factory: Callable[[], Awaitable[Any]],
        variant: str | None = None,
        ttl: int | None = None,
    ) -> Any:
        key = path if variant is None else f"{path}:{variant}"
        if key not in self.store:
            self.store[key] = await factory()
        return self.store[key]


@pytest.fixture
def mock_db():
    """Create a mock AsyncSession."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    return session


@pytest.fixture
def view_cache() -> FakeViewCache:
    return FakeViewCache()


@pytest.fixture
def current_user() -> AuthenticatedUser:
    return AuthenticatedUser(id=uuid.uuid4(), email="user@nextmail.com")


@pytest_asyncio.fixture
async def async_client(mock_db, view_cache, current_user) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx AsyncClient wired to the app with mocked collaborators."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_view_cache] = lambda: view_cache
    app.dependency_overrides[get_current_user] = lambda: current_user
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def make_mutation_result(rowcount: int = 1, new_id: uuid.UUID | None = None) -> MagicMock:
    """Mock result of an INSERT/UPDATE/DELETE statement."""
    result = MagicMock()
    result.rowcount = rowcount
    result.scalar_one.return_value = new_id or uuid.uuid4()
    return result


@pytest.fixture
def mutation_result() -> Callable[..., MagicMock]:
    return make_mutation_result
