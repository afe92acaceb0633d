"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from argon2 import PasswordHasher
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.security import Argon2PasswordHasher, TokenIssuer
from models.base import Base

TEST_JWT_SECRET = "test-secret-do-not-use-in-production-0123456789"

# Must be set before any app imports that trigger Settings validation.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = TEST_JWT_SECRET


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """A fresh SQLite database file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with all tables created."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """An async session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def password_hasher() -> Argon2PasswordHasher:
    """Argon2 hasher with minimal cost parameters to keep tests fast."""
    return Argon2PasswordHasher(
        PasswordHasher(time_cost=1, memory_cost=8, parallelism=1),
    )


@pytest.fixture
def token_issuer() -> TokenIssuer:
    """Token issuer using the same secret as the app under test."""
    return TokenIssuer(secret=TEST_JWT_SECRET)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    password_hasher: Argon2PasswordHasher,
) -> AsyncGenerator[AsyncClient]:
    """
    Create a test client wired to the per-test database.

    Each request gets its own session that commits at the end, the same way
    the production session dependency behaves.
    """
    # Clear the settings cache so it picks up the test environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.dependencies import get_password_hasher
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def signup(client: AsyncClient, email: str, password: str = "password123") -> str:
    """Sign up a user through the API and return the access token."""
    response = await client.post(
        "/auth/signup",
        json={"email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["access_token"]


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization headers for a freshly signed-up user."""
    token = await signup(client, "user1@example.com")
    return bearer(token)
