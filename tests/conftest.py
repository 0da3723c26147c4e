# tests/conftest.py

"""
Shared fixtures: in-memory SQLite database, sessions, the ASGI test client
and a registered client with its plain text secret.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

from typing import Any, AsyncGenerator, Dict

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from oauth_gateway.adapters.outbound.persistence.models import Base
from oauth_gateway.adapters.outbound.persistence.repositories.client_repository import client_repository
from oauth_gateway.adapters.outbound.persistence.seeds.scopes import run_scopes_seed

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[Any, None]:
    """Create async SQLAlchemy engine with the whole schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(async_engine: Any) -> async_sessionmaker:
    return async_sessionmaker(async_engine, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(session_maker: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for testing."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def scopes(session_maker: async_sessionmaker) -> None:
    async with session_maker() as db:
        await run_scopes_seed(db, ["basic", "write"])


@pytest_asyncio.fixture
async def registered_client(session_maker: async_sessionmaker, scopes: None) -> Dict[str, str]:
    """A client allowed 5 requests per window, with one redirect URI."""
    async with session_maker() as db:
        return await client_repository.create_with_credentials(
            db,
            name="Partner",
            request_limit=5,
            redirect_uris=["https://partner.example/callback"],
        )


@pytest_asyncio.fixture
async def async_client(session_maker: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """ASGI test client whose requests use the test database."""
    from oauth_gateway.adapters.outbound.persistence.database import get_db
    from oauth_gateway.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
