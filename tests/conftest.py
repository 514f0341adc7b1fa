"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

# Disable rate limiting and the durable store in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.profile_repository import TieredProfileRepository
from infrastructure.cache.profile_cache import ProfileCache
from infrastructure.database.models import Base
from infrastructure.database.repositories.sqlalchemy_profile_store import SQLAlchemyProfileStore
from infrastructure.memory.profile_store import InMemoryProfileStore


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with all tables."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def sql_store(session_factory: async_sessionmaker[AsyncSession]) -> SQLAlchemyProfileStore:
    """Durable store backed by in-memory SQLite."""
    return SQLAlchemyProfileStore(session_factory, timeout_seconds=5.0)


@pytest.fixture
def fallback_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def app_repository(
    sql_store: SQLAlchemyProfileStore, fallback_store: InMemoryProfileStore
) -> TieredProfileRepository:
    """Repository used by the API tests: SQLite durable tier + in-memory fallback."""
    return TieredProfileRepository(
        durable=sql_store,
        fallback=fallback_store,
        cache=ProfileCache(ttl_seconds=300),
    )


@pytest.fixture
async def client(app_repository: TieredProfileRepository) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against a fresh app."""
    from main import create_app

    app = create_app(repository=app_repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def fallback_only_client() -> AsyncGenerator[AsyncClient, None]:
    """Client for an app running without a durable store."""
    from main import create_app

    repository = TieredProfileRepository(
        durable=None,
        fallback=InMemoryProfileStore(),
        cache=ProfileCache(ttl_seconds=300),
    )
    app = create_app(repository=repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
