"""Shared fixtures for unit tests."""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from core.exceptions import DurableStoreError
from domain.entities.profile import SurferProfile
from domain.entities.surf_session import SurfSession
from domain.services.profile_repository import TieredProfileRepository
from infrastructure.cache.profile_cache import ProfileCache
from infrastructure.memory.profile_store import InMemoryProfileStore


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWallClock:
    """UTC wall clock the tests move by hand."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 6, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FailingProfileStore:
    """Store whose every operation fails like an unreachable database."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, operation: str) -> DurableStoreError:
        self.calls.append(operation)
        return DurableStoreError(operation, ConnectionError("connection refused"))

    async def get_by_id(self, user_id: str) -> SurferProfile | None:
        raise self._fail("get_by_id")

    async def upsert(self, profile: SurferProfile) -> SurferProfile:
        raise self._fail("upsert")

    async def count_where(self, table: str, filters: Mapping[str, Any]) -> int:
        raise self._fail("count_where")

    async def add_session(self, session: SurfSession) -> SurfSession:
        raise self._fail("add_session")

    async def list_sessions(self, user_id: str) -> list[SurfSession]:
        raise self._fail("list_sessions")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wall_clock() -> FakeWallClock:
    return FakeWallClock()


@pytest.fixture
def cache(clock: FakeClock) -> ProfileCache:
    return ProfileCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def durable() -> InMemoryProfileStore:
    """Stand-in durable store that behaves like a healthy database."""
    return InMemoryProfileStore()


@pytest.fixture
def fallback() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def failing_store() -> FailingProfileStore:
    return FailingProfileStore()


@pytest.fixture
def repository(
    durable: InMemoryProfileStore,
    fallback: InMemoryProfileStore,
    cache: ProfileCache,
    wall_clock: FakeWallClock,
) -> TieredProfileRepository:
    return TieredProfileRepository(durable=durable, fallback=fallback, cache=cache, clock=wall_clock)
