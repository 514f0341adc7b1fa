"""Profile store protocol (durable and fallback tiers)."""

from collections.abc import Mapping
from typing import Any, Protocol

from domain.entities.profile import SurferProfile
from domain.entities.surf_session import SurfSession

PROFILES_TABLE = "surfer_profiles"
SESSIONS_TABLE = "surf_sessions"


class IProfileStore(Protocol):
    """Record store keyed by user id.

    Implementations raise ``DurableStoreError`` for any failure, timeouts
    included. Callers never retry.
    """

    async def get_by_id(self, user_id: str) -> SurferProfile | None:
        """Get a profile by user id, or None when absent."""
        ...

    async def upsert(self, profile: SurferProfile) -> SurferProfile:
        """Insert or fully replace a profile."""
        ...

    async def count_where(self, table: str, filters: Mapping[str, Any]) -> int:
        """Count rows of ``table`` matching every equality filter."""
        ...

    async def add_session(self, session: SurfSession) -> SurfSession:
        """Store a completed session."""
        ...

    async def list_sessions(self, user_id: str) -> list[SurfSession]:
        """Get a user's sessions, newest first."""
        ...
