"""Process-local profile store used as the fallback tier."""

from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from domain.entities.profile import SurferProfile
from domain.entities.surf_session import SurfSession
from domain.repositories.profile_store import PROFILES_TABLE, SESSIONS_TABLE


class InMemoryProfileStore:
    """In-memory implementation of IProfileStore.

    Lives for the process lifetime only. Entities are copied on the way in
    and on the way out, so callers never share state with the table.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, SurferProfile] = {}
        self._sessions: dict[str, list[SurfSession]] = {}

    def __len__(self) -> int:
        return len(self._profiles)

    async def get_by_id(self, user_id: str) -> SurferProfile | None:
        profile = self._profiles.get(user_id)
        return deepcopy(profile) if profile is not None else None

    async def upsert(self, profile: SurferProfile) -> SurferProfile:
        self._profiles[profile.id] = deepcopy(profile)
        return profile

    async def count_where(self, table: str, filters: Mapping[str, Any]) -> int:
        if table == PROFILES_TABLE:
            documents = [p.to_document() for p in self._profiles.values()]
        elif table == SESSIONS_TABLE:
            documents = [s.to_document() for rows in self._sessions.values() for s in rows]
        else:
            raise ValueError(f"Unknown table: {table}")
        return sum(1 for doc in documents if all(doc.get(k) == v for k, v in filters.items()))

    async def add_session(self, session: SurfSession) -> SurfSession:
        self._sessions.setdefault(session.user_id, []).append(deepcopy(session))
        return session

    async def list_sessions(self, user_id: str) -> list[SurfSession]:
        sessions = self._sessions.get(user_id, [])
        return deepcopy(sorted(sessions, key=lambda s: s.date, reverse=True))
