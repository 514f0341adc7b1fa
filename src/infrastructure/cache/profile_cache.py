"""TTL cache of profile snapshots."""

import time
from collections.abc import Callable
from copy import deepcopy
from dataclasses import dataclass

from domain.entities.profile import SurferProfile

DEFAULT_TTL_SECONDS = 300.0


@dataclass
class CacheEntry:
    profile: SurferProfile
    written_at: float


class ProfileCache:
    """Read-through cache keyed by user id.

    An entry is valid while ``now - written_at < ttl``. Expired entries stay
    in memory until the next ``put`` for the same id replaces them.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, user_id: str) -> SurferProfile | None:
        """Return a copy of the cached profile, or None if absent or expired."""
        entry = self._entries.get(user_id)
        if entry is None or self._clock() - entry.written_at >= self.ttl_seconds:
            return None
        return deepcopy(entry.profile)

    def put(self, profile: SurferProfile) -> None:
        self._entries[profile.id] = CacheEntry(deepcopy(profile), self._clock())

    def clear(self) -> int:
        """Drop every entry and return how many were dropped."""
        count = len(self._entries)
        self._entries.clear()
        return count
