"""Tiered profile repository: TTL cache, durable store, fallback, default."""

from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from typing import Any

import structlog

from core.exceptions import DurableStoreError, PersistenceError
from domain.entities.profile import SurferProfile, utcnow
from domain.entities.surf_session import SurfSession
from domain.repositories.profile_store import PROFILES_TABLE, SESSIONS_TABLE, IProfileStore
from infrastructure.cache.profile_cache import ProfileCache

logger = structlog.get_logger()


class TieredProfileRepository:
    """Profile persistence that degrades instead of failing.

    Reads go cache -> durable -> fallback -> synthesized default and never
    raise. Writes go to the durable store and the fallback table
    independently and succeed if either accepts them. The cache is only
    refreshed from durable reads and from explicit writes.

    ``durable`` may be None, in which case the repository runs on the
    fallback table alone.
    """

    def __init__(
        self,
        durable: IProfileStore | None,
        fallback: IProfileStore,
        cache: ProfileCache,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._durable = durable
        self._fallback = fallback
        self._cache = cache
        self._clock = clock

    @property
    def durable_store(self) -> IProfileStore | None:
        return self._durable

    # --- Profiles ---

    async def create(self, user_data: Mapping[str, Any]) -> SurferProfile:
        """Build a complete profile from partial input and persist it.

        Raises:
            PersistenceError: If neither the durable store nor the fallback
                table accepted the write.
        """
        profile = SurferProfile.from_user_data(user_data, now=self._clock())
        await self._save(profile)
        logger.info("profile_created", user_id=profile.id)
        return profile

    async def read(self, user_id: str) -> SurferProfile:
        """Get a profile, synthesizing and persisting a default on a miss."""
        cached = self._cache.get(user_id)
        if cached is not None:
            logger.debug("profile_cache_hit", user_id=user_id)
            return cached

        if self._durable is not None:
            try:
                profile = await self._durable.get_by_id(user_id)
            except DurableStoreError as exc:
                logger.warning("durable_store_read_failed", user_id=user_id, error=exc.message)
            else:
                if profile is not None:
                    self._cache.put(profile)
                    return profile

        try:
            profile = await self._fallback.get_by_id(user_id)
        except DurableStoreError as exc:
            logger.warning("fallback_store_read_failed", user_id=user_id, error=exc.message)
            profile = None
        if profile is not None:
            logger.info("profile_served_from_fallback", user_id=user_id)
            return profile

        logger.info("profile_default_synthesized", user_id=user_id)
        try:
            return await self.create({"id": user_id})
        except PersistenceError as exc:
            logger.error("profile_default_not_persisted", user_id=user_id, error=exc.message)
            return SurferProfile.from_user_data({}, user_id=user_id, now=self._clock())

    async def update(self, user_id: str, partial_update: Mapping[str, Any]) -> SurferProfile:
        """Deep-merge ``partial_update`` into the stored profile.

        Sequences in the update replace the stored ones. Concurrent updates
        to one id are last-write-wins.

        Raises:
            PersistenceError: If both write tiers failed.
        """
        current = await self.read(user_id)
        profile = current.merged(partial_update, now=self._clock())
        await self._save(profile)
        logger.info("profile_updated", user_id=user_id, fields=sorted(partial_update))
        return profile

    # --- Sessions ---

    async def add_session(self, user_id: str, session_data: Mapping[str, Any]) -> SurfSession:
        """Record a completed session and roll it into the profile counters."""
        session = SurfSession.from_payload(user_id, session_data)
        await self._dual_write(user_id, "add_session", lambda store: store.add_session(session))

        profile = await self.read(user_id)
        now = self._clock()
        experience = profile.surf_level.experience
        experience.sessions_count += 1
        if experience.last_session is None or session.date > experience.last_session:
            experience.last_session = session.date
        if (session.date.year, session.date.month) == (now.year, now.month):
            profile.goals.progress_tracking.sessions_this_month += 1
        if session.spot_id and session.spot_id not in profile.spots.history:
            profile.spots.history.append(session.spot_id)
        profile.touch(now)
        await self._save(profile)

        logger.info("surf_session_added", user_id=user_id, session_id=session.id, spot_id=session.spot_id)
        return session

    async def list_sessions(self, user_id: str) -> list[SurfSession]:
        """Get a user's sessions, newest first."""
        if self._durable is not None:
            try:
                return await self._durable.list_sessions(user_id)
            except DurableStoreError as exc:
                logger.warning("durable_store_read_failed", user_id=user_id, error=exc.message)
        return await self._fallback.list_sessions(user_id)

    async def count_sessions(self, user_id: str) -> int:
        filters = {"user_id": user_id}
        if self._durable is not None:
            try:
                return await self._durable.count_where(SESSIONS_TABLE, filters)
            except DurableStoreError as exc:
                logger.warning("durable_store_count_failed", user_id=user_id, error=exc.message)
        return await self._fallback.count_where(SESSIONS_TABLE, filters)

    # --- Maintenance ---

    async def service_stats(self) -> dict[str, Any]:
        return {
            "cache_entries": len(self._cache),
            "cache_ttl_seconds": self._cache.ttl_seconds,
            "fallback_profiles": await self._fallback.count_where(PROFILES_TABLE, {}),
            "durable_store_configured": self._durable is not None,
        }

    def clear_cache(self) -> int:
        cleared = self._cache.clear()
        logger.info("profile_cache_cleared", entries=cleared)
        return cleared

    # --- Writes ---

    async def _save(self, profile: SurferProfile) -> None:
        await self._dual_write(profile.id, "upsert", lambda store: store.upsert(profile))
        self._cache.put(profile)

    async def _dual_write(
        self,
        user_id: str,
        operation: str,
        write: Callable[[IProfileStore], Awaitable[Any]],
    ) -> None:
        """Write to both tiers; raise only when neither accepted the write."""
        stored = False
        cause: DurableStoreError | None = None

        if self._durable is not None:
            try:
                await write(self._durable)
                stored = True
            except DurableStoreError as exc:
                cause = exc
                logger.warning(
                    "durable_store_write_failed",
                    user_id=user_id,
                    operation=operation,
                    error=exc.message,
                )

        try:
            await write(self._fallback)
            stored = True
        except DurableStoreError as exc:
            cause = cause or exc
            logger.warning(
                "fallback_store_write_failed",
                user_id=user_id,
                operation=operation,
                error=exc.message,
            )

        if not stored:
            raise PersistenceError(user_id, cause or "no store accepted the write")
