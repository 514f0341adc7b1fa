"""SQLAlchemy implementation of the profile store (durable tier)."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import DurableStoreError
from domain.entities.profile import SurferProfile
from domain.entities.surf_session import SurfSession
from infrastructure.database.models import Base, SurferProfileModel, SurfSessionModel

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 5.0

_TABLES: dict[str, type[Base]] = {
    SurferProfileModel.__tablename__: SurferProfileModel,
    SurfSessionModel.__tablename__: SurfSessionModel,
}


class SQLAlchemyProfileStore:
    """SQLAlchemy implementation of IProfileStore.

    Each call runs in its own session and transaction, bounded by
    ``timeout_seconds``. Driver errors, connection errors, timeouts and
    stored documents that no longer decode are raised as DurableStoreError.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._session_factory = session_factory
        self._timeout_seconds = timeout_seconds

    async def get_by_id(self, user_id: str) -> SurferProfile | None:
        async def work(session: AsyncSession) -> SurferProfile | None:
            model = await session.get(SurferProfileModel, user_id)
            return self._to_profile(model) if model else None

        return await self._run("get_by_id", work)

    async def upsert(self, profile: SurferProfile) -> SurferProfile:
        async def work(session: AsyncSession) -> SurferProfile:
            await session.merge(self._to_profile_model(profile))
            return profile

        return await self._run("upsert", work)

    async def count_where(self, table: str, filters: Mapping[str, Any]) -> int:
        model = _TABLES.get(table)
        if model is None:
            raise ValueError(f"Unknown table: {table}")

        async def work(session: AsyncSession) -> int:
            stmt = select(func.count()).select_from(model)
            for column, value in filters.items():
                stmt = stmt.where(getattr(model, column) == value)
            result = await session.execute(stmt)
            return result.scalar_one()

        return await self._run("count_where", work)

    async def add_session(self, session_entity: SurfSession) -> SurfSession:
        async def work(session: AsyncSession) -> SurfSession:
            await session.merge(self._to_session_model(session_entity))
            return session_entity

        return await self._run("add_session", work)

    async def list_sessions(self, user_id: str) -> list[SurfSession]:
        async def work(session: AsyncSession) -> list[SurfSession]:
            stmt = (
                select(SurfSessionModel)
                .where(SurfSessionModel.user_id == user_id)
                .order_by(SurfSessionModel.session_date.desc())
            )
            result = await session.execute(stmt)
            return [SurfSession.from_document(model.document) for model in result.scalars()]

        return await self._run("list_sessions", work)

    async def _run(self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(self._transaction(work), timeout=self._timeout_seconds)
        except (SQLAlchemyError, OSError, TimeoutError, ValueError, KeyError, TypeError) as exc:
            raise DurableStoreError(operation, exc) from exc

    async def _transaction(self, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            result = await work(session)
            await session.commit()
            return result

    @staticmethod
    def _to_profile(model: SurferProfileModel) -> SurferProfile:
        document = dict(model.document)
        document.setdefault("id", model.id)
        return SurferProfile.from_dict(document)

    @staticmethod
    def _to_profile_model(profile: SurferProfile) -> SurferProfileModel:
        wave_size = profile.preferences.wave_size
        return SurferProfileModel(
            id=profile.id,
            nickname=profile.personal.name,
            surf_level=profile.surf_level.overall,
            min_wave_height=wave_size.min,
            max_wave_height=wave_size.max,
            document=profile.to_document(),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    @staticmethod
    def _to_session_model(session: SurfSession) -> SurfSessionModel:
        return SurfSessionModel(
            id=session.id,
            user_id=session.user_id,
            session_date=session.date,
            spot_id=session.spot_id,
            board_id=session.board_id,
            overall_rating=session.rating.overall,
            notes=session.notes,
            document=session.to_document(),
        )
