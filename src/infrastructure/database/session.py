"""Database session management."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    # Supabase uses Supavisor (connection pooler) in transaction mode.
    # asyncpg's prepared statement cache is incompatible with transaction-mode
    # pooling, so we disable it when connecting through the pooler.
    connect_args: dict = {}
    if "pooler.supabase.com" in database_url:
        connect_args["statement_cache_size"] = 0

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
