"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestContextMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import Settings, settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from domain.services.profile_repository import TieredProfileRepository
from infrastructure.cache.profile_cache import ProfileCache
from infrastructure.database.repositories.sqlalchemy_profile_store import SQLAlchemyProfileStore
from infrastructure.database.session import create_engine, create_session_factory
from infrastructure.memory.profile_store import InMemoryProfileStore

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


def build_profile_repository(config: Settings) -> tuple[TieredProfileRepository, AsyncEngine | None]:
    """Wire the tiered repository. Without a database URL it runs on the
    in-memory fallback alone."""
    engine = None
    durable = None
    if config.durable_store_enabled:
        engine = create_engine(config.async_database_url, echo=config.database_echo)
        durable = SQLAlchemyProfileStore(
            create_session_factory(engine),
            timeout_seconds=config.durable_store_timeout_seconds,
        )
    else:
        logger.warning("durable_store_not_configured", mode="fallback_only")

    repository = TieredProfileRepository(
        durable=durable,
        fallback=InMemoryProfileStore(),
        cache=ProfileCache(ttl_seconds=config.profile_cache_ttl_seconds),
    )
    return repository, engine


def create_app(repository: TieredProfileRepository | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    engine = None
    if repository is None:
        repository, engine = build_profile_repository(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan manager for startup/shutdown tasks."""
        logger.info("app_started", environment=settings.app_env)
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Surfer Profiles & Recommendations\n\n"
            "Per-user surfer profiles (preferences, equipment, sessions, "
            "progression) and personalized spot recommendations.\n\n"
            "### Availability\n"
            "Profiles are served from a cache, a durable store and an "
            "in-memory fallback. Reads never fail: unknown users get a "
            "default profile.\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH: 10 requests/minute"
        ),
        version="1.0.0",
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "profiles",
                "description": "Profile, session and progress operations",
            },
            {
                "name": "recommendations",
                "description": "Condition scoring and spot ranking",
            },
            {
                "name": "admin",
                "description": "Cache maintenance",
            },
        ],
    )
    app.state.profile_repository = repository

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Request id + logging (LIFO order - last added = outermost)
    app.add_middleware(RequestContextMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
