"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_profile_repository
from api.v1.schemas.stats import ServiceStatsResponse
from core.config import settings
from core.exceptions import DurableStoreError
from domain.repositories.profile_store import PROFILES_TABLE
from domain.services.profile_repository import TieredProfileRepository

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    durable_store: str | None = None
    repository: ServiceStatsResponse | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=_now(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> HealthResponse:
    """
    Detailed health check including durable store connectivity.

    The service keeps answering from the fallback store when the durable
    store is down, so an unreachable or unconfigured store reports
    ``degraded`` rather than ``unhealthy``.
    """
    durable = repository.durable_store
    if durable is None:
        durable_status = "not_configured"
    else:
        try:
            await durable.count_where(PROFILES_TABLE, {})
            durable_status = "healthy"
        except DurableStoreError as e:
            durable_status = f"unhealthy: {e.message}"

    overall_status = "healthy" if durable_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=VERSION,
        timestamp=_now(),
        environment=settings.app_env,
        durable_store=durable_status,
        repository=ServiceStatsResponse.model_validate(await repository.service_stats()),
    )
