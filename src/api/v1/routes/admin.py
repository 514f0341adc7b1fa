"""Maintenance API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_profile_repository
from api.v1.schemas.common import CacheClearedResponse
from core.rate_limit import limiter
from domain.services.profile_repository import TieredProfileRepository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.delete(
    "/cache",
    response_model=CacheClearedResponse,
    summary="Clear the profile cache",
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def clear_cache(
    request: Request,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> CacheClearedResponse:
    """Drop every cached profile. Stored profiles are untouched."""
    cleared = repository.clear_cache()
    return CacheClearedResponse(message="Profile cache cleared", cleared=cleared)
