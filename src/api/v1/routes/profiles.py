"""Surfer profile API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_profile_repository, get_progress_service
from api.v1.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from api.v1.schemas.session import SessionCreate, SessionListResponse, SessionResponse
from api.v1.schemas.stats import ProgressResponse, UserStatsResponse
from core.rate_limit import limiter
from domain.services.profile_repository import TieredProfileRepository
from domain.services.progress_service import ProgressService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created"},
        503: {"description": "Neither store accepted the profile"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> ProfileResponse:
    """Create a profile from partial data. Omitted fields take defaults."""
    profile = await repository.create(body.model_dump(exclude_none=True))
    return ProfileResponse.from_entity(profile)


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user_id: str,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> ProfileResponse:
    """Get a user's profile. Unknown users get a freshly created default profile."""
    profile = await repository.read(user_id)
    return ProfileResponse.from_entity(profile)


@router.patch(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated"},
        503: {"description": "Neither store accepted the update"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    user_id: str,
    body: ProfileUpdate,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> ProfileResponse:
    """Merge a partial update into the profile. Lists replace stored lists."""
    profile = await repository.update(user_id, body.to_update())
    return ProfileResponse.from_entity(profile)


@router.post(
    "/{user_id}/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a surf session",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_session(
    request: Request,
    user_id: str,
    body: SessionCreate,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> SessionResponse:
    """Record a completed session and update the profile's experience counters."""
    session = await repository.add_session(user_id, body.to_payload())
    return SessionResponse.from_entity(session)


@router.get(
    "/{user_id}/sessions",
    response_model=SessionListResponse,
    summary="List surf sessions",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_sessions(
    request: Request,
    user_id: str,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> SessionListResponse:
    """Get a user's sessions, newest first."""
    sessions = await repository.list_sessions(user_id)
    return SessionListResponse(
        data=[SessionResponse.from_entity(session) for session in sessions],
        total=len(sessions),
    )


@router.get(
    "/{user_id}/stats",
    response_model=UserStatsResponse,
    summary="Get session statistics",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_stats(
    request: Request,
    user_id: str,
    service: ProgressService = Depends(get_progress_service),
) -> UserStatsResponse:
    stats = await service.get_user_stats(user_id)
    return UserStatsResponse.model_validate(asdict(stats))


@router.get(
    "/{user_id}/progress",
    response_model=ProgressResponse,
    summary="Get progression overview",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_progress(
    request: Request,
    user_id: str,
    service: ProgressService = Depends(get_progress_service),
) -> ProgressResponse:
    """Stats plus next-level requirements, profile completeness and skills."""
    progress = await service.get_progress(user_id)
    return ProgressResponse.model_validate(asdict(progress))
