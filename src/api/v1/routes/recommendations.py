"""Scoring and recommendation API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import get_profile_repository, get_recommendation_service
from api.v1.schemas.profile import BoardSchema
from api.v1.schemas.recommendation import (
    RecommendationRequest,
    RecommendationResponse,
    ScoredCandidateResponse,
    ScoreRequest,
    ScoreResponse,
    SuitabilityResponse,
)
from core.config import settings
from core.rate_limit import limiter
from domain.entities.conditions import Conditions, SpotConditions
from domain.services import scoring
from domain.services.profile_repository import TieredProfileRepository
from domain.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/profiles", tags=["recommendations"])


@router.post(
    "/{user_id}/score",
    response_model=ScoreResponse,
    summary="Score conditions for a user",
    responses={422: {"description": "Conditions or profile cannot be scored"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def score_conditions(
    request: Request,
    user_id: str,
    body: ScoreRequest,
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> ScoreResponse:
    """Score one conditions snapshot against the user's profile (0-5)."""
    profile = await repository.read(user_id)
    conditions = Conditions.from_dict(body.conditions.model_dump())
    value = scoring.score(profile, conditions)
    board = scoring.recommend_board(profile, conditions.wave_height)
    return ScoreResponse(
        user_id=user_id,
        score=value,
        suitability=SuitabilityResponse.model_validate(asdict(scoring.describe_suitability(value))),
        recommended_board=BoardSchema.model_validate(asdict(board)) if board else None,
        optimal_time=scoring.optimal_time_hint(profile, conditions),
        data_completeness=scoring.conditions_completeness(conditions),
    )


@router.post(
    "/{user_id}/recommendations",
    response_model=RecommendationResponse,
    summary="Rank candidate spots for a user",
    responses={422: {"description": "A candidate cannot be scored"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def recommend_spots(
    request: Request,
    user_id: str,
    body: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationResponse:
    """Rank candidates best first and split them into top picks and alternatives.

    Blacklisted spots are left out. Spots beyond the user's travel range are
    kept and flagged.
    """
    candidates = [SpotConditions.from_dict(candidate.model_dump()) for candidate in body.candidates]
    result = await service.recommend(
        user_id,
        candidates,
        limit=body.limit or settings.recommendation_limit,
        alternatives=(
            body.alternatives if body.alternatives is not None else settings.recommendation_alternatives
        ),
    )
    return RecommendationResponse(
        user_id=user_id,
        top=[ScoredCandidateResponse.from_entity(c) for c in result.top],
        alternatives=[ScoredCandidateResponse.from_entity(c) for c in result.alternatives],
    )
