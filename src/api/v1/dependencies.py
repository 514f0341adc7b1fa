"""Dependency injection factories for API v1."""

from fastapi import Depends, Request

from domain.services.profile_repository import TieredProfileRepository
from domain.services.progress_service import ProgressService
from domain.services.recommendation_service import RecommendationService


def get_profile_repository(request: Request) -> TieredProfileRepository:
    """Get the repository built at application startup."""
    return request.app.state.profile_repository


def get_recommendation_service(
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> RecommendationService:
    """Get Recommendation service instance."""
    return RecommendationService(repository)


def get_progress_service(
    repository: TieredProfileRepository = Depends(get_profile_repository),
) -> ProgressService:
    """Get Progress service instance."""
    return ProgressService(repository)
