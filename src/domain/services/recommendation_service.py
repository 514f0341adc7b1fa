"""Personalized spot recommendations."""

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from domain.entities.conditions import SpotConditions
from domain.entities.profile import SurferProfile
from domain.services.profile_repository import TieredProfileRepository
from domain.services.scoring import ScoredCandidate, rank_candidates

logger = structlog.get_logger()

DEFAULT_LIMIT = 3
DEFAULT_ALTERNATIVES = 3


@dataclass
class Recommendations:
    profile: SurferProfile
    top: list[ScoredCandidate] = field(default_factory=list)
    alternatives: list[ScoredCandidate] = field(default_factory=list)


class RecommendationService:
    """Ranks candidate spots against a user's profile."""

    def __init__(self, repository: TieredProfileRepository) -> None:
        self._repository = repository

    async def recommend(
        self,
        user_id: str,
        candidates: Iterable[SpotConditions],
        limit: int = DEFAULT_LIMIT,
        alternatives: int = DEFAULT_ALTERNATIVES,
    ) -> Recommendations:
        """Return the best ``limit`` candidates and the next ``alternatives``."""
        profile = await self._repository.read(user_id)
        ranked = rank_candidates(profile, candidates)
        logger.info(
            "recommendations_ranked",
            user_id=user_id,
            candidates=len(ranked),
            best_score=ranked[0].score if ranked else None,
        )
        return Recommendations(
            profile=profile,
            top=ranked[:limit],
            alternatives=ranked[limit : limit + alternatives],
        )
