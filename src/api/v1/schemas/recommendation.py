"""Pydantic schemas for scoring and recommendation API."""

from dataclasses import asdict

from pydantic import BaseModel, Field

from api.v1.schemas.profile import BoardSchema
from api.v1.schemas.session import ConditionsSchema
from domain.services.scoring import ScoredCandidate


class ScoreRequest(BaseModel):
    """Schema for scoring one conditions snapshot."""

    conditions: ConditionsSchema


class SuitabilityResponse(BaseModel):
    label: str
    description: str


class ScoreResponse(BaseModel):
    user_id: str
    score: float
    suitability: SuitabilityResponse
    recommended_board: BoardSchema | None = None
    optimal_time: str
    data_completeness: float


class CandidateSchema(BaseModel):
    """A spot to consider, with its forecast conditions."""

    spot_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field("", max_length=200)
    distance_km: float = Field(0.0, ge=0)
    conditions: ConditionsSchema


class RecommendationRequest(BaseModel):
    candidates: list[CandidateSchema] = Field(..., max_length=100)
    limit: int | None = Field(None, ge=1, le=20)
    alternatives: int | None = Field(None, ge=0, le=20)


class ScoredCandidateResponse(BaseModel):
    spot_id: str
    name: str
    distance_km: float
    score: float
    suitability: SuitabilityResponse
    conditions: ConditionsSchema
    recommended_board: BoardSchema | None = None
    optimal_time: str
    data_completeness: float
    beyond_travel_range: bool
    warnings: list[str]

    @classmethod
    def from_entity(cls, candidate: ScoredCandidate) -> "ScoredCandidateResponse":
        return cls.model_validate(asdict(candidate))


class RecommendationResponse(BaseModel):
    user_id: str
    top: list[ScoredCandidateResponse]
    alternatives: list[ScoredCandidateResponse]
