"""Pydantic schemas for stats and progress API."""

from pydantic import BaseModel


class UserStatsResponse(BaseModel):
    total_sessions: int
    average_rating: float
    favorite_spots: int
    total_boards: int
    current_streak: int
    level: int
    level_label: str
    last_session: str | None = None


class NextLevelResponse(BaseModel):
    level: int
    sessions: int | None = None
    skills: list[str]
    message: str | None = None


class ProgressResponse(BaseModel):
    stats: UserStatsResponse
    next_level: NextLevelResponse
    profile_completeness: float
    average_condition_score: float | None = None
    progression: dict[str, int]
    sessions_this_month: int


class ServiceStatsResponse(BaseModel):
    cache_entries: int
    cache_ttl_seconds: float
    fallback_profiles: int
    durable_store_configured: bool

