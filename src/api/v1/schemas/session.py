"""Pydantic schemas for the surf session API."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.surf_session import SurfSession


class ConditionsSchema(BaseModel):
    """Surf conditions at one spot and time."""

    wave_height: float | None = Field(None, ge=0, description="Meters")
    wind_speed: float | None = Field(None, ge=0, description="km/h")
    wave_period: float | None = Field(None, ge=0, description="Seconds")
    wind_direction: float | None = Field(None, ge=0, le=360, description="Degrees")
    crowd: Literal["low", "medium", "high"] | None = None
    water_temperature: float | None = None
    tide_state: str | None = Field(None, max_length=20)
    tide_coefficient: int | None = Field(None, ge=0)
    tide_height: float | None = None


class SessionRatingSchema(BaseModel):
    overall: int = Field(5, ge=1, le=10)
    waves: int = Field(5, ge=1, le=10)
    fun: int = Field(5, ge=1, le=10)
    crowd: int = Field(5, ge=1, le=10)


class SessionCreate(BaseModel):
    """Schema for logging a completed session.

    ``rating`` is either a full rating or just the overall score.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "spot_id": "la-grande-plage",
                "date": "2026-05-14T08:30:00Z",
                "conditions": {"wave_height": 1.2, "wind_speed": 10},
                "rating": 8,
            }
        },
    )

    date: datetime | None = None
    spot_id: str | None = Field(None, max_length=255)
    board_id: str | None = Field(None, max_length=64)
    duration_minutes: int | None = Field(None, ge=0, le=24 * 60)
    conditions: ConditionsSchema | None = None
    rating: Annotated[int, Field(ge=1, le=10)] | SessionRatingSchema | None = None
    notes: str = Field("", max_length=2000)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SessionResponse(BaseModel):
    id: str
    user_id: str
    date: datetime
    spot_id: str | None = None
    board_id: str | None = None
    duration_minutes: int | None = None
    conditions: ConditionsSchema
    rating: SessionRatingSchema
    notes: str = ""

    @classmethod
    def from_entity(cls, session: SurfSession) -> "SessionResponse":
        return cls.model_validate(session.to_document())


class SessionListResponse(BaseModel):
    data: list[SessionResponse]
    total: int
