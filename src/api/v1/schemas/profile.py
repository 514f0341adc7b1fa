"""Pydantic schemas for the surfer profile API."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.entities.profile import SurferProfile

CrowdLevel = Literal["low", "medium", "high"]
TimeSlot = Literal["dawn", "morning", "midday", "afternoon", "evening"]
LevelLabel = Literal["beginner", "intermediate", "advanced", "expert"]


def normalise_email(v: str | None) -> str | None:
    """Basic email validation."""
    if v is None:
        return v
    v = v.strip().lower()
    if "@" not in v or "." not in v.split("@")[-1]:
        raise ValueError("Invalid email address")
    return v


def check_wave_range(low: float | None, high: float | None) -> None:
    if low is not None and high is not None and low > high:
        raise ValueError("Minimum wave size must not exceed the maximum")


class BoardSchema(BaseModel):
    """A surfboard and the wave heights (meters) it works in."""

    id: str | None = Field(None, max_length=64)
    name: str = Field("", max_length=100)
    type: str = Field("", max_length=50)
    length_ft: float | None = Field(None, gt=0)
    width_in: float | None = Field(None, gt=0)
    thickness_in: float | None = Field(None, gt=0)
    volume_l: float | None = Field(None, gt=0)
    min_wave_size: float = Field(0.5, ge=0)
    max_wave_size: float = Field(2.0, ge=0)
    optimal_wave_size: float | None = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_wave_range(self) -> "BoardSchema":
        check_wave_range(self.min_wave_size, self.max_wave_size)
        return self


# --- Create ---


class ProfileCreate(BaseModel):
    """Schema for creating a profile. Every field is optional."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Kai",
                "level": "intermediate",
                "min_wave_size": 0.8,
                "max_wave_size": 2.5,
                "favorite_spots": ["la-grande-plage"],
            }
        },
    )

    id: str | None = Field(None, min_length=1, max_length=64)
    name: str | None = Field(None, max_length=100)
    nickname: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=200)
    timezone: str | None = Field(None, max_length=64)
    surf_level: int | None = Field(None, ge=1, le=10)
    level: LevelLabel | None = None
    years_active: float | None = Field(None, ge=0)
    min_wave_size: float | None = Field(None, ge=0)
    max_wave_size: float | None = Field(None, ge=0)
    optimal_wave_size: float | None = Field(None, ge=0)
    boards: list[BoardSchema] = Field(default_factory=list)
    suits: list[str] = Field(default_factory=list)
    accessories: list[str] = Field(default_factory=list)
    favorite_spots: list[str] = Field(default_factory=list)
    blacklisted_spots: list[str] = Field(default_factory=list)
    current_goals: list[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalise_email(v)

    @model_validator(mode="after")
    def validate_wave_range(self) -> "ProfileCreate":
        check_wave_range(self.min_wave_size, self.max_wave_size)
        return self


# --- Update (every level optional, merged into the stored profile) ---


class PersonalUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=200)
    timezone: str | None = Field(None, max_length=64)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalise_email(v)


class ProgressionUpdate(BaseModel):
    paddling: int | None = Field(None, ge=1, le=10)
    takeoff: int | None = Field(None, ge=1, le=10)
    turning: int | None = Field(None, ge=1, le=10)
    tube_riding: int | None = Field(None, ge=1, le=10)


class ExperienceUpdate(BaseModel):
    years_active: float | None = Field(None, ge=0)


class SurfLevelUpdate(BaseModel):
    overall: int | None = Field(None, ge=1, le=10)
    progression: ProgressionUpdate | None = None
    experience: ExperienceUpdate | None = None


class WaveSizeUpdate(BaseModel):
    min: float | None = Field(None, ge=0)
    max: float | None = Field(None, ge=0)
    optimal: float | None = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_wave_range(self) -> "WaveSizeUpdate":
        check_wave_range(self.min, self.max)
        return self


class WindToleranceUpdate(BaseModel):
    onshore: float | None = Field(None, ge=0)
    offshore: float | None = Field(None, ge=0)
    sideshore: float | None = Field(None, ge=0)


class WaterTempUpdate(BaseModel):
    min: float | None = None


class PreferencesUpdate(BaseModel):
    wave_size: WaveSizeUpdate | None = None
    wind_tolerance: WindToleranceUpdate | None = None
    crowd_tolerance: CrowdLevel | None = None
    water_temp: WaterTempUpdate | None = None


class EquipmentUpdate(BaseModel):
    boards: list[BoardSchema] | None = None
    suits: list[str] | None = None
    accessories: list[str] | None = None


class SpotsUpdate(BaseModel):
    favorites: list[str] | None = None
    history: list[str] | None = None
    blacklist: list[str] | None = None


class NotificationPrefsUpdate(BaseModel):
    advance_hours: int | None = Field(None, ge=0, le=168)
    types: list[str] | None = None


class AvailabilityUpdate(BaseModel):
    travel_distance_km: float | None = Field(None, ge=0)
    preferred_times: list[TimeSlot] | None = None
    notification_prefs: NotificationPrefsUpdate | None = None


class GoalsUpdate(BaseModel):
    current: list[str] | None = None
    achievements: list[str] | None = None


class ProfileUpdate(BaseModel):
    """Schema for a partial profile update.

    Only the fields sent are applied. Lists replace the stored lists.
    """

    personal: PersonalUpdate | None = None
    surf_level: SurfLevelUpdate | None = None
    preferences: PreferencesUpdate | None = None
    equipment: EquipmentUpdate | None = None
    spots: SpotsUpdate | None = None
    availability: AvailabilityUpdate | None = None
    goals: GoalsUpdate | None = None

    def to_update(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


# --- Response ---


class PersonalResponse(BaseModel):
    name: str
    email: str
    location: str
    timezone: str


class ProgressionResponse(BaseModel):
    paddling: int
    takeoff: int
    turning: int
    tube_riding: int


class ExperienceResponse(BaseModel):
    sessions_count: int
    last_session: datetime | None = None
    years_active: float


class SurfLevelResponse(BaseModel):
    overall: int
    label: str | None = None
    progression: ProgressionResponse
    experience: ExperienceResponse


class WaveSizeResponse(BaseModel):
    min: float
    max: float
    optimal: float | None = None


class WindToleranceResponse(BaseModel):
    onshore: float
    offshore: float
    sideshore: float


class WaterTempResponse(BaseModel):
    min: float


class PreferencesResponse(BaseModel):
    wave_size: WaveSizeResponse
    wind_tolerance: WindToleranceResponse
    crowd_tolerance: str
    water_temp: WaterTempResponse


class EquipmentResponse(BaseModel):
    boards: list[BoardSchema]
    suits: list[str]
    accessories: list[str]


class SpotsResponse(BaseModel):
    favorites: list[str]
    history: list[str]
    blacklist: list[str]


class NotificationPrefsResponse(BaseModel):
    advance_hours: int
    types: list[str]


class AvailabilityResponse(BaseModel):
    travel_distance_km: float
    preferred_times: list[str]
    notification_prefs: NotificationPrefsResponse


class ProgressTrackingResponse(BaseModel):
    sessions_this_month: int
    progression_points: int
    challenges_completed: list[str]


class GoalsResponse(BaseModel):
    current: list[str]
    achievements: list[str]
    progress_tracking: ProgressTrackingResponse


class ProfileResponse(BaseModel):
    """Schema for a full surfer profile."""

    id: str
    created_at: datetime
    updated_at: datetime
    personal: PersonalResponse
    surf_level: SurfLevelResponse
    preferences: PreferencesResponse
    equipment: EquipmentResponse
    spots: SpotsResponse
    availability: AvailabilityResponse
    goals: GoalsResponse

    @classmethod
    def from_entity(cls, profile: SurferProfile) -> "ProfileResponse":
        document = profile.to_document()
        document["surf_level"]["label"] = profile.surf_level.label
        return cls.model_validate(document)
