"""Surf condition snapshots and recommendation candidates."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

# Marine fields counted for data completeness (crowd is an observation, not forecast data)
MARINE_FIELDS = (
    "wave_height",
    "wave_period",
    "wind_speed",
    "wind_direction",
    "tide_state",
    "tide_coefficient",
    "tide_height",
    "water_temperature",
)


@dataclass
class Conditions:
    """A snapshot of surf conditions at one spot and time."""

    wave_height: float | None = None
    wind_speed: float | None = None
    wave_period: float | None = None
    wind_direction: float | None = None
    crowd: str | None = None
    water_temperature: float | None = None
    tide_state: str | None = None
    tide_coefficient: int | None = None
    tide_height: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.crowd, str):
            self.crowd = self.crowd.strip().lower() or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Conditions":
        data = data or {}
        return cls(**{f.name: data[f.name] for f in fields(cls) if data.get(f.name) is not None})

    def to_document(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SpotConditions:
    """A candidate spot with its forecast conditions."""

    spot_id: str
    conditions: Conditions = field(default_factory=Conditions)
    name: str = ""
    distance_km: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpotConditions":
        return cls(
            spot_id=str(data["spot_id"]),
            conditions=Conditions.from_dict(data.get("conditions")),
            name=data.get("name") or "",
            distance_km=float(data.get("distance_km") or 0.0),
        )
