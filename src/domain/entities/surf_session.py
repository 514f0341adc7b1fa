"""Surf session domain entity."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any
from uuid import uuid4

from domain.entities.conditions import Conditions
from domain.entities.profile import clamp_int, parse_datetime, utcnow


@dataclass
class SessionRating:
    """Rider's rating of a session, every sub-score 1-10."""

    overall: int = 5
    waves: int = 5
    fun: int = 5
    crowd: int = 5

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, clamp_int(getattr(self, f.name), 1, 10))

    @classmethod
    def from_value(cls, value: Any) -> "SessionRating":
        """Accept a full rating mapping or a bare overall score."""
        if isinstance(value, Mapping):
            return cls(**{f.name: value[f.name] for f in fields(cls) if value.get(f.name) is not None})
        if value is None:
            return cls()
        return cls(overall=value)


@dataclass
class SurfSession:
    """One completed surf outing.

    ``user_id``, ``spot_id`` and ``board_id`` are lookups only; a board id
    may point at a board that has since been removed from the profile.
    """

    user_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    date: datetime = field(default_factory=utcnow)
    spot_id: str | None = None
    board_id: str | None = None
    duration_minutes: int | None = None
    conditions: Conditions = field(default_factory=Conditions)
    rating: SessionRating = field(default_factory=SessionRating)
    notes: str = ""

    def __post_init__(self) -> None:
        self.date = parse_datetime(self.date) or utcnow()

    @classmethod
    def from_payload(cls, user_id: str, data: Mapping[str, Any]) -> "SurfSession":
        """Build a session from request input.

        Condition fields may be nested under ``conditions`` or given at the
        top level (``{"wave_height": 1.2, "rating": 8}``).
        """
        conditions = data.get("conditions")
        if conditions is None:
            conditions = data
        return cls(
            user_id=user_id,
            id=str(data.get("id") or uuid4()),
            date=data.get("date") or utcnow(),
            spot_id=data.get("spot_id"),
            board_id=data.get("board_id"),
            duration_minutes=data.get("duration_minutes"),
            conditions=Conditions.from_dict(conditions),
            rating=SessionRating.from_value(data.get("rating")),
            notes=data.get("notes") or "",
        )

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "SurfSession":
        return cls(
            user_id=document["user_id"],
            id=document["id"],
            date=document.get("date"),
            spot_id=document.get("spot_id"),
            board_id=document.get("board_id"),
            duration_minutes=document.get("duration_minutes"),
            conditions=Conditions.from_dict(document.get("conditions")),
            rating=SessionRating.from_value(document.get("rating")),
            notes=document.get("notes") or "",
        )

    def to_document(self) -> dict[str, Any]:
        document = asdict(self)
        document["date"] = self.date.isoformat()
        return document
