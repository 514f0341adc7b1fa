"""Surfer profile domain entity.

A profile is a tree of small dataclasses. Every node can be rebuilt from a
partially populated dict (``from_dict``): missing or ``None`` values take
the documented defaults and unknown keys are ignored. ``to_document``
produces the JSON-safe form stored by the durable store and used as the
base of merge-updates.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import uuid4

from core.merge import deep_merge

T = TypeVar("T")

DEFAULT_LEVEL = 1
MIN_LEVEL = 1
MAX_LEVEL = 10

DEFAULT_MIN_WAVE_SIZE = 0.3
DEFAULT_MAX_WAVE_SIZE = 2.0

CROWD_LEVELS = ("low", "medium", "high")
TIME_SLOTS = ("dawn", "morning", "midday", "afternoon", "evening")

LEVEL_LABELS: dict[str, int] = {
    "beginner": 2,
    "intermediate": 4,
    "advanced": 7,
    "expert": 9,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_number(value: Any) -> bool:
    """True for ints and floats, False for bools and everything else."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_datetime(value: Any) -> datetime | None:
    """Accept datetimes or ISO-8601 strings; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def clamp_int(value: Any, low: int, high: int) -> Any:
    if not is_number(value):
        return value
    return int(max(low, min(high, round(value))))


def level_from_label(label: Any) -> int | None:
    """Map ``beginner|intermediate|advanced|expert`` to a numeric level."""
    if isinstance(label, str):
        return LEVEL_LABELS.get(label.strip().lower())
    return None


def level_to_label(level: int) -> str:
    if level <= 2:
        return "beginner"
    if level <= 5:
        return "intermediate"
    if level <= 8:
        return "advanced"
    return "expert"


def normalise_range(low: Any, high: Any, optimal: Any) -> tuple[Any, Any, Any]:
    """Order a (min, max, optimal) wave range.

    Swaps inverted bounds, defaults ``optimal`` to the midpoint and clamps it
    into the range. Non-numeric values are left alone for the scoring engine
    to reject.
    """
    if not (is_number(low) and is_number(high)):
        return low, high, optimal
    low, high = float(low), float(high)
    if low > high:
        low, high = high, low
    if optimal is None:
        optimal = round((low + high) / 2, 2)
    elif is_number(optimal):
        optimal = min(max(float(optimal), low), high)
    return low, high, optimal


def _build(cls: type[T], data: Any, **nested: Any) -> T:
    """Instantiate a dataclass from a dict, skipping missing/None keys."""
    data = data if isinstance(data, Mapping) else {}
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name in nested:
            kwargs[f.name] = nested[f.name]
        elif data.get(f.name) is not None:
            value = data[f.name]
            kwargs[f.name] = list(value) if isinstance(value, (list, tuple)) else value
    return cls(**kwargs)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


@dataclass
class PersonalInfo:
    name: str = "SurfAI User"
    email: str = ""
    location: str = "Biarritz, France"
    timezone: str = "Europe/Paris"


@dataclass
class Progression:
    """Sub-skill levels, each 1-10."""

    paddling: int = 3
    takeoff: int = 3
    turning: int = 3
    tube_riding: int = 1

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, clamp_int(getattr(self, f.name), MIN_LEVEL, MAX_LEVEL))


@dataclass
class Experience:
    sessions_count: int = 0
    last_session: datetime | None = None
    years_active: float = 1

    def __post_init__(self) -> None:
        if is_number(self.sessions_count):
            self.sessions_count = max(0, int(self.sessions_count))
        if is_number(self.years_active):
            self.years_active = max(0, self.years_active)
        self.last_session = parse_datetime(self.last_session)


@dataclass
class SurfLevel:
    overall: int = DEFAULT_LEVEL
    progression: Progression = field(default_factory=Progression)
    experience: Experience = field(default_factory=Experience)

    def __post_init__(self) -> None:
        self.overall = clamp_int(self.overall, MIN_LEVEL, MAX_LEVEL)

    @property
    def label(self) -> str:
        return level_to_label(self.overall) if is_number(self.overall) else "unknown"

    @classmethod
    def from_dict(cls, data: Any) -> "SurfLevel":
        data = data if isinstance(data, Mapping) else {}
        return _build(
            cls,
            data,
            progression=_build(Progression, data.get("progression")),
            experience=_build(Experience, data.get("experience")),
        )


@dataclass
class WaveSizePreference:
    """Preferred wave heights in meters (min <= optimal <= max)."""

    min: float = DEFAULT_MIN_WAVE_SIZE
    max: float = DEFAULT_MAX_WAVE_SIZE
    optimal: float | None = None

    def __post_init__(self) -> None:
        self.min, self.max, self.optimal = normalise_range(self.min, self.max, self.optimal)


@dataclass
class WindTolerance:
    """Maximum comfortable wind speed per direction, in km/h."""

    onshore: float = 15.0
    offshore: float = 25.0
    sideshore: float = 20.0


@dataclass
class WaterTemperature:
    min: float = 12.0


@dataclass
class Preferences:
    wave_size: WaveSizePreference = field(default_factory=WaveSizePreference)
    wind_tolerance: WindTolerance = field(default_factory=WindTolerance)
    crowd_tolerance: str = "medium"
    water_temp: WaterTemperature = field(default_factory=WaterTemperature)

    def __post_init__(self) -> None:
        if isinstance(self.crowd_tolerance, str):
            self.crowd_tolerance = self.crowd_tolerance.strip().lower()

    @classmethod
    def from_dict(cls, data: Any) -> "Preferences":
        data = data if isinstance(data, Mapping) else {}
        return _build(
            cls,
            data,
            wave_size=_build(WaveSizePreference, data.get("wave_size")),
            wind_tolerance=_build(WindTolerance, data.get("wind_tolerance")),
            water_temp=_build(WaterTemperature, data.get("water_temp")),
        )


@dataclass
class Board:
    """A surfboard owned by one profile, with its usable wave range."""

    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    type: str = ""
    length_ft: float | None = None
    width_in: float | None = None
    thickness_in: float | None = None
    volume_l: float | None = None
    min_wave_size: float = 0.5
    max_wave_size: float = 2.0
    optimal_wave_size: float | None = None

    def __post_init__(self) -> None:
        self.min_wave_size, self.max_wave_size, self.optimal_wave_size = normalise_range(
            self.min_wave_size, self.max_wave_size, self.optimal_wave_size
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Board":
        if isinstance(data, Board):
            return data
        return _build(cls, data)


@dataclass
class Equipment:
    boards: list[Board] = field(default_factory=list)
    suits: list[str] = field(default_factory=list)
    accessories: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Equipment":
        data = data if isinstance(data, Mapping) else {}
        boards = [Board.from_dict(board) for board in data.get("boards") or []]
        return _build(cls, data, boards=boards)


@dataclass
class Spots:
    favorites: list[str] = field(default_factory=list)
    history: list[str] = field(default_factory=list)
    blacklist: list[str] = field(default_factory=list)


@dataclass
class NotificationPrefs:
    advance_hours: int = 24
    types: list[str] = field(default_factory=lambda: ["optimal"])


@dataclass
class Availability:
    travel_distance_km: float = 30.0
    preferred_times: list[str] = field(default_factory=lambda: ["morning", "evening"])
    notification_prefs: NotificationPrefs = field(default_factory=NotificationPrefs)

    @classmethod
    def from_dict(cls, data: Any) -> "Availability":
        data = data if isinstance(data, Mapping) else {}
        return _build(
            cls,
            data,
            notification_prefs=_build(NotificationPrefs, data.get("notification_prefs")),
        )


@dataclass
class ProgressTracking:
    sessions_this_month: int = 0
    progression_points: int = 0
    challenges_completed: list[str] = field(default_factory=list)


@dataclass
class Goals:
    current: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    progress_tracking: ProgressTracking = field(default_factory=ProgressTracking)

    @classmethod
    def from_dict(cls, data: Any) -> "Goals":
        data = data if isinstance(data, Mapping) else {}
        return _build(
            cls,
            data,
            progress_tracking=_build(ProgressTracking, data.get("progress_tracking")),
        )


@dataclass
class SurferProfile:
    """Domain entity for a surfer profile, one per user."""

    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    surf_level: SurfLevel = field(default_factory=SurfLevel)
    preferences: Preferences = field(default_factory=Preferences)
    equipment: Equipment = field(default_factory=Equipment)
    spots: Spots = field(default_factory=Spots)
    availability: Availability = field(default_factory=Availability)
    goals: Goals = field(default_factory=Goals)

    def __post_init__(self) -> None:
        self.created_at = parse_datetime(self.created_at) or utcnow()
        self.updated_at = parse_datetime(self.updated_at) or self.created_at
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SurferProfile":
        """Rebuild a profile from a (possibly partial) document."""
        return _build(
            cls,
            data,
            personal=_build(PersonalInfo, data.get("personal")),
            surf_level=SurfLevel.from_dict(data.get("surf_level")),
            preferences=Preferences.from_dict(data.get("preferences")),
            equipment=Equipment.from_dict(data.get("equipment")),
            spots=_build(Spots, data.get("spots")),
            availability=Availability.from_dict(data.get("availability")),
            goals=Goals.from_dict(data.get("goals")),
        )

    @classmethod
    def from_user_data(
        cls,
        user_data: Mapping[str, Any],
        user_id: str | None = None,
        now: datetime | None = None,
    ) -> "SurferProfile":
        """Build a complete profile from flat creation input.

        Every omitted field takes its default (wave range 0.3-2.0 m, level 1).
        ``level`` accepts a label and is used when ``surf_level`` is absent.
        """
        now = now or utcnow()

        def value(key: str, default: Any) -> Any:
            found = user_data.get(key)
            return default if found is None else found

        level = user_data.get("surf_level")
        if isinstance(level, str):
            level = level_from_label(level)
        if level is None:
            level = level_from_label(user_data.get("level")) or DEFAULT_LEVEL

        boards = [Board.from_dict(board) for board in user_data.get("boards") or []]
        return cls(
            id=str(user_id or user_data.get("id") or uuid4()),
            created_at=now,
            updated_at=now,
            personal=PersonalInfo(
                name=user_data.get("name") or user_data.get("nickname") or PersonalInfo.name,
                email=user_data.get("email") or "",
                location=user_data.get("location") or PersonalInfo.location,
                timezone=user_data.get("timezone") or PersonalInfo.timezone,
            ),
            surf_level=SurfLevel(
                overall=level,
                experience=Experience(years_active=value("years_active", 1)),
            ),
            preferences=Preferences(
                wave_size=WaveSizePreference(
                    min=value("min_wave_size", DEFAULT_MIN_WAVE_SIZE),
                    max=value("max_wave_size", DEFAULT_MAX_WAVE_SIZE),
                    optimal=user_data.get("optimal_wave_size"),
                ),
            ),
            equipment=Equipment(
                boards=boards,
                suits=list(user_data.get("suits") or []),
                accessories=list(user_data.get("accessories") or []),
            ),
            spots=Spots(
                favorites=list(user_data.get("favorite_spots") or []),
                blacklist=list(user_data.get("blacklisted_spots") or []),
            ),
            goals=Goals(current=list(user_data.get("current_goals") or [])),
        )

    def to_document(self) -> dict[str, Any]:
        """JSON-safe nested dict of the whole profile."""
        return _jsonable(asdict(self))

    def merged(self, update: Mapping[str, Any], now: datetime | None = None) -> "SurferProfile":
        """Return a new profile with ``update`` deep-merged over this one.

        Sequence-valued fields in the update replace the current ones. The
        id and creation time never change; ``updated_at`` moves forward only.
        """
        document = deep_merge(self.to_document(), update)
        document["id"] = self.id
        document["created_at"] = self.created_at
        document["updated_at"] = self.updated_at
        result = SurferProfile.from_dict(document)
        result.touch(now)
        return result

    def touch(self, now: datetime | None = None) -> None:
        """Stamp ``updated_at`` without letting it move backwards."""
        now = now or utcnow()
        self.updated_at = max(now, self.updated_at)

    def find_board(self, board_id: str | None) -> Board | None:
        if board_id is None:
            return None
        return next((b for b in self.equipment.boards if b.id == board_id), None)
