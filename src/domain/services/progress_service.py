"""Progress and statistics derived from a profile and its sessions."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import timedelta
from typing import Any

from core.exceptions import ScoringInputError
from domain.entities.profile import MAX_LEVEL, SurferProfile
from domain.entities.surf_session import SurfSession
from domain.services import scoring
from domain.services.profile_repository import TieredProfileRepository

STREAK_MAX_GAP = timedelta(days=7)

# Target level -> what it takes to get there
LEVEL_REQUIREMENTS: dict[int, dict[str, Any]] = {
    2: {"sessions": 5, "skills": ["Paddle out through small whitewater", "Pop up on whitewater waves"]},
    3: {"sessions": 15, "skills": ["Catch unbroken waves", "Angle the takeoff"]},
    4: {"sessions": 30, "skills": ["Trim along the face", "Duck dive or turtle roll"]},
    5: {"sessions": 50, "skills": ["Bottom turn", "Read sets and pick waves"]},
    6: {"sessions": 80, "skills": ["Cutback", "Surf overhead waves"]},
    7: {"sessions": 120, "skills": ["Top turn with speed", "Link maneuvers"]},
    8: {"sessions": 170, "skills": ["Tube stance", "Surf reef and point breaks"]},
    9: {"sessions": 230, "skills": ["Aerial attempts", "Critical section maneuvers"]},
    10: {"sessions": 300, "skills": ["Barrel riding", "Competition-level consistency"]},
}
MAX_LEVEL_REQUIREMENTS: dict[str, Any] = {
    "sessions": None,
    "skills": [],
    "message": "Maximum level reached",
}

COMPLETENESS_FIELDS = (
    ("personal", "name"),
    ("personal", "email"),
    ("personal", "location"),
    ("personal", "timezone"),
    ("surf_level", "overall"),
    ("preferences", "wave_size"),
    ("preferences", "crowd_tolerance"),
    ("equipment", "boards"),
    ("equipment", "suits"),
    ("spots", "favorites"),
    ("availability", "preferred_times"),
    ("goals", "current"),
)


def average_rating(sessions: Sequence[SurfSession]) -> float:
    if not sessions:
        return 0.0
    return round(sum(s.rating.overall for s in sessions) / len(sessions), 1)


def session_streak(sessions: Sequence[SurfSession]) -> int:
    """Length of the run of most recent sessions at most a week apart."""
    ordered = sorted(sessions, key=lambda s: s.date, reverse=True)
    if not ordered:
        return 0
    streak = 1
    for newer, older in zip(ordered, ordered[1:]):
        if newer.date - older.date > STREAK_MAX_GAP:
            break
        streak += 1
    return streak


def next_level_requirements(current_level: int) -> dict[str, Any]:
    target = current_level + 1
    requirements = LEVEL_REQUIREMENTS.get(target)
    if requirements is None:
        return {"level": MAX_LEVEL, **MAX_LEVEL_REQUIREMENTS}
    return {"level": target, **requirements}


def profile_completeness(profile: SurferProfile) -> float:
    filled = sum(1 for section, name in COMPLETENESS_FIELDS if getattr(getattr(profile, section), name))
    return round(filled / len(COMPLETENESS_FIELDS), 2)


def average_condition_score(profile: SurferProfile, sessions: Sequence[SurfSession]) -> float | None:
    """Mean score of the sessions' condition snapshots, None if none scores."""
    scores = []
    for session in sessions:
        try:
            scores.append(scoring.score(profile, session.conditions))
        except ScoringInputError:
            continue
    if not scores:
        return None
    return round(sum(scores) / len(scores), 1)


@dataclass
class UserStats:
    total_sessions: int
    average_rating: float
    favorite_spots: int
    total_boards: int
    current_streak: int
    level: int
    level_label: str
    last_session: str | None = None


@dataclass
class UserProgress:
    stats: UserStats
    next_level: dict[str, Any]
    profile_completeness: float
    average_condition_score: float | None
    progression: dict[str, int] = field(default_factory=dict)
    sessions_this_month: int = 0


class ProgressService:
    """Builds stats and progress views from the repository."""

    def __init__(self, repository: TieredProfileRepository) -> None:
        self._repository = repository

    async def get_user_stats(self, user_id: str) -> UserStats:
        profile = await self._repository.read(user_id)
        sessions = await self._repository.list_sessions(user_id)
        return self._stats(profile, sessions, await self._repository.count_sessions(user_id))

    async def get_progress(self, user_id: str) -> UserProgress:
        profile = await self._repository.read(user_id)
        sessions = await self._repository.list_sessions(user_id)
        stats = self._stats(profile, sessions, await self._repository.count_sessions(user_id))
        return UserProgress(
            stats=stats,
            next_level=next_level_requirements(profile.surf_level.overall),
            profile_completeness=profile_completeness(profile),
            average_condition_score=average_condition_score(profile, sessions),
            progression=asdict(profile.surf_level.progression),
            sessions_this_month=profile.goals.progress_tracking.sessions_this_month,
        )

    @staticmethod
    def _stats(profile: SurferProfile, sessions: Sequence[SurfSession], total: int) -> UserStats:
        last_session = profile.surf_level.experience.last_session
        return UserStats(
            total_sessions=total,
            average_rating=average_rating(sessions),
            favorite_spots=len(profile.spots.favorites),
            total_boards=len(profile.equipment.boards),
            current_streak=session_streak(sessions),
            level=profile.surf_level.overall,
            level_label=profile.surf_level.label,
            last_session=last_session.isoformat() if last_session else None,
        )
