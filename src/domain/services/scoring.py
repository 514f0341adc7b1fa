"""Condition scoring: how well a conditions snapshot suits one surfer.

The score starts from a base of 5.0 and is multiplied by four factors
(wave fit, wind, level/experience, crowd), each in (0, 1]. It is rounded
to one decimal only once, at the end.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import ScoringInputError
from domain.entities.conditions import MARINE_FIELDS, Conditions, SpotConditions
from domain.entities.profile import Board, SurferProfile, is_number

BASE_SCORE = 5.0

OUT_OF_RANGE_FACTOR = 0.3
MIN_WIND_FACTOR = 0.2

# preferences.crowd_tolerance -> observed crowd -> factor
CROWD_FACTORS: dict[str, dict[str, float]] = {
    "low": {"low": 1.0, "medium": 0.7, "high": 0.4},
    "medium": {"low": 1.0, "medium": 0.9, "high": 0.7},
    "high": {"low": 1.0, "medium": 1.0, "high": 0.9},
}

# (minimum score, label, description), highest first
SUITABILITY_LEVELS: tuple[tuple[float, str, str], ...] = (
    (4.5, "excellent", "Excellent conditions for your level and preferences"),
    (3.5, "good", "Good conditions, worth the trip"),
    (2.5, "fair", "Fair conditions, surfable with some compromises"),
    (1.5, "poor", "Poor conditions for your profile"),
)
NOT_RECOMMENDED = ("not_recommended", "Not recommended today")

EARLY_SLOTS = ("dawn", "morning")


@dataclass
class Suitability:
    label: str
    description: str


@dataclass
class ScoredCandidate:
    """A recommendation candidate with its score and display metadata."""

    spot_id: str
    name: str
    distance_km: float
    score: float
    suitability: Suitability
    conditions: Conditions
    recommended_board: Board | None = None
    optimal_time: str = ""
    data_completeness: float = 0.0
    beyond_travel_range: bool = False
    warnings: list[str] = field(default_factory=list)


def _number(name: str, value: Any) -> float:
    if not is_number(value) or not math.isfinite(value):
        raise ScoringInputError(name, value)
    return float(value)


def wave_factor(height: float, low: float, high: float, optimal: float | None) -> float:
    """1.0 at the optimal height, falling linearly to 0.5 at the range edge.

    Heights outside ``[low, high]`` get a flat 0.3. A zero-width range is
    neutral.
    """
    if height < low or height > high:
        return OUT_OF_RANGE_FACTOR
    span = high - low
    if span == 0:
        return 1.0
    if optimal is None:
        optimal = (low + high) / 2
    return 0.5 + 0.5 * (1 - abs(height - optimal) / span)


def wind_factor(wind_speed: float, onshore_tolerance: float) -> float:
    if onshore_tolerance <= 0:
        return MIN_WIND_FACTOR
    return max(MIN_WIND_FACTOR, 1 - wind_speed / onshore_tolerance)


def level_factor(level: float, sessions_count: float) -> float:
    return 0.6 + 0.2 * min(1.0, level / 10) + 0.2 * min(1.0, sessions_count / 100)


def crowd_factor(tolerance: str | None, crowd: str | None) -> float:
    """Lookup in CROWD_FACTORS; unknown tolerance or crowd is neutral."""
    return CROWD_FACTORS.get(tolerance or "", {}).get(crowd or "", 1.0)


def score(profile: SurferProfile, conditions: Conditions) -> float:
    """Suitability score of ``conditions`` for ``profile``, one decimal.

    Raises:
        ScoringInputError: If a required input is missing or not a finite
            number.
    """
    wave_size = profile.preferences.wave_size
    low = _number("preferences.wave_size.min", wave_size.min)
    high = _number("preferences.wave_size.max", wave_size.max)
    optimal = _number("preferences.wave_size.optimal", wave_size.optimal) if wave_size.optimal is not None else None
    onshore = _number("preferences.wind_tolerance.onshore", profile.preferences.wind_tolerance.onshore)
    level = _number("surf_level.overall", profile.surf_level.overall)
    sessions = _number("surf_level.experience.sessions_count", profile.surf_level.experience.sessions_count)
    height = _number("conditions.wave_height", conditions.wave_height)
    wind = _number("conditions.wind_speed", conditions.wind_speed)

    result = (
        BASE_SCORE
        * wave_factor(height, low, high, optimal)
        * wind_factor(wind, onshore)
        * level_factor(level, sessions)
        * crowd_factor(profile.preferences.crowd_tolerance, conditions.crowd)
    )
    return round(result, 1)


def describe_suitability(value: float) -> Suitability:
    for threshold, label, description in SUITABILITY_LEVELS:
        if value >= threshold:
            return Suitability(label, description)
    return Suitability(*NOT_RECOMMENDED)


def recommend_board(profile: SurferProfile, wave_height: float | None) -> Board | None:
    """The board whose usable range holds ``wave_height`` and whose optimal
    size is closest to it. Ties go to the board added first."""
    if not is_number(wave_height):
        return None
    fitting = [
        board
        for board in profile.equipment.boards
        if is_number(board.min_wave_size)
        and is_number(board.max_wave_size)
        and board.min_wave_size <= wave_height <= board.max_wave_size
    ]
    if not fitting:
        return None

    def distance(board: Board) -> float:
        optimal = board.optimal_wave_size
        if not is_number(optimal):
            optimal = (board.min_wave_size + board.max_wave_size) / 2
        return abs(optimal - wave_height)

    return min(fitting, key=distance)


def optimal_time_hint(profile: SurferProfile, conditions: Conditions) -> str:
    times = profile.availability.preferred_times or ["morning"]
    onshore = profile.preferences.wind_tolerance.onshore
    if is_number(conditions.wind_speed) and is_number(onshore) and conditions.wind_speed > onshore:
        early = next((slot for slot in EARLY_SLOTS if slot in times), None)
        if early:
            return f"Go at {early}, before the wind picks up"
    return f"Best during your preferred times: {', '.join(times)}"


def conditions_completeness(conditions: Conditions) -> float:
    """Fraction of the marine forecast fields present in a snapshot."""
    present = sum(1 for name in MARINE_FIELDS if getattr(conditions, name) is not None)
    return round(present / len(MARINE_FIELDS), 2)


def rank_candidates(profile: SurferProfile, candidates: Iterable[SpotConditions]) -> list[ScoredCandidate]:
    """Score and order candidates, best first.

    Blacklisted spots are dropped. Ties on score go to the closer spot.
    Spots beyond the travel range are kept but flagged.
    """
    blacklist = set(profile.spots.blacklist)
    travel_range = profile.availability.travel_distance_km
    min_water_temp = profile.preferences.water_temp.min

    ranked: list[ScoredCandidate] = []
    for candidate in candidates:
        if candidate.spot_id in blacklist:
            continue
        conditions = candidate.conditions
        value = score(profile, conditions)

        warnings = []
        if (
            is_number(conditions.water_temperature)
            and is_number(min_water_temp)
            and conditions.water_temperature < min_water_temp
        ):
            warnings.append(
                f"Water at {conditions.water_temperature}°C is below your minimum of {min_water_temp}°C"
            )

        ranked.append(
            ScoredCandidate(
                spot_id=candidate.spot_id,
                name=candidate.name,
                distance_km=candidate.distance_km,
                score=value,
                suitability=describe_suitability(value),
                conditions=conditions,
                recommended_board=recommend_board(profile, conditions.wave_height),
                optimal_time=optimal_time_hint(profile, conditions),
                data_completeness=conditions_completeness(conditions),
                beyond_travel_range=is_number(travel_range) and candidate.distance_km > travel_range,
                warnings=warnings,
            )
        )

    ranked.sort(key=lambda c: (-c.score, c.distance_km))
    return ranked
