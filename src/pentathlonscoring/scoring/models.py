"""Performance inputs and calculated scores."""

# Pentathlon Scoring
# Copyright (C) 2025  Pentathlon Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pentathlonscoring.constants import DEFAULT_AGE_CATEGORY
from pentathlonscoring.type_hints import (
    AgeCategory,
    Discipline,
    Gate,
    Gender,
    StartMode,
)


@dataclass(frozen=True)
class FencingRankingInput:
    """Ranking round tally for one athlete."""

    victories: int
    total_bouts: int


@dataclass(frozen=True)
class FencingDEInput:
    """Final placement in the direct elimination tableau."""

    placement: int


@dataclass(frozen=True)
class ObstacleInput:
    """Obstacle course run.

    Attributes
    ----------
    time_seconds : float
        Course time.
    penalty_points : int
        Judge penalties on top of obstacle failures.
    obstacle_failures : mapping of int to int
        Obstacle number -> number of failed attempts on it.
    is_relay : bool
        Relay course, scored from a longer base time.
    """

    time_seconds: float
    penalty_points: int = 0
    obstacle_failures: Mapping[int, int] = field(default_factory=dict, hash=False)
    is_relay: bool = False

    def __post_init__(self):
        object.__setattr__(
            self, "obstacle_failures", MappingProxyType(dict(self.obstacle_failures))
        )


@dataclass(frozen=True)
class SwimmingInput:
    """Swim time with the context the banding depends on.

    ``age`` only matters for Masters, where swimmers aged 60 and over swim
    the short course.
    """

    time_hundredths: int
    penalty_points: int = 0
    age_category: AgeCategory = DEFAULT_AGE_CATEGORY
    gender: Optional[Gender] = None
    age: Optional[int] = None


@dataclass(frozen=True)
class LaserRunInput:
    """Laser run finish.

    ``overall_time_seconds`` is the timed duration from the athlete's own
    start and wins over ``finish_time_seconds`` when both are present.
    """

    finish_time_seconds: float
    overall_time_seconds: Optional[float] = None
    penalty_seconds: float = 0
    age_category: AgeCategory = DEFAULT_AGE_CATEGORY
    is_relay: bool = False


@dataclass(frozen=True)
class RidingInput:
    """Riding faults (Masters only)."""

    knockdowns: int
    disobediences: int
    time_over_seconds: int
    other_penalties: int = 0


def _freeze(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(
        {
            key: MappingProxyType(dict(value)) if isinstance(value, Mapping) else value
            for key, value in values.items()
        }
    )


def _thaw(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in values.items()
    }


PerformanceInput = Union[
    FencingRankingInput,
    FencingDEInput,
    ObstacleInput,
    SwimmingInput,
    LaserRunInput,
    RidingInput,
]


@dataclass(frozen=True)
class CalculatedScore:
    """Points produced by a calculator from one performance.

    Attributes
    ----------
    discipline : str
        Discipline key the performance was scored under.
    points : int
        MP points.
    raw : mapping
        Read-only view of the raw fields the points were calculated from.
    eliminated : bool
        The attempt ended without a score (obstacle double failure).
    """

    discipline: Discipline
    points: int
    raw: Mapping[str, Any] = field(default_factory=dict, hash=False)
    eliminated: bool = False

    def __post_init__(self):
        object.__setattr__(self, "raw", _freeze(self.raw))

    @classmethod
    def from_performance(
        cls,
        discipline: str,
        points: int,
        performance: PerformanceInput,
        eliminated: bool = False,
    ) -> "CalculatedScore":
        """Build a score carrying a copy of the performance's fields."""
        return cls(
            discipline=discipline,
            points=points,
            raw={f.name: getattr(performance, f.name) for f in fields(performance)},
            eliminated=eliminated,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize calculated score to dictionary."""
        return {
            "discipline": self.discipline,
            "points": self.points,
            "raw": _thaw(self.raw),
            "eliminated": self.eliminated,
        }


@dataclass(frozen=True)
class HandicapAthlete:
    """Cumulative standing going into the laser run."""

    athlete_id: str
    athlete_name: str
    cumulative_points: int


@dataclass(frozen=True)
class HandicapStart:
    """Handicap start slot for one athlete.

    Attributes
    ----------
    raw_delay : int
        Points behind the leader, one second per point.
    start_delay : int
        Delay actually applied, capped at the pack start time.
    is_pack_start : bool
        Athlete starts with the pack instead of on their own delay.
    shooting_station : int
        1-indexed station, equal to the start order position.
    gate_assignment : str
        "A" or "B" for handicap starters, "P" for the pack.
    start_time_formatted : str
        ``start_delay`` as ``M:SS``.
    """

    athlete_id: str
    athlete_name: str
    cumulative_points: int
    raw_delay: int
    start_delay: int
    is_pack_start: bool
    shooting_station: int
    gate_assignment: Gate
    start_time_formatted: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize handicap start to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class LaserRunLap:
    lap: int
    split_timestamp: float
    type: str  # "shoot" or "run"


@dataclass(frozen=True)
class LaserRunShootTime:
    visit: int
    shoot_time_seconds: float
    timed_out: bool = False


@dataclass
class LaserRunTimerData:
    """Raw timer capture for one laser run athlete."""

    overall_time_seconds: float
    start_mode: StartMode = "staggered"
    handicap_start_delay: float = 0
    is_pack_start: bool = False
    target_position: int = 0
    wave: int = 0
    gate_assignment: Gate = "A"
    total_laps: int = 0
    laps: List[LaserRunLap] = field(default_factory=list)
    shoot_times: List[LaserRunShootTime] = field(default_factory=list)


@dataclass(frozen=True)
class LaserRunAggregatedLap:
    lap: int
    split_timestamp: float
    lap_time_seconds: float
    type: str
    shoot_time_seconds: Optional[float]
    run_time_seconds: float


@dataclass
class LaserRunAggregate:
    """Timer data reduced to the totals stored with a laser run score.

    ``adjusted_time_seconds`` is only set for mass starts, where the
    handicap delay is taken back out of the clock time.
    """

    overall_time_seconds: float
    adjusted_time_seconds: Optional[float]
    total_shoot_time_seconds: float
    total_run_time_seconds: float
    penalty_seconds: float
    start_mode: StartMode
    total_laps: int
    laps: List[LaserRunAggregatedLap]
    handicap_start_delay: float
    is_pack_start: bool
    gate_assignment: Gate
    target_position: int
    wave: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize aggregate to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class TeamEntry:
    athlete_id: str
    athlete_name: str
    country: str
    total_points: int


@dataclass
class TeamStanding:
    """A nation's team classification line."""

    country: str
    athletes: List[TeamEntry]
    team_total: int
    rank: int = 0


@dataclass(frozen=True)
class SwimSeedAthlete:
    """An entrant to seed into swimming heats.

    ``best_time_hundredths`` of 0 means no time on record (seeded as "NT").
    ``average_time_hundredths`` breaks ties between equal best times.
    """

    athlete_id: str
    athlete_name: str
    best_time_hundredths: int = 0
    average_time_hundredths: float = 0

    @property
    def has_time(self) -> bool:
        return self.best_time_hundredths > 0


@dataclass(frozen=True)
class LaneAssignment:
    lane: int
    athlete_id: str
    athlete_name: str
    seed_hundredths: int
    seed_time: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SwimHeat:
    """One heat, assignments listed in lane order."""

    heat_number: int
    assignments: Tuple[LaneAssignment, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heat_number": self.heat_number,
            "assignments": [a.to_dict() for a in self.assignments],
        }


@dataclass(frozen=True)
class LeaderboardAthlete:
    athlete_id: str
    athlete_name: str
    country: str
    gender: Gender
    age_category: AgeCategory = DEFAULT_AGE_CATEGORY


@dataclass
class LeaderboardEntry:
    """An athlete's overall line: points per discipline and their total.

    Attributes
    ----------
    athlete : LeaderboardAthlete
        Who the line belongs to.
    discipline_points : dict of str to int or None
        Points per discipline key, None where nothing is recorded.
    total : int
        Sum of the recorded discipline points.
    rank : int
        1-based overall position, set once the board is sorted.
    """

    athlete: LeaderboardAthlete
    discipline_points: Dict[str, Optional[int]]
    total: int
    rank: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize leaderboard entry to dictionary."""
        return {
            **asdict(self.athlete),
            "discipline_points": dict(self.discipline_points),
            "total": self.total,
            "rank": self.rank,
        }
