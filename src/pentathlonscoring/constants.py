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

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

# --- Disciplines ---
DISCIPLINE_FENCING_RANKING = "fencing_ranking"
DISCIPLINE_FENCING_DE = "fencing_de"
DISCIPLINE_OBSTACLE = "obstacle"
DISCIPLINE_SWIMMING = "swimming"
DISCIPLINE_LASER_RUN = "laser_run"
DISCIPLINE_RIDING = "riding"

DISCIPLINE_NAMES = MappingProxyType(
    {
        DISCIPLINE_FENCING_RANKING: "Fencing - Ranking",
        DISCIPLINE_FENCING_DE: "Fencing - DE",
        DISCIPLINE_OBSTACLE: "Obstacle",
        DISCIPLINE_SWIMMING: "Swimming",
        DISCIPLINE_LASER_RUN: "Laser Run",
        DISCIPLINE_RIDING: "Riding",
    }
)

DISCIPLINE_ORDER: Tuple[str, ...] = (
    DISCIPLINE_FENCING_RANKING,
    DISCIPLINE_FENCING_DE,
    DISCIPLINE_OBSTACLE,
    DISCIPLINE_SWIMMING,
    DISCIPLINE_LASER_RUN,
    DISCIPLINE_RIDING,
)

DEFAULT_AGE_CATEGORY = "Senior"


# --- Fencing ranking round ---
class VictoryValue(NamedTuple):
    victories_for_250: int
    value_per_victory: int


FENCING_BASE_POINTS = 250
FENCING_THRESHOLD_RATIO = 0.70

# Keyed by total bouts fenced in the ranking round
FENCING_VICTORY_VALUE_TABLE: Mapping[int, VictoryValue] = MappingProxyType(
    {
        60: VictoryValue(42, 3),
        59: VictoryValue(41, 3),
        58: VictoryValue(41, 3),
        57: VictoryValue(40, 3),
        56: VictoryValue(39, 3),
        55: VictoryValue(39, 3),
        54: VictoryValue(38, 3),
        53: VictoryValue(37, 3),
        52: VictoryValue(36, 3),
        51: VictoryValue(36, 3),
        50: VictoryValue(35, 3),
        49: VictoryValue(34, 3),
        48: VictoryValue(34, 3),
        47: VictoryValue(33, 4),
        46: VictoryValue(32, 4),
        45: VictoryValue(32, 4),
        44: VictoryValue(31, 4),
        43: VictoryValue(30, 4),
        42: VictoryValue(29, 4),
        41: VictoryValue(29, 4),
        40: VictoryValue(28, 4),
        39: VictoryValue(27, 5),
        38: VictoryValue(27, 5),
        37: VictoryValue(26, 5),
        36: VictoryValue(25, 5),
        35: VictoryValue(25, 5),
        34: VictoryValue(24, 5),
        33: VictoryValue(23, 6),
        32: VictoryValue(22, 6),
        31: VictoryValue(22, 6),
        30: VictoryValue(21, 6),
        29: VictoryValue(20, 7),
        28: VictoryValue(20, 7),
        27: VictoryValue(19, 7),
        26: VictoryValue(18, 7),
        25: VictoryValue(18, 7),
        24: VictoryValue(17, 7),
        23: VictoryValue(16, 7),
        22: VictoryValue(15, 8),
        21: VictoryValue(15, 8),
        20: VictoryValue(14, 8),
        19: VictoryValue(13, 8),
    }
)


# --- Fencing direct elimination: points by final placement ---
FENCING_DE_PLACEMENT_POINTS: Mapping[int, int] = MappingProxyType(
    {
        1: 250,
        2: 244,
        3: 238,
        4: 236,
        5: 230,
        6: 228,
        7: 226,
        8: 224,
        9: 218,
        10: 216,
        11: 214,
        12: 212,
        13: 210,
        14: 208,
        15: 206,
        16: 204,
        17: 198,
        18: 196,
    }
)


# --- Obstacle ---
class ObstacleConfig(NamedTuple):
    base_time_seconds: float
    base_points: int
    seconds_per_point: float


OBSTACLE_INDIVIDUAL = ObstacleConfig(15.0, 400, 0.33)
OBSTACLE_RELAY = ObstacleConfig(35.0, 400, 0.33)
# Deducted once for each obstacle failed at the first attempt
OBSTACLE_FAILURE_PENALTY = 10
# A second failure on the same obstacle ends the attempt
OBSTACLE_FAILURES_TO_ELIMINATE = 2


# --- Swimming ---
class SwimmingConfig(NamedTuple):
    distance_meters: int
    base_time_hundredths: int
    base_points: int
    increment_hundredths: int


SWIMMING_STANDARD = SwimmingConfig(100, 7000, 250, 20)  # 1:10.00, 0.20s bands
SWIMMING_YOUTH = SwimmingConfig(50, 4500, 250, 50)  # 0:45.00, 0.50s bands
SWIMMING_MASTERS_MEN = SwimmingConfig(100, 7800, 250, 50)
SWIMMING_MASTERS_WOMEN = SwimmingConfig(100, 9000, 250, 50)
SWIMMING_MASTERS_60_MEN = SwimmingConfig(50, 3800, 250, 50)
SWIMMING_MASTERS_60_WOMEN = SwimmingConfig(50, 4300, 250, 50)

YOUTH_SWIMMING_CATEGORIES = frozenset({"U9", "U11"})
MASTERS_SHORT_COURSE_AGE = 60

# Heat seeding: the fastest swimmer of a heat takes lane 4
SWIM_HEAT_LANES = 8
SWIM_LANE_ORDER: Tuple[int, ...] = (4, 5, 3, 6, 2, 7, 1, 8)
NO_TIME_LABEL = "NT"


# --- Laser run ---
class LaserRunTarget(NamedTuple):
    age_group: str
    total_distance_meters: int
    running_sequences: str
    shooting_sequences: str
    target_time_seconds: int


LASER_RUN_BASE_POINTS = 500

LASER_RUN_SENIOR_GROUP = "Senior, Junior, U19"

LASER_RUN_INDIVIDUAL_TARGETS: Tuple[LaserRunTarget, ...] = (
    LaserRunTarget(LASER_RUN_SENIOR_GROUP, 3000, "4 x 600m", "4 x 5 hits", 800),
    LaserRunTarget("U17", 2400, "3 x 600m", "3 x 5 hits", 630),
    LaserRunTarget("U15", 1800, "3 x 600m", "3 x 5 hits", 460),
    LaserRunTarget("U13", 900, "2 x 300m", "2 x 5 hits", 320),
    LaserRunTarget("U11", 600, "2 x 300m", "2 x 5 hits", 240),
    LaserRunTarget("U9", 600, "2 x 300m", "2 x 5 hits", 240),
)

LASER_RUN_RELAY_TARGETS: Tuple[LaserRunTarget, ...] = (
    LaserRunTarget(
        LASER_RUN_SENIOR_GROUP, 3600, "2 x 3 x 600m", "2 x 3 x 5 hits", 800
    ),
    LaserRunTarget("U17", 2400, "2 x 2 x 600m", "2 x 2 x 5 hits", 460),
    LaserRunTarget("U15", 2400, "2 x 2 x 600m", "2 x 2 x 5 hits", 460),
    LaserRunTarget("U13", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
    LaserRunTarget("U11", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
    LaserRunTarget("U9", 1200, "2 x 2 x 300m", "2 x 2 x 5 hits", 320),
)

# Masters run the senior course
LASER_RUN_AGE_GROUPS = MappingProxyType(
    {
        "Senior": LASER_RUN_SENIOR_GROUP,
        "Junior": LASER_RUN_SENIOR_GROUP,
        "U19": LASER_RUN_SENIOR_GROUP,
        "U17": "U17",
        "U15": "U15",
        "U13": "U13",
        "U11": "U11",
        "U9": "U9",
        "Masters": LASER_RUN_SENIOR_GROUP,
    }
)

DEFAULT_LASER_RUN_TARGET_SECONDS = 800

# Handicap start
HANDICAP_PACK_START_THRESHOLD_SECONDS = 90
HANDICAP_PACK_START_TIME_SECONDS = 90
GATE_A = "A"
GATE_B = "B"
GATE_PACK = "P"


# --- Riding (Masters only) ---
class RidingPenaltySchedule(NamedTuple):
    """Per-fault costs for the riding discipline.

    ``disobedience`` holds the cost of the first, second, ... disobedience;
    further repeats cost the last entry again.
    """

    name: str
    knockdown: int
    disobedience: Tuple[int, ...]
    time_over_per_second: int
    other: int


RIDING_BASE_POINTS = 300

RIDING_UIPM_RULES = RidingPenaltySchedule(
    name="uipm_rules",
    knockdown=7,
    disobedience=(10,),
    time_over_per_second=1,
    other=10,
)

RIDING_FIELD_SCORING = RidingPenaltySchedule(
    name="field_scoring",
    knockdown=28,
    disobedience=(40, 60, 100),
    time_over_per_second=4,
    other=20,
)

RIDING_PENALTY_SCHEDULES: Mapping[str, RidingPenaltySchedule] = MappingProxyType(
    {
        RIDING_UIPM_RULES.name: RIDING_UIPM_RULES,
        RIDING_FIELD_SCORING.name: RIDING_FIELD_SCORING,
    }
)

DEFAULT_RIDING_SCHEDULE = RIDING_UIPM_RULES.name


# --- Masters age handicap ---
MASTERS_HANDICAP_BASE_AGE = 40

# Team classification
TEAM_SCORING_ATHLETES = 3
