"""Discipline score calculators.

Every calculator maps one athlete's raw performance to integer MP points,
is pure and never raises. Clamping happens in :class:`ScoreRecorder`.
"""

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

from pentathlonscoring.scoring.fencing import (
    calculate_fencing_de,
    calculate_fencing_ranking,
    get_all_de_placements,
    get_fencing_ranking_params,
)
from pentathlonscoring.scoring.laser_run import (
    calculate_handicap_starts,
    calculate_laser_run,
    compute_laser_run_aggregation,
    get_laser_run_target_time,
)
from pentathlonscoring.scoring.leaderboard import build_leaderboard
from pentathlonscoring.scoring.masters import (
    apply_masters_handicap,
    calculate_age,
    get_masters_handicap_bonus,
)
from pentathlonscoring.scoring.models import (
    CalculatedScore,
    FencingDEInput,
    FencingRankingInput,
    HandicapAthlete,
    HandicapStart,
    LaneAssignment,
    LaserRunInput,
    LeaderboardAthlete,
    LeaderboardEntry,
    ObstacleInput,
    RidingInput,
    SwimHeat,
    SwimmingInput,
    SwimSeedAthlete,
    TeamEntry,
    TeamStanding,
)
from pentathlonscoring.scoring.obstacle import calculate_obstacle
from pentathlonscoring.scoring.recorder import ScoreRecorder
from pentathlonscoring.scoring.riding import calculate_riding
from pentathlonscoring.scoring.swim_seeding import (
    format_seed_time,
    generate_swim_heats,
    swim_seed_athlete,
)
from pentathlonscoring.scoring.swimming import calculate_swimming, get_swimming_config
from pentathlonscoring.scoring.team import calculate_team_standings

__all__ = [
    "CalculatedScore",
    "FencingDEInput",
    "FencingRankingInput",
    "HandicapAthlete",
    "HandicapStart",
    "LaneAssignment",
    "LaserRunInput",
    "LeaderboardAthlete",
    "LeaderboardEntry",
    "ObstacleInput",
    "RidingInput",
    "ScoreRecorder",
    "SwimHeat",
    "SwimSeedAthlete",
    "SwimmingInput",
    "TeamEntry",
    "TeamStanding",
    "apply_masters_handicap",
    "build_leaderboard",
    "calculate_age",
    "calculate_fencing_de",
    "calculate_fencing_ranking",
    "calculate_handicap_starts",
    "calculate_laser_run",
    "calculate_obstacle",
    "calculate_riding",
    "calculate_swimming",
    "calculate_team_standings",
    "compute_laser_run_aggregation",
    "format_seed_time",
    "generate_swim_heats",
    "get_all_de_placements",
    "get_fencing_ranking_params",
    "get_laser_run_target_time",
    "get_masters_handicap_bonus",
    "get_swimming_config",
    "swim_seed_athlete",
]
