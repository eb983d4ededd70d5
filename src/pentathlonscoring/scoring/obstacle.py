"""Obstacle course points."""

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

from pentathlonscoring.constants import (
    OBSTACLE_FAILURE_PENALTY,
    OBSTACLE_FAILURES_TO_ELIMINATE,
    OBSTACLE_INDIVIDUAL,
    OBSTACLE_RELAY,
)
from pentathlonscoring.scoring.models import ObstacleInput
from pentathlonscoring.utils import round_half_up


def is_eliminated(performance: ObstacleInput) -> bool:
    """True when any single obstacle was failed twice."""
    return any(
        failures >= OBSTACLE_FAILURES_TO_ELIMINATE
        for failures in performance.obstacle_failures.values()
    )


def failure_penalty(performance: ObstacleInput) -> int:
    """Points lost to first-attempt failures."""
    failed = sum(1 for failures in performance.obstacle_failures.values() if failures)
    return failed * OBSTACLE_FAILURE_PENALTY


def calculate_obstacle(performance: ObstacleInput) -> int:
    """Obstacle MP points.

    ``400 - round((time - base_time) / 0.33) - penalties``. An eliminated
    attempt scores 0.

    Example:
        >>> calculate_obstacle(ObstacleInput(time_seconds=18.5))
        389
    """
    if is_eliminated(performance):
        return 0

    config = OBSTACLE_RELAY if performance.is_relay else OBSTACLE_INDIVIDUAL
    time_diff = performance.time_seconds - config.base_time_seconds
    points_from_time = round_half_up(time_diff / config.seconds_per_point)

    return (
        config.base_points
        - points_from_time
        - performance.penalty_points
        - failure_penalty(performance)
    )
