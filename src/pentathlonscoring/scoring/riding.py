"""Riding points (Masters only)."""

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
    RIDING_BASE_POINTS,
    RIDING_UIPM_RULES,
    RidingPenaltySchedule,
)
from pentathlonscoring.scoring.models import RidingInput


def disobedience_penalty(count: int, schedule: RidingPenaltySchedule) -> int:
    """Cost of ``count`` disobediences under an escalating schedule."""
    costs = schedule.disobedience
    return sum(costs[min(i, len(costs) - 1)] for i in range(count))


def riding_penalty(
    performance: RidingInput, schedule: RidingPenaltySchedule = RIDING_UIPM_RULES
) -> int:
    """Total penalty points for a round."""
    return (
        performance.knockdowns * schedule.knockdown
        + disobedience_penalty(performance.disobediences, schedule)
        + performance.time_over_seconds * schedule.time_over_per_second
        + performance.other_penalties * schedule.other
    )


def calculate_riding(
    performance: RidingInput, schedule: RidingPenaltySchedule = RIDING_UIPM_RULES
) -> int:
    """Riding MP points: ``300 - total_penalty``.

    Args:
        performance: Fault counts for the round
        schedule: Penalty schedule; ``ScoringConfig.riding_schedule`` names
            the one in force for a competition

    Returns:
        Points, unclamped
    """
    return RIDING_BASE_POINTS - riding_penalty(performance, schedule)
