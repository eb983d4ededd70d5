"""Fencing ranking round and direct elimination points."""

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

from typing import List, NamedTuple, Tuple

from pentathlonscoring.constants import (
    FENCING_BASE_POINTS,
    FENCING_DE_PLACEMENT_POINTS,
    FENCING_THRESHOLD_RATIO,
    FENCING_VICTORY_VALUE_TABLE,
    VictoryValue,
)
from pentathlonscoring.scoring.models import FencingDEInput, FencingRankingInput
from pentathlonscoring.utils import round_half_up


class FencingRankingParams(NamedTuple):
    total_bouts: int
    victories_for_250: int
    value_per_victory: int


def victory_value(total_bouts: int) -> VictoryValue:
    """Look up the 250-point threshold and value per victory.

    Bout counts missing from the rules table are derived: the threshold is
    70% of the bouts and a victory is worth 250 divided by the threshold.
    """
    entry = FENCING_VICTORY_VALUE_TABLE.get(total_bouts)
    if entry is not None:
        return entry

    threshold = round_half_up(total_bouts * FENCING_THRESHOLD_RATIO)
    value = round_half_up(FENCING_BASE_POINTS / threshold) if threshold > 0 else 0
    return VictoryValue(threshold, value)


def calculate_fencing_ranking(performance: FencingRankingInput) -> int:
    """Ranking round MP points.

    ``250 + (victories - victories_for_250) * value_per_victory``. The result
    is not clamped; negative totals are left to the recording boundary.

    Example:
        >>> calculate_fencing_ranking(FencingRankingInput(victories=20, total_bouts=23))
        278
    """
    if performance.total_bouts <= 0:
        return 0

    threshold, value = victory_value(performance.total_bouts)
    return FENCING_BASE_POINTS + (performance.victories - threshold) * value


def get_fencing_ranking_params(num_competitors: int) -> FencingRankingParams:
    """Ranking round parameters when every athlete fences every other once."""
    total_bouts = num_competitors - 1
    if total_bouts <= 0:
        return FencingRankingParams(max(total_bouts, 0), 0, 0)

    threshold, value = victory_value(total_bouts)
    return FencingRankingParams(total_bouts, threshold, value)


def calculate_fencing_de(performance: FencingDEInput) -> int:
    """Direct elimination MP points from the final placement.

    Placements off the table, including elimination in the initial bout,
    score 0.
    """
    return FENCING_DE_PLACEMENT_POINTS.get(performance.placement, 0)


def get_all_de_placements() -> List[Tuple[int, int]]:
    """All (placement, points) pairs of the DE table, best first."""
    return sorted(FENCING_DE_PLACEMENT_POINTS.items())
