"""Overall classification: discipline points summed per athlete."""

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

from typing import Iterable, List, Mapping, Union

from pentathlonscoring.constants import DISCIPLINE_ORDER
from pentathlonscoring.exceptions import UnknownDisciplineException
from pentathlonscoring.scoring.models import (
    CalculatedScore,
    LeaderboardAthlete,
    LeaderboardEntry,
)

ScoreValue = Union[int, CalculatedScore]


def _points(value: ScoreValue) -> int:
    if isinstance(value, CalculatedScore):
        return value.points
    return value


def build_leaderboard(
    athletes: Iterable[LeaderboardAthlete],
    scores: Mapping[str, Mapping[str, ScoreValue]],
) -> List[LeaderboardEntry]:
    """Rank athletes by the total of their recorded discipline points.

    A discipline without a score for an athlete counts as 0 towards the
    total and is reported as None. Athletes on equal totals keep the order
    they were given in and still receive consecutive ranks.

    Args:
        athletes: Competition entrants
        scores: Discipline key -> athlete id -> points or calculated score

    Returns:
        Entries sorted by total, highest first, ranked from 1

    Raises:
        UnknownDisciplineException: If ``scores`` names an unknown discipline
    """
    for discipline in scores:
        if discipline not in DISCIPLINE_ORDER:
            raise UnknownDisciplineException(f"Unknown discipline: {discipline}")

    entries = []
    for athlete in athletes:
        discipline_points = {}
        for discipline in DISCIPLINE_ORDER:
            value = scores.get(discipline, {}).get(athlete.athlete_id)
            discipline_points[discipline] = None if value is None else _points(value)
        entries.append(
            LeaderboardEntry(
                athlete=athlete,
                discipline_points=discipline_points,
                total=sum(p for p in discipline_points.values() if p is not None),
            )
        )

    entries.sort(key=lambda e: e.total, reverse=True)
    for rank, entry in enumerate(entries, start=1):
        entry.rank = rank
    return entries
