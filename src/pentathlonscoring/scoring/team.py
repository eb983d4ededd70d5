"""Team classification: best three athletes of each nation."""

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

from collections import defaultdict
from typing import Dict, Iterable, List

from pentathlonscoring.constants import TEAM_SCORING_ATHLETES
from pentathlonscoring.scoring.models import TeamEntry, TeamStanding


def calculate_team_standings(entries: Iterable[TeamEntry]) -> List[TeamStanding]:
    """Rank nations by the sum of their three best totals.

    Nations with fewer than three athletes are not classified; a fourth or
    later athlete does not count.
    """
    by_country: Dict[str, List[TeamEntry]] = defaultdict(list)
    for entry in entries:
        by_country[entry.country].append(entry)

    standings = []
    for country, athletes in by_country.items():
        if len(athletes) < TEAM_SCORING_ATHLETES:
            continue

        best = sorted(athletes, key=lambda a: a.total_points, reverse=True)
        counted = best[:TEAM_SCORING_ATHLETES]
        standings.append(
            TeamStanding(
                country=country,
                athletes=counted,
                team_total=sum(a.total_points for a in counted),
            )
        )

    standings.sort(key=lambda s: s.team_total, reverse=True)
    for rank, standing in enumerate(standings, start=1):
        standing.rank = rank
    return standings
