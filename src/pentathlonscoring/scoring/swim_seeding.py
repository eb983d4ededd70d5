"""Swimming heat seeding from entrants' previous swim times."""

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

from typing import Iterable, List, Sequence

from pentathlonscoring.constants import (
    NO_TIME_LABEL,
    SWIM_HEAT_LANES,
    SWIM_LANE_ORDER,
)
from pentathlonscoring.scoring.models import LaneAssignment, SwimHeat, SwimSeedAthlete
from pentathlonscoring.utils import setup_logger
from pentathlonscoring.utils.timing import format_swimming_time

logger = setup_logger(__name__)


def swim_seed_athlete(
    athlete_id: str, athlete_name: str, times_hundredths: Iterable[int]
) -> SwimSeedAthlete:
    """Seed entry from an athlete's swim history; non-positive times are ignored."""
    times = [t for t in times_hundredths if t > 0]
    if not times:
        return SwimSeedAthlete(athlete_id, athlete_name)
    return SwimSeedAthlete(
        athlete_id,
        athlete_name,
        best_time_hundredths=min(times),
        average_time_hundredths=sum(times) / len(times),
    )


def format_seed_time(hundredths: int) -> str:
    if hundredths <= 0:
        return NO_TIME_LABEL
    return format_swimming_time(hundredths)


def _heat_order(athletes: Sequence[SwimSeedAthlete]) -> List[SwimSeedAthlete]:
    """Entrants in swimming order: no-time entrants, then slowest to fastest."""
    timed = sorted(
        (a for a in athletes if a.has_time),
        key=lambda a: (a.best_time_hundredths, a.average_time_hundredths),
    )
    no_time = [a for a in athletes if not a.has_time]
    return no_time + timed[::-1]


def _assign_lanes(group: Sequence[SwimSeedAthlete]) -> List[LaneAssignment]:
    # fastest first, entrants without a time take the outside lanes
    by_speed = sorted(group, key=lambda a: (not a.has_time, a.best_time_hundredths))
    assignments = [
        LaneAssignment(
            lane=lane,
            athlete_id=athlete.athlete_id,
            athlete_name=athlete.athlete_name,
            seed_hundredths=athlete.best_time_hundredths,
            seed_time=format_seed_time(athlete.best_time_hundredths),
        )
        for lane, athlete in zip(SWIM_LANE_ORDER, by_speed)
    ]
    assignments.sort(key=lambda a: a.lane)
    return assignments


def generate_swim_heats(athletes: Iterable[SwimSeedAthlete]) -> List[SwimHeat]:
    """Split entrants into heats of eight, fastest swimmers in the last heat.

    Entrants without a seed time swim first, then timed entrants from slowest
    to fastest (equal best times are separated by the lower average). Within
    a heat the fastest swimmer takes lane 4, then lanes 5, 3, 6, 2, 7, 1
    and 8.

    Args:
        athletes: Entrants to seed

    Returns:
        Heats numbered from 1, each listing its assignments by lane
    """
    ordered = _heat_order(list(athletes))
    heats = [
        SwimHeat(
            heat_number=index // SWIM_HEAT_LANES + 1,
            assignments=tuple(_assign_lanes(ordered[index : index + SWIM_HEAT_LANES])),
        )
        for index in range(0, len(ordered), SWIM_HEAT_LANES)
    ]
    logger.info(f"Seeded {len(ordered)} swimmer(s) into {len(heats)} heat(s)")
    return heats
