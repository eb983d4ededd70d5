"""Laser run points, handicap starts and timer aggregation.

The laser run is the last discipline and uses a handicap start: each
athlete's deficit to the overall leader going into the event is turned into
a start delay at one second per point, so that whoever crosses the line
first is generally the overall winner.
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

from typing import List, Optional, Sequence

from pentathlonscoring.constants import (
    DEFAULT_LASER_RUN_TARGET_SECONDS,
    GATE_A,
    GATE_B,
    GATE_PACK,
    HANDICAP_PACK_START_THRESHOLD_SECONDS,
    HANDICAP_PACK_START_TIME_SECONDS,
    LASER_RUN_AGE_GROUPS,
    LASER_RUN_BASE_POINTS,
    LASER_RUN_INDIVIDUAL_TARGETS,
    LASER_RUN_RELAY_TARGETS,
    LASER_RUN_SENIOR_GROUP,
    LaserRunTarget,
)
from pentathlonscoring.scoring.models import (
    HandicapAthlete,
    HandicapStart,
    LaserRunAggregate,
    LaserRunAggregatedLap,
    LaserRunInput,
    LaserRunTimerData,
)
from pentathlonscoring.utils import round_half_up
from pentathlonscoring.utils.timing import format_laser_run_time


def get_laser_run_config(
    age_category: str, is_relay: bool = False
) -> Optional[LaserRunTarget]:
    """Course and target time for an age category.

    Unknown categories fall back to the senior course.
    """
    targets = LASER_RUN_RELAY_TARGETS if is_relay else LASER_RUN_INDIVIDUAL_TARGETS
    group = LASER_RUN_AGE_GROUPS.get(age_category, LASER_RUN_SENIOR_GROUP)
    for target in targets:
        if target.age_group == group:
            return target
    return None


def get_laser_run_target_time(age_category: str, is_relay: bool = False) -> int:
    """Target time in seconds, worth exactly 500 points."""
    target = get_laser_run_config(age_category, is_relay)
    if target is None:
        return DEFAULT_LASER_RUN_TARGET_SECONDS
    return target.target_time_seconds


def calculate_laser_run(performance: LaserRunInput) -> int:
    """Laser run MP points.

    ``500 + (target_time - time) - penalty_seconds``; one point per second.
    """
    if performance.overall_time_seconds is not None:
        effective_time = performance.overall_time_seconds
    else:
        effective_time = performance.finish_time_seconds

    target_time = get_laser_run_target_time(
        performance.age_category, performance.is_relay
    )
    points = (
        LASER_RUN_BASE_POINTS
        + (target_time - effective_time)
        - performance.penalty_seconds
    )
    return round_half_up(points)


def calculate_handicap_starts(
    athletes: Sequence[HandicapAthlete],
) -> List[HandicapStart]:
    """Work out the handicap start list.

    1. The leader is the athlete with the most cumulative points.
    2. Raw delay is the leader's points minus the athlete's points.
    3. Delays over 90 seconds become pack starts at 1:30.
    4. Handicap starters go off in delay order, then the pack by raw delay.
    5. Shooting stations follow start order; handicap starters alternate
       gates A and B, the pack uses gate P.

    Args:
        athletes: Cumulative standings before the laser run

    Returns:
        One start slot per athlete, in start order
    """
    if not athletes:
        return []

    leader_points = max(athlete.cumulative_points for athlete in athletes)

    delays = []
    for athlete in athletes:
        raw_delay = leader_points - athlete.cumulative_points
        is_pack = raw_delay > HANDICAP_PACK_START_THRESHOLD_SECONDS
        start_delay = HANDICAP_PACK_START_TIME_SECONDS if is_pack else raw_delay
        delays.append((athlete, raw_delay, start_delay, is_pack))

    # Stable sort keeps submission order between equal delays
    delays.sort(key=lambda entry: (entry[3], entry[1] if entry[3] else entry[2]))

    starts = []
    for index, (athlete, raw_delay, start_delay, is_pack) in enumerate(delays):
        if is_pack:
            gate = GATE_PACK
        else:
            gate = GATE_A if index % 2 == 0 else GATE_B

        starts.append(
            HandicapStart(
                athlete_id=athlete.athlete_id,
                athlete_name=athlete.athlete_name,
                cumulative_points=athlete.cumulative_points,
                raw_delay=raw_delay,
                start_delay=start_delay,
                is_pack_start=is_pack,
                shooting_station=index + 1,
                gate_assignment=gate,
                start_time_formatted=format_laser_run_time(start_delay),
            )
        )
    return starts


def compute_laser_run_aggregation(data: LaserRunTimerData) -> LaserRunAggregate:
    """Reduce raw timer splits to lap and shoot/run totals.

    Shoot times are matched to shoot laps in order; the run part of a lap
    is whatever remains of the lap time.
    """
    total_shoot = sum(shot.shoot_time_seconds for shot in data.shoot_times)
    total_run = data.overall_time_seconds - total_shoot
    adjusted: Optional[float] = None
    if data.start_mode == "mass":
        adjusted = data.overall_time_seconds - data.handicap_start_delay

    laps = []
    previous_split = 0.0
    shoot_index = 0
    for lap in data.laps:
        lap_time = lap.split_timestamp - previous_split
        previous_split = lap.split_timestamp

        shoot_time: Optional[float] = None
        if lap.type == "shoot":
            if shoot_index < len(data.shoot_times):
                shoot_time = data.shoot_times[shoot_index].shoot_time_seconds
            shoot_index += 1

        laps.append(
            LaserRunAggregatedLap(
                lap=lap.lap,
                split_timestamp=lap.split_timestamp,
                lap_time_seconds=lap_time,
                type=lap.type,
                shoot_time_seconds=shoot_time,
                run_time_seconds=lap_time - shoot_time
                if shoot_time is not None
                else lap_time,
            )
        )

    return LaserRunAggregate(
        overall_time_seconds=data.overall_time_seconds,
        adjusted_time_seconds=adjusted,
        total_shoot_time_seconds=total_shoot,
        total_run_time_seconds=total_run,
        penalty_seconds=0,
        start_mode=data.start_mode,
        total_laps=data.total_laps,
        laps=laps,
        handicap_start_delay=data.handicap_start_delay,
        is_pack_start=data.is_pack_start,
        gate_assignment=data.gate_assignment,
        target_position=data.target_position,
        wave=data.wave,
    )
