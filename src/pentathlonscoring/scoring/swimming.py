"""Swimming points."""

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

from typing import Optional

from pentathlonscoring.constants import (
    MASTERS_SHORT_COURSE_AGE,
    SWIMMING_MASTERS_60_MEN,
    SWIMMING_MASTERS_60_WOMEN,
    SWIMMING_MASTERS_MEN,
    SWIMMING_MASTERS_WOMEN,
    SWIMMING_STANDARD,
    SWIMMING_YOUTH,
    YOUTH_SWIMMING_CATEGORIES,
    SwimmingConfig,
)
from pentathlonscoring.scoring.models import SwimmingInput
from pentathlonscoring.type_hints import FEMALE


def get_swimming_config(
    age_category: str, gender: Optional[str] = None, age: Optional[int] = None
) -> SwimmingConfig:
    """Pick distance, base time and banding for a swimmer.

    U9 and U11 swim 50m with 0.50s bands; everyone from U13 to Senior swims
    the standard 100m. Masters base times depend on gender (men when not
    given) and drop to the 50m course from age 60.
    """
    if age_category in YOUTH_SWIMMING_CATEGORIES:
        return SWIMMING_YOUTH

    if age_category == "Masters":
        short_course = age is not None and age >= MASTERS_SHORT_COURSE_AGE
        if gender == FEMALE:
            return SWIMMING_MASTERS_60_WOMEN if short_course else SWIMMING_MASTERS_WOMEN
        return SWIMMING_MASTERS_60_MEN if short_course else SWIMMING_MASTERS_MEN

    return SWIMMING_STANDARD


def calculate_swimming(performance: SwimmingInput) -> int:
    """Swimming MP points.

    ``250 - floor((time - base_time) / band) - penalty_points``, all times in
    hundredths. Times under the base time earn extra points band by band.
    """
    config = get_swimming_config(
        performance.age_category, performance.gender, performance.age
    )

    time_diff = performance.time_hundredths - config.base_time_hundredths
    points_from_time = int(time_diff // config.increment_hundredths)

    return config.base_points - points_from_time - performance.penalty_points
