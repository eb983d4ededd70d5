"""Masters age handicap."""

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

from datetime import date
from typing import NamedTuple, Optional, Union

from dateutil.relativedelta import relativedelta

from pentathlonscoring.constants import MASTERS_HANDICAP_BASE_AGE
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)


class MastersHandicap(NamedTuple):
    adjusted_total: int
    bonus: int


def calculate_age(date_of_birth: Union[date, str], on: Optional[date] = None) -> int:
    """Age in whole years.

    Args:
        date_of_birth: Date of birth, or an ISO ``YYYY-MM-DD`` string
        on: Reference date, today when omitted

    Returns:
        Completed years between the two dates
    """
    if isinstance(date_of_birth, str):
        date_of_birth = date.fromisoformat(date_of_birth)

    reference = on or date.today()
    age = relativedelta(reference, date_of_birth).years
    logger.debug(f"Age on {reference} for date of birth {date_of_birth}: {age}")
    return age


def get_masters_handicap_bonus(age: int) -> int:
    """Points added to a Masters total for age.

    Piecewise linear through age 30 = -50, 40 = 0, 50 = +50, 60 = +150 and
    70 = +300: 5 points a year up to 50, 10 a year to 60, 15 a year after.
    """
    if age <= 50:
        return (age - MASTERS_HANDICAP_BASE_AGE) * 5
    if age <= 60:
        return 50 + (age - 50) * 10
    return 150 + (age - 60) * 15


def apply_masters_handicap(total_points: int, age: int) -> MastersHandicap:
    """Add the age bonus to a raw Masters total."""
    bonus = get_masters_handicap_bonus(age)
    return MastersHandicap(adjusted_total=total_points + bonus, bonus=bonus)
