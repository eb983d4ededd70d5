"""Parsing and formatting of competition times.

Swimming times are kept in hundredths of a second, laser run times in
seconds.
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

import math
import re

from pentathlonscoring.exceptions import TimeFormatException
from pentathlonscoring.utils import round_half_up

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{1,2})(?:\.(\d{1,2}))?$")


def parse_swimming_time(time_str: str) -> int:
    """Convert ``M:SS.hh`` text to hundredths of a second.

    A single fractional digit is read as tenths, so ``"0:50.5"`` is 5050.

    Args:
        time_str: Time such as ``"01:10.00"`` or ``"1:10"``

    Returns:
        Total hundredths of a second

    Raises:
        TimeFormatException: If the text is not a clock time

    Example:
        >>> parse_swimming_time("01:10.00")
        7000
    """
    match = _CLOCK_PATTERN.match(time_str.strip())
    if not match:
        raise TimeFormatException(f"Invalid swimming time: {time_str!r}")

    minutes = int(match.group(1))
    seconds = int(match.group(2))
    fraction = match.group(3) or "0"
    hundredths = int(fraction.ljust(2, "0"))

    return minutes * 6000 + seconds * 100 + hundredths


def format_swimming_time(hundredths: int) -> str:
    """Convert hundredths of a second to ``MM:SS.hh``."""
    total_seconds, remaining = divmod(hundredths, 100)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}.{remaining:02d}"


def parse_laser_run_time(time_str: str) -> float:
    """Convert ``M:SS`` text, or plain seconds, to seconds.

    Raises:
        TimeFormatException: If the text is neither a clock time nor a number
    """
    text = time_str.strip()
    match = _CLOCK_PATTERN.match(text)
    if not match:
        try:
            seconds = float(text)
        except ValueError as e:
            raise TimeFormatException(f"Invalid laser run time: {time_str!r}") from e
        if not math.isfinite(seconds):
            raise TimeFormatException(f"Invalid laser run time: {time_str!r}")
        return seconds

    minutes = int(match.group(1))
    seconds = int(match.group(2))
    fraction = float(f"0.{match.group(3)}") if match.group(3) else 0.0
    return minutes * 60 + seconds + fraction


def format_laser_run_time(total_seconds: float) -> str:
    """Convert seconds to ``M:SS``, rounding to the whole second."""
    rounded = round_half_up(total_seconds)
    minutes, seconds = divmod(rounded, 60)
    return f"{minutes}:{seconds:02d}"
