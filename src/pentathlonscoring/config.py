"""ScoringConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from pentathlonscoring.constants import (
    DEFAULT_RIDING_SCHEDULE,
    RIDING_PENALTY_SCHEDULES,
    RidingPenaltySchedule,
)
from pentathlonscoring.exceptions import InvalidConfigurationException


@dataclass
class ScoringConfig:
    """Competition-wide scoring settings.

    Attributes
    ----------
    riding_schedule : str
        Name of the riding penalty schedule, a key of
        ``RIDING_PENALTY_SCHEDULES``.
    clamp_negative_points : bool
        Record negative calculator results as zero.
    min_bracket_competitors : int
        Fewest ranked athletes a direct elimination bracket is built from.
    cascade_invalidation : bool
        When a decided bout gets a different winner, clear the results that
        depended on the old winner.
    """

    riding_schedule: str = DEFAULT_RIDING_SCHEDULE
    clamp_negative_points: bool = True
    min_bracket_competitors: int = 2
    cascade_invalidation: bool = True

    def validate(self) -> None:
        """Check the settings are usable.

        Raises:
            InvalidConfigurationException: On an unknown riding schedule or a
                bracket minimum below two
        """
        if self.riding_schedule not in RIDING_PENALTY_SCHEDULES:
            known = ", ".join(sorted(RIDING_PENALTY_SCHEDULES))
            raise InvalidConfigurationException(
                f"Unknown riding schedule {self.riding_schedule!r} (known: {known})"
            )
        if self.min_bracket_competitors < 2:
            raise InvalidConfigurationException(
                "A bracket needs at least 2 competitors, "
                f"got min_bracket_competitors={self.min_bracket_competitors}"
            )

    @property
    def riding_penalties(self) -> RidingPenaltySchedule:
        """The riding penalty schedule selected by name."""
        self.validate()
        return RIDING_PENALTY_SCHEDULES[self.riding_schedule]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "riding_schedule": self.riding_schedule,
            "clamp_negative_points": self.clamp_negative_points,
            "min_bracket_competitors": self.min_bracket_competitors,
            "cascade_invalidation": self.cascade_invalidation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringConfig":
        """Deserialize configuration from dictionary."""
        config = cls(
            riding_schedule=data.get("riding_schedule", DEFAULT_RIDING_SCHEDULE),
            clamp_negative_points=data.get("clamp_negative_points", True),
            min_bracket_competitors=data.get("min_bracket_competitors", 2),
            cascade_invalidation=data.get("cascade_invalidation", True),
        )
        config.validate()
        return config
