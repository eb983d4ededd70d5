"""Score recording for submitted performances.

This module is the boundary between the pure calculators and whatever
persists scores: it picks the calculator for a discipline, clamps the result
and tells listeners which athletes changed.
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

from typing import Callable, Dict, Mapping, Optional, Tuple, Type

from pentathlonscoring.config import ScoringConfig
from pentathlonscoring.constants import (
    DISCIPLINE_FENCING_DE,
    DISCIPLINE_FENCING_RANKING,
    DISCIPLINE_LASER_RUN,
    DISCIPLINE_NAMES,
    DISCIPLINE_OBSTACLE,
    DISCIPLINE_ORDER,
    DISCIPLINE_RIDING,
    DISCIPLINE_SWIMMING,
)
from pentathlonscoring.events import ScoreChangeEvent, ScoreChangeNotifier
from pentathlonscoring.exceptions import ScoringException, UnknownDisciplineException
from pentathlonscoring.scoring.fencing import (
    calculate_fencing_de,
    calculate_fencing_ranking,
)
from pentathlonscoring.scoring.laser_run import calculate_laser_run
from pentathlonscoring.scoring.models import (
    CalculatedScore,
    FencingDEInput,
    FencingRankingInput,
    LaserRunInput,
    ObstacleInput,
    PerformanceInput,
    RidingInput,
    SwimmingInput,
)
from pentathlonscoring.scoring.obstacle import calculate_obstacle, is_eliminated
from pentathlonscoring.scoring.riding import calculate_riding
from pentathlonscoring.scoring.swimming import calculate_swimming
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)


class ScoreRecorder:
    """Turns submitted performances into scores ready to persist.

    This class is responsible for:
    - Dispatching each performance to its discipline's calculator
    - Clamping negative points when the competition config asks for it
    - Emitting one score change event per recorded batch
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        notifier: Optional[ScoreChangeNotifier] = None,
    ) -> None:
        """Initialize the recorder.

        Args:
            config: Scoring settings; defaults apply when omitted
            notifier: Hub told about recorded batches, or None to stay silent
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        self.notifier = notifier

        riding_schedule = self.config.riding_penalties
        self._calculators: Dict[str, Tuple[Type, Callable[..., int]]] = {
            DISCIPLINE_FENCING_RANKING: (
                FencingRankingInput,
                calculate_fencing_ranking,
            ),
            DISCIPLINE_FENCING_DE: (FencingDEInput, calculate_fencing_de),
            DISCIPLINE_OBSTACLE: (ObstacleInput, calculate_obstacle),
            DISCIPLINE_SWIMMING: (SwimmingInput, calculate_swimming),
            DISCIPLINE_LASER_RUN: (LaserRunInput, calculate_laser_run),
            DISCIPLINE_RIDING: (
                RidingInput,
                lambda performance: calculate_riding(performance, riding_schedule),
            ),
        }

    @property
    def disciplines(self) -> Tuple[str, ...]:
        """Scored disciplines in competition order."""
        return tuple(d for d in DISCIPLINE_ORDER if d in self._calculators)

    def calculate(
        self, discipline: str, performance: PerformanceInput
    ) -> CalculatedScore:
        """Score one performance without clamping.

        Raises:
            UnknownDisciplineException: If no calculator handles ``discipline``
            ScoringException: If ``performance`` is the wrong input type
        """
        try:
            input_type, calculator = self._calculators[discipline]
        except KeyError:
            raise UnknownDisciplineException(f"Unknown discipline: {discipline}")

        if not isinstance(performance, input_type):
            raise ScoringException(
                f"{DISCIPLINE_NAMES[discipline]} expects {input_type.__name__}, "
                f"got {type(performance).__name__}"
            )

        eliminated = isinstance(performance, ObstacleInput) and is_eliminated(
            performance
        )
        return CalculatedScore.from_performance(
            discipline, calculator(performance), performance, eliminated=eliminated
        )

    def score(self, discipline: str, performance: PerformanceInput) -> CalculatedScore:
        """Score one performance as it will be recorded."""
        calculated = self.calculate(discipline, performance)
        if self.config.clamp_negative_points and calculated.points < 0:
            logger.debug(f"Clamping {discipline} points {calculated.points} to 0")
            return CalculatedScore(
                discipline=calculated.discipline,
                points=0,
                raw=calculated.raw,
                eliminated=calculated.eliminated,
            )
        return calculated

    def record(
        self,
        competition_group_id: str,
        discipline: str,
        performances: Mapping[str, PerformanceInput],
    ) -> Dict[str, CalculatedScore]:
        """Score a batch of performances and announce the change.

        Args:
            competition_group_id: Competition the scores belong to
            discipline: Discipline key shared by every performance
            performances: Athlete id -> performance

        Returns:
            Athlete id -> recorded score

        Raises:
            UnknownDisciplineException: If no calculator handles ``discipline``
            ScoringException: If a performance is the wrong input type
        """
        scores = {
            athlete_id: self.score(discipline, performance)
            for athlete_id, performance in performances.items()
        }

        logger.info(
            f"Recorded {len(scores)} {discipline} score(s) for {competition_group_id}"
        )

        if self.notifier is not None and scores:
            self.notifier.emit(
                ScoreChangeEvent.create(competition_group_id, discipline, scores)
            )
        return scores
