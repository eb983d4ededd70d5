"""Direct elimination brackets of one competition."""

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

from typing import Dict, Iterable, List, Optional

from pentathlonscoring.bracket.engine import (
    advance_winner,
    calculate_final_placements,
    find_match,
    generate_de_bracket,
    get_all_bracket_athletes,
)
from pentathlonscoring.bracket.models import (
    BracketKey,
    DEBracket,
    DEBracketSeed,
    DEMatchResult,
    RankingEntry,
)
from pentathlonscoring.bracket.store import BracketStore
from pentathlonscoring.config import ScoringConfig
from pentathlonscoring.constants import DISCIPLINE_FENCING_DE
from pentathlonscoring.events import ScoreChangeEvent, ScoreChangeNotifier
from pentathlonscoring.exceptions import InsufficientCompetitorsException
from pentathlonscoring.scoring.fencing import calculate_fencing_de
from pentathlonscoring.scoring.models import CalculatedScore, FencingDEInput
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)


class BracketManager:
    """Generates, advances and resets the brackets of a competition.

    This class is responsible for:
    - Seeding each gender and age category group from ranking round results
    - Recording bout results with the configured invalidation behaviour
    - Turning final placements into direct elimination points
    - Announcing every change on the score change notifier

    It holds no lock: callers sharing a manager between threads must
    serialize calls per group.
    """

    def __init__(
        self,
        competition_id: str,
        event_id: str,
        notifier: Optional[ScoreChangeNotifier] = None,
        store: Optional[BracketStore] = None,
        config: Optional[ScoringConfig] = None,
    ) -> None:
        """Initialize the manager.

        Args:
            competition_id: Competition announced in score change events
            event_id: Direct elimination event the brackets belong to
            notifier: Hub told about bracket changes, or None to stay silent
            store: Existing brackets; an empty store when omitted
            config: Scoring settings; defaults apply when omitted
        """
        self.competition_id = competition_id
        self.event_id = event_id
        self.notifier = notifier
        self.store = store if store is not None else BracketStore()
        self.config = config or ScoringConfig()
        self.config.validate()

    def _emit(self, athlete_ids: Iterable[str]) -> None:
        if self.notifier is None:
            return
        self.notifier.emit(
            ScoreChangeEvent.create(
                self.competition_id, DISCIPLINE_FENCING_DE, athlete_ids
            )
        )

    def seed_from_ranking(
        self, ranking: Iterable[RankingEntry], key: BracketKey
    ) -> List[DEBracketSeed]:
        """Seed one group from ranking round results.

        Athletes outside the group are ignored. The rest are ordered by points
        then victories, best first, and seeded from 1.

        Raises:
            InsufficientCompetitorsException: If the group is smaller than
                the configured bracket minimum
        """
        entries = [entry for entry in ranking if entry.bracket_key == key]
        if len(entries) < self.config.min_bracket_competitors:
            raise InsufficientCompetitorsException(
                f"Need at least {self.config.min_bracket_competitors} "
                f"{key.to_string()} athletes with ranking round scores, "
                f"got {len(entries)}"
            )

        entries.sort(key=lambda entry: (entry.points, entry.victories), reverse=True)
        return [
            DEBracketSeed(
                athlete_id=entry.athlete_id,
                seed=index,
                athlete_name=entry.athlete_name,
            )
            for index, entry in enumerate(entries, 1)
        ]

    def can_generate(self, ranking: Iterable[RankingEntry], key: BracketKey) -> bool:
        """True if the group has no bracket yet and enough ranked athletes."""
        if key in self.store:
            return False
        count = sum(1 for entry in ranking if entry.bracket_key == key)
        return count >= self.config.min_bracket_competitors

    def generate(self, ranking: Iterable[RankingEntry], key: BracketKey) -> DEBracket:
        """Build (or rebuild) the bracket of one group.

        Raises:
            InsufficientCompetitorsException: If the group is too small
        """
        seeds = self.seed_from_ranking(ranking, key)
        bracket = generate_de_bracket(self.event_id, seeds)
        if key in self.store:
            logger.warning(f"Replacing existing bracket for {key.to_string()}")
        self.store.put(key, bracket)
        self._emit(seed.athlete_id for seed in seeds)
        return bracket

    def record_result(self, key: BracketKey, result: DEMatchResult) -> DEBracket:
        """Record a bout result in the group's bracket.

        Returns:
            The updated bracket

        Raises:
            BracketNotFoundException: If the group has no bracket
            BracketException: If the result is rejected by the engine
        """
        bracket = self.store.require(key)
        advance_winner(bracket, result, cascade=self.config.cascade_invalidation)

        _, match = find_match(bracket, result.match_id)
        self._emit(
            athlete_id
            for athlete_id in (match.athlete1_id, match.athlete2_id)
            if athlete_id is not None
        )
        return bracket

    def placement_scores(self, key: BracketKey) -> Dict[str, CalculatedScore]:
        """Direct elimination points for every athlete of a finished bracket.

        Raises:
            BracketNotFoundException: If the group has no bracket
            BracketIncompleteException: If the final is undecided
        """
        bracket = self.store.require(key)
        placements = bracket.placements or calculate_final_placements(bracket)

        scores = {}
        for athlete_id, placement in placements.items():
            performance = FencingDEInput(placement=placement)
            scores[athlete_id] = CalculatedScore.from_performance(
                DISCIPLINE_FENCING_DE,
                calculate_fencing_de(performance),
                performance,
            )
        return scores

    def reset(self, key: BracketKey) -> List[str]:
        """Drop one group's bracket, leaving the other groups untouched.

        Returns:
            Athletes of the dropped bracket, whose direct elimination scores
            should be removed; empty if the group had no bracket
        """
        bracket = self.store.remove(key)
        if bracket is None:
            return []

        athlete_ids = get_all_bracket_athletes(bracket)
        logger.info(
            f"Reset bracket for {key.to_string()} ({len(athlete_ids)} athletes)"
        )
        self._emit(athlete_ids)
        return athlete_ids
