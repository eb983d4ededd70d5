"""Data models for direct elimination brackets."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from pentathlonscoring.constants import DEFAULT_AGE_CATEGORY
from pentathlonscoring.type_hints import MALE

BRACKET_KEY_SEPARATOR = ":"


class BracketKey(NamedTuple):
    """Group a bracket belongs to: one per gender and age category."""

    gender: str = MALE
    age_category: str = DEFAULT_AGE_CATEGORY

    def to_string(self) -> str:
        """Storage form, e.g. ``"M:Senior"``."""
        return f"{self.gender}{BRACKET_KEY_SEPARATOR}{self.age_category}"

    @classmethod
    def from_string(cls, value: str) -> "BracketKey":
        """Parse the storage form.

        Raises:
            ValueError: If the text is not ``gender:ageCategory``
        """
        gender, sep, age_category = value.partition(BRACKET_KEY_SEPARATOR)
        if not sep or not gender or not age_category:
            raise ValueError(f"Invalid bracket key: {value!r}")
        return cls(gender=gender, age_category=age_category)


@dataclass(frozen=True)
class DEBracketSeed:
    """A ranked athlete entering the tableau (seed 1 is best)."""

    athlete_id: str
    seed: int
    athlete_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "athlete_id": self.athlete_id,
            "seed": self.seed,
            "athlete_name": self.athlete_name,
        }


@dataclass(frozen=True)
class DEMatchResult:
    """A bout result as submitted by the referee table."""

    match_id: str
    winner_id: str
    score1: int
    score2: int


@dataclass
class DEMatch:
    """One bout of the tableau.

    Attributes
    ----------
    match_id : str
        ``"R{round_number}-M{match_position}"``.
    round_number : int
        1 for the first round.
    match_position : int
        0-based position within the round.
    athlete1_id, athlete1_seed, athlete1_name
        Upper slot, empty until filled by seeding or a feeder bout.
    athlete2_id, athlete2_seed, athlete2_name
        Lower slot.
    winner_id, winner_seed
        Set once the bout is decided.
    score1, score2 : int or None
        Touches for each slot; both None for byes.
    is_bye : bool
        First round slot without an opponent, won automatically.
    feeder_match1_id, feeder_match2_id : str or None
        Bouts whose winners fill the two slots.
    """

    match_id: str
    round_number: int
    match_position: int
    athlete1_id: Optional[str] = None
    athlete1_seed: Optional[int] = None
    athlete1_name: Optional[str] = None
    athlete2_id: Optional[str] = None
    athlete2_seed: Optional[int] = None
    athlete2_name: Optional[str] = None
    winner_id: Optional[str] = None
    winner_seed: Optional[int] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    is_bye: bool = False
    feeder_match1_id: Optional[str] = None
    feeder_match2_id: Optional[str] = None

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def has_both_athletes(self) -> bool:
        return self.athlete1_id is not None and self.athlete2_id is not None

    @property
    def winner_name(self) -> Optional[str]:
        if self.winner_id is None:
            return None
        if self.winner_id == self.athlete1_id:
            return self.athlete1_name
        return self.athlete2_name

    @property
    def loser_id(self) -> Optional[str]:
        """The beaten athlete; None for byes and undecided bouts."""
        if self.winner_id is None or self.is_bye:
            return None
        if self.winner_id == self.athlete1_id:
            return self.athlete2_id
        return self.athlete1_id

    @property
    def loser_seed(self) -> Optional[int]:
        if self.loser_id is None:
            return None
        if self.loser_id == self.athlete1_id:
            return self.athlete1_seed
        return self.athlete2_seed

    def set_slot(
        self,
        slot: int,
        athlete_id: Optional[str],
        seed: Optional[int],
        name: Optional[str],
    ) -> None:
        """Fill (or with Nones, empty) slot 1 or 2."""
        if slot == 1:
            self.athlete1_id, self.athlete1_seed, self.athlete1_name = (
                athlete_id,
                seed,
                name,
            )
        else:
            self.athlete2_id, self.athlete2_seed, self.athlete2_name = (
                athlete_id,
                seed,
                name,
            )

    def clear_result(self) -> None:
        self.winner_id = None
        self.winner_seed = None
        self.score1 = None
        self.score2 = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_id": self.match_id,
            "round_number": self.round_number,
            "match_position": self.match_position,
            "athlete1_id": self.athlete1_id,
            "athlete1_seed": self.athlete1_seed,
            "athlete1_name": self.athlete1_name,
            "athlete2_id": self.athlete2_id,
            "athlete2_seed": self.athlete2_seed,
            "athlete2_name": self.athlete2_name,
            "winner_id": self.winner_id,
            "winner_seed": self.winner_seed,
            "score1": self.score1,
            "score2": self.score2,
            "is_bye": self.is_bye,
            "feeder_match1_id": self.feeder_match1_id,
            "feeder_match2_id": self.feeder_match2_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DEMatch":
        """Deserialize match from dictionary."""
        return cls(
            match_id=data["match_id"],
            round_number=data["round_number"],
            match_position=data["match_position"],
            athlete1_id=data.get("athlete1_id"),
            athlete1_seed=data.get("athlete1_seed"),
            athlete1_name=data.get("athlete1_name"),
            athlete2_id=data.get("athlete2_id"),
            athlete2_seed=data.get("athlete2_seed"),
            athlete2_name=data.get("athlete2_name"),
            winner_id=data.get("winner_id"),
            winner_seed=data.get("winner_seed"),
            score1=data.get("score1"),
            score2=data.get("score2"),
            is_bye=data.get("is_bye", False),
            feeder_match1_id=data.get("feeder_match1_id"),
            feeder_match2_id=data.get("feeder_match2_id"),
        )


@dataclass
class DEBracket:
    """A seeded single elimination tableau.

    Attributes
    ----------
    event_id : str
        Direct elimination event the bracket belongs to.
    tableau_size : int
        Smallest power of two holding every competitor.
    num_competitors : int
        Athletes seeded into the tableau.
    rounds : list of list of DEMatch
        ``rounds[0]`` is the first round; round r has
        ``tableau_size / 2 ** (r + 1)`` bouts.
    placements : dict of str to int, or None
        Athlete id -> final placement, set only once the final is decided.
    generated_at : str
        ISO timestamp of generation.
    """

    event_id: str
    tableau_size: int
    num_competitors: int
    rounds: List[List[DEMatch]] = field(default_factory=list)
    placements: Optional[Dict[str, int]] = None
    generated_at: str = ""

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    @property
    def final(self) -> Optional[DEMatch]:
        """The single bout of the last round."""
        if not self.rounds or not self.rounds[-1]:
            return None
        return self.rounds[-1][0]

    def iter_matches(self):
        """Yield ``(round_index, match)`` in bracket order."""
        for round_index, matches in enumerate(self.rounds):
            for match in matches:
                yield round_index, match

    def to_dict(self) -> Dict[str, Any]:
        """Serialize bracket to dictionary."""
        return {
            "event_id": self.event_id,
            "tableau_size": self.tableau_size,
            "num_competitors": self.num_competitors,
            "rounds": [[m.to_dict() for m in matches] for matches in self.rounds],
            "placements": dict(self.placements)
            if self.placements is not None
            else None,
            "generated_at": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DEBracket":
        """Deserialize bracket from dictionary."""
        placements = data.get("placements")
        return cls(
            event_id=data["event_id"],
            tableau_size=data["tableau_size"],
            num_competitors=data["num_competitors"],
            rounds=[
                [DEMatch.from_dict(m) for m in matches] for matches in data["rounds"]
            ],
            placements={str(k): int(v) for k, v in placements.items()}
            if placements is not None
            else None,
            generated_at=data.get("generated_at", ""),
        )


@dataclass
class BracketStats:
    total_matches: int
    completed_matches: int
    bye_count: int
    current_round: int
    is_complete: bool


@dataclass(frozen=True)
class RankingEntry:
    """One athlete's ranking round result, the input to seeding."""

    athlete_id: str
    athlete_name: str
    gender: str
    age_category: str
    points: int
    victories: int

    @property
    def bracket_key(self) -> BracketKey:
        return BracketKey(self.gender, self.age_category)
