"""Fencing direct elimination brackets."""

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

from pentathlonscoring.bracket.engine import (
    advance_winner,
    calculate_final_placements,
    find_match,
    generate_de_bracket,
    generate_seed_positions,
    get_all_bracket_athletes,
    get_bracket_stats,
    get_round_name,
    get_tableau_size,
    is_bracket_complete,
)
from pentathlonscoring.bracket.manager import BracketManager
from pentathlonscoring.bracket.models import (
    BracketKey,
    BracketStats,
    DEBracket,
    DEBracketSeed,
    DEMatch,
    DEMatchResult,
    RankingEntry,
)
from pentathlonscoring.bracket.serialization import (
    deserialize_bracket,
    serialize_bracket,
)
from pentathlonscoring.bracket.store import BracketStore

__all__ = [
    "BracketKey",
    "BracketManager",
    "BracketStats",
    "BracketStore",
    "DEBracket",
    "DEBracketSeed",
    "DEMatch",
    "DEMatchResult",
    "RankingEntry",
    "advance_winner",
    "calculate_final_placements",
    "deserialize_bracket",
    "find_match",
    "generate_de_bracket",
    "generate_seed_positions",
    "get_all_bracket_athletes",
    "get_bracket_stats",
    "get_round_name",
    "get_tableau_size",
    "is_bracket_complete",
    "serialize_bracket",
]
