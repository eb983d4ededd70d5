"""JSON text form of brackets, as stored in an event's configuration."""

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

import json
from typing import Any, Dict

from pentathlonscoring.bracket.engine import get_tableau_size
from pentathlonscoring.bracket.models import DEBracket
from pentathlonscoring.exceptions import BracketFormatException


def serialize_bracket(bracket: DEBracket) -> str:
    """Encode a bracket at any stage of completion as JSON text."""
    return json.dumps(bracket.to_dict())


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_structure(bracket: DEBracket) -> None:
    """Reject brackets the engine could not have produced.

    Raises:
        BracketFormatException: On the first inconsistency found
    """
    if not _is_int(bracket.num_competitors) or not _is_int(bracket.tableau_size):
        raise BracketFormatException("Bracket sizes must be integers")
    if bracket.num_competitors < 2:
        raise BracketFormatException(
            f"Bracket has {bracket.num_competitors} competitor(s), needs 2"
        )
    if bracket.tableau_size != get_tableau_size(bracket.num_competitors):
        raise BracketFormatException(
            f"Tableau of {bracket.tableau_size} does not fit "
            f"{bracket.num_competitors} competitors"
        )

    expected_rounds = bracket.tableau_size.bit_length() - 1
    if len(bracket.rounds) != expected_rounds:
        raise BracketFormatException(
            f"Expected {expected_rounds} round(s), got {len(bracket.rounds)}"
        )

    byes = 0
    for round_index, matches in enumerate(bracket.rounds):
        expected_matches = bracket.tableau_size >> (round_index + 1)
        if len(matches) != expected_matches:
            raise BracketFormatException(
                f"Round {round_index + 1} has {len(matches)} bout(s), "
                f"expected {expected_matches}"
            )
        for position, match in enumerate(matches):
            if match.round_number != round_index + 1:
                raise BracketFormatException(
                    f"{match.match_id} is stored in round {round_index + 1}"
                )
            if match.match_position != position:
                raise BracketFormatException(
                    f"{match.match_id} is stored at position {position}"
                )
            if match.is_bye:
                if round_index != 0:
                    raise BracketFormatException(
                        f"{match.match_id} is a bye after the first round"
                    )
                byes += 1

    if byes != bracket.tableau_size - bracket.num_competitors:
        raise BracketFormatException(
            f"Expected {bracket.tableau_size - bracket.num_competitors} bye(s), "
            f"got {byes}"
        )


def bracket_from_data(data: Dict[str, Any]) -> DEBracket:
    """Build a bracket from already-decoded JSON data.

    Raises:
        BracketFormatException: If fields are missing, of the wrong shape, or
            do not form a tableau the engine could have generated
    """
    try:
        bracket = DEBracket.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BracketFormatException(f"Malformed bracket data: {e}") from e
    _check_structure(bracket)
    return bracket


def deserialize_bracket(text: str) -> DEBracket:
    """Decode text produced by :func:`serialize_bracket`.

    Raises:
        BracketFormatException: If the text is not a serialized bracket
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise BracketFormatException(f"Bracket text is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise BracketFormatException("Bracket text must encode an object")
    return bracket_from_data(data)
