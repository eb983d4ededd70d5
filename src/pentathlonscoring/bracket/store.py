"""Brackets of one direct elimination event, one per gender and age category."""

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
from typing import Dict, Iterator, Optional

from pentathlonscoring.bracket.models import BracketKey, DEBracket
from pentathlonscoring.bracket.serialization import (
    bracket_from_data,
    deserialize_bracket,
    serialize_bracket,
)
from pentathlonscoring.exceptions import (
    BracketFormatException,
    BracketNotFoundException,
)
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)


class BracketStore:
    """Mapping of :class:`BracketKey` to bracket.

    The stored form is a JSON object keyed by ``"gender:ageCategory"`` whose
    values are serialized brackets. Older configs held a single bracket at
    the top level; those are ignored and the brackets must be regenerated.
    """

    def __init__(self, brackets: Optional[Dict[BracketKey, DEBracket]] = None):
        self._brackets: Dict[BracketKey, DEBracket] = dict(brackets or {})

    def __len__(self) -> int:
        return len(self._brackets)

    def __contains__(self, key: BracketKey) -> bool:
        return key in self._brackets

    def __iter__(self) -> Iterator[BracketKey]:
        return iter(self._brackets)

    def get(self, key: BracketKey) -> Optional[DEBracket]:
        return self._brackets.get(key)

    def require(self, key: BracketKey) -> DEBracket:
        """The bracket for ``key``.

        Raises:
            BracketNotFoundException: If the group has no bracket
        """
        bracket = self._brackets.get(key)
        if bracket is None:
            raise BracketNotFoundException(f"No bracket for {key.to_string()}")
        return bracket

    def put(self, key: BracketKey, bracket: DEBracket) -> None:
        self._brackets[key] = bracket

    def remove(self, key: BracketKey) -> Optional[DEBracket]:
        """Drop and return the bracket for ``key``; other groups are untouched."""
        return self._brackets.pop(key, None)

    def to_config(self) -> Optional[str]:
        """Stored form, or None once no bracket remains."""
        if not self._brackets:
            return None
        return json.dumps(
            {
                key.to_string(): serialize_bracket(bracket)
                for key, bracket in self._brackets.items()
            }
        )

    @classmethod
    def from_config(cls, text: Optional[str]) -> "BracketStore":
        """Load the stored form.

        Unreadable configs, legacy single-bracket configs and individual
        malformed entries are treated as absent.
        """
        store = cls()
        if not text:
            return store

        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            logger.warning("Ignoring unreadable bracket config")
            return store
        if not isinstance(data, dict):
            logger.warning("Ignoring bracket config that is not an object")
            return store
        if ("event_id" in data or "eventId" in data) and "rounds" in data:
            logger.warning("Ignoring legacy single-bracket config")
            return store

        for raw_key, value in data.items():
            try:
                key = BracketKey.from_string(raw_key)
            except ValueError:
                logger.warning(f"Skipping bracket with invalid key {raw_key!r}")
                continue
            try:
                if isinstance(value, str):
                    bracket = deserialize_bracket(value)
                elif isinstance(value, dict):
                    bracket = bracket_from_data(value)
                else:
                    raise BracketFormatException(
                        f"Unexpected {type(value).__name__} entry"
                    )
            except BracketFormatException as e:
                logger.warning(f"Skipping bracket {raw_key}: {e}")
                continue
            store.put(key, bracket)
        return store
