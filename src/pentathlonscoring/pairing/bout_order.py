"""Bout order for ranking round pools.

Every competitor in a pool fences every other competitor once. For the
common pool sizes a fixed order is used that keeps competitors from fencing
two bouts in a row; other sizes fall back to plain enumeration.
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

from itertools import combinations
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from pentathlonscoring.type_hints import BoutOrder, BoutPair

BOUT_ORDER_TABLES: Mapping[int, Tuple[BoutPair, ...]] = MappingProxyType(
    {
        3: ((1, 2), (2, 3), (1, 3)),
        4: ((1, 4), (2, 3), (1, 3), (2, 4), (3, 4), (1, 2)),
        5: (
            (1, 2), (3, 4), (5, 1), (2, 3), (5, 4),
            (1, 3), (2, 5), (4, 1), (3, 5), (4, 2),
        ),  # fmt: skip
        6: (
            (1, 2), (4, 5), (2, 3), (5, 6), (3, 1),
            (6, 4), (2, 5), (1, 4), (5, 3), (4, 2),
            (6, 1), (3, 4), (2, 6), (5, 1), (6, 3),
        ),  # fmt: skip
        7: (
            (1, 4), (2, 5), (3, 6), (7, 1), (5, 4),
            (2, 3), (6, 7), (5, 1), (4, 3), (6, 2),
            (5, 7), (3, 1), (4, 6), (7, 2), (3, 5),
            (1, 6), (2, 4), (7, 3), (6, 5), (1, 2),
            (4, 7),
        ),  # fmt: skip
    }
)

SUPPORTED_POOL_SIZES = tuple(sorted(BOUT_ORDER_TABLES))


def enumerate_all_pairs(n: int) -> BoutOrder:
    """Every pair of ``1..n`` in ascending order: (1, 2), (1, 3), ... (n-1, n)."""
    return list(combinations(range(1, n + 1), 2))


def generate_bout_order(n: int) -> BoutOrder:
    """Bout order for a pool of ``n`` competitors.

    Args:
        n: Pool size

    Returns:
        ``n * (n - 1) / 2`` bouts of 1-indexed competitor slots covering
        every pair exactly once; empty for fewer than two competitors
    """
    table = BOUT_ORDER_TABLES.get(n)
    if table is not None:
        return list(table)
    return enumerate_all_pairs(n)


def is_complete_round_robin(order: Iterable[BoutPair], n: int) -> bool:
    """True when ``order`` holds every pair of ``1..n`` exactly once."""
    seen = set()
    for a, b in order:
        if a == b or not (1 <= a <= n and 1 <= b <= n):
            return False
        pair = frozenset((a, b))
        if pair in seen:
            return False
        seen.add(pair)
    return len(seen) == n * (n - 1) // 2
