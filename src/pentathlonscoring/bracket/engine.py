"""Direct elimination bracket engine.

Brackets follow the standard seeded draw: the tableau is the next power of
two, seeds are placed by recursive binary split so that seed 1 and seed 2 can
only meet in the final, and the top seeds receive byes when the field does
not fill the tableau.

The engine mutates the bracket it is given and performs no locking. Callers
persisting brackets must treat read, advance and write as one unit per group.
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

from datetime import datetime, timezone
from typing import Dict, List, Sequence, Tuple

from pentathlonscoring.bracket.models import (
    BracketStats,
    DEBracket,
    DEBracketSeed,
    DEMatch,
    DEMatchResult,
)
from pentathlonscoring.exceptions import (
    BracketIncompleteException,
    InsufficientCompetitorsException,
    InvalidResultException,
    InvalidSeedException,
    MatchNotFoundException,
    MatchNotReadyException,
    TiedResultException,
)
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)

MIN_TABLEAU_SIZE = 2


# ========== Draw ==========


def get_tableau_size(num_competitors: int) -> int:
    """Smallest power of two holding ``num_competitors`` (at least 2).

    e.g. 18 -> 32, 16 -> 16, 5 -> 8, 2 -> 2
    """
    size = MIN_TABLEAU_SIZE
    while size < num_competitors:
        size *= 2
    return size


def generate_seed_positions(tableau_size: int) -> List[int]:
    """Seed numbers in draw order, read pairwise as first round bouts.

    Each seed of the half-size draw is followed by its complement, so a
    tableau of 8 gives ``[1, 8, 4, 5, 2, 7, 3, 6]``: 1 v 8, 4 v 5, 2 v 7,
    3 v 6.
    """
    if tableau_size <= MIN_TABLEAU_SIZE:
        return [1, 2]
    positions = []
    for seed in generate_seed_positions(tableau_size // 2):
        positions.append(seed)
        positions.append(tableau_size + 1 - seed)
    return positions


def _match_id(round_number: int, position: int) -> str:
    return f"R{round_number}-M{position}"


def _validate_seeds(seeds: Sequence[DEBracketSeed]) -> None:
    if len(seeds) < MIN_TABLEAU_SIZE:
        raise InsufficientCompetitorsException(
            f"A bracket needs at least {MIN_TABLEAU_SIZE} competitors, "
            f"got {len(seeds)}"
        )
    seed_numbers = sorted(entry.seed for entry in seeds)
    if seed_numbers != list(range(1, len(seeds) + 1)):
        raise InvalidSeedException(
            f"Seeds must be exactly 1..{len(seeds)}, got {seed_numbers}"
        )
    athlete_ids = {entry.athlete_id for entry in seeds}
    if len(athlete_ids) != len(seeds):
        raise InvalidSeedException("An athlete may hold only one seed")


def generate_de_bracket(event_id: str, seeds: Sequence[DEBracketSeed]) -> DEBracket:
    """Build a fresh bracket from ranked seeds.

    Byes are decided immediately (no scores) and their winners placed in
    the second round.

    Args:
        event_id: Direct elimination event the bracket belongs to
        seeds: Ranked athletes, seed 1 best

    Returns:
        The generated bracket

    Raises:
        InsufficientCompetitorsException: If fewer than two seeds are given
        InvalidSeedException: If seed numbers are not exactly ``1..n``
    """
    _validate_seeds(seeds)

    num_competitors = len(seeds)
    tableau_size = get_tableau_size(num_competitors)
    positions = generate_seed_positions(tableau_size)
    by_seed: Dict[int, DEBracketSeed] = {entry.seed: entry for entry in seeds}

    first_round = []
    for position in range(tableau_size // 2):
        match = DEMatch(
            match_id=_match_id(1, position),
            round_number=1,
            match_position=position,
        )
        for slot, seed in enumerate(positions[position * 2 : position * 2 + 2], 1):
            entry = by_seed.get(seed)
            if entry is not None:
                match.set_slot(slot, entry.athlete_id, entry.seed, entry.athlete_name)

        if not match.has_both_athletes:
            match.is_bye = True
            if match.athlete1_id is not None:
                match.winner_id = match.athlete1_id
                match.winner_seed = match.athlete1_seed
            else:
                match.winner_id = match.athlete2_id
                match.winner_seed = match.athlete2_seed
        first_round.append(match)

    rounds = [first_round]
    while len(rounds[-1]) > 1:
        previous = rounds[-1]
        round_number = len(rounds) + 1
        rounds.append(
            [
                DEMatch(
                    match_id=_match_id(round_number, position),
                    round_number=round_number,
                    match_position=position,
                    feeder_match1_id=previous[position * 2].match_id,
                    feeder_match2_id=previous[position * 2 + 1].match_id,
                )
                for position in range(len(previous) // 2)
            ]
        )

    bracket = DEBracket(
        event_id=event_id,
        tableau_size=tableau_size,
        num_competitors=num_competitors,
        rounds=rounds,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )

    for match in first_round:
        if match.is_bye:
            _propagate(bracket, 0, match)

    logger.info(
        f"Generated bracket for {event_id}: {num_competitors} competitors, "
        f"tableau of {tableau_size}, {tableau_size - num_competitors} bye(s)"
    )
    return bracket


# ========== Results ==========


def find_match(bracket: DEBracket, match_id: str) -> Tuple[int, DEMatch]:
    """Locate a match by id.

    Returns:
        ``(round_index, match)``

    Raises:
        MatchNotFoundException: If no match has ``match_id``
    """
    for round_index, match in bracket.iter_matches():
        if match.match_id == match_id:
            return round_index, match
    raise MatchNotFoundException(f"Match not found: {match_id}")


def _next_slot(bracket: DEBracket, round_index: int, match: DEMatch):
    """The match and slot the winner of ``match`` moves into, or None."""
    if round_index + 1 >= bracket.total_rounds:
        return None
    next_match = bracket.rounds[round_index + 1][match.match_position // 2]
    slot = 1 if match.match_position % 2 == 0 else 2
    return next_match, slot


def _propagate(bracket: DEBracket, round_index: int, match: DEMatch) -> None:
    target = _next_slot(bracket, round_index, match)
    if target is None:
        return
    next_match, slot = target
    next_match.set_slot(slot, match.winner_id, match.winner_seed, match.winner_name)


def _clear_downstream(bracket: DEBracket, round_index: int, match: DEMatch) -> None:
    """Empty the slot fed by ``match`` and undo every result built on it."""
    target = _next_slot(bracket, round_index, match)
    if target is None:
        return
    next_match, slot = target
    next_match.set_slot(slot, None, None, None)
    if next_match.is_decided:
        logger.debug(f"Clearing result of {next_match.match_id}")
        next_match.clear_result()
        _clear_downstream(bracket, round_index + 1, next_match)


def advance_winner(
    bracket: DEBracket, result: DEMatchResult, cascade: bool = True
) -> DEBracket:
    """Record a bout result and move the winner on.

    Resubmitting a decided bout overwrites it. When the winner changes and
    ``cascade`` is set, later results that depended on the old winner are
    cleared; otherwise they are left as they were.

    Args:
        bracket: Bracket to update in place
        result: Submitted result
        cascade: Clear dependent results when the winner changes

    Returns:
        ``bracket``, with placements set if the final is now decided and
        None otherwise

    Raises:
        MatchNotFoundException: If the match id is unknown
        MatchNotReadyException: If the match is a bye or a slot is empty
        InvalidResultException: If the winner is not in the match
        TiedResultException: If both scores are equal
    """
    round_index, match = find_match(bracket, result.match_id)

    if match.is_bye:
        raise MatchNotReadyException(f"{match.match_id} is a bye")
    if not match.has_both_athletes:
        raise MatchNotReadyException(f"{match.match_id} is waiting for an athlete")
    if result.winner_id not in (match.athlete1_id, match.athlete2_id):
        raise InvalidResultException(
            f"{result.winner_id} is not fencing in {match.match_id}"
        )
    if result.score1 == result.score2:
        raise TiedResultException(
            f"{match.match_id} cannot end tied at {result.score1}-{result.score2}"
        )

    winner_changed = match.is_decided and match.winner_id != result.winner_id
    if winner_changed:
        logger.info(
            f"Winner of {match.match_id} changed from {match.winner_id} "
            f"to {result.winner_id}"
        )
        if cascade:
            _clear_downstream(bracket, round_index, match)

    match.winner_id = result.winner_id
    match.winner_seed = (
        match.athlete1_seed
        if result.winner_id == match.athlete1_id
        else match.athlete2_seed
    )
    match.score1 = result.score1
    match.score2 = result.score2
    _propagate(bracket, round_index, match)

    if is_bracket_complete(bracket):
        bracket.placements = calculate_final_placements(bracket)
        logger.info(f"Bracket for {bracket.event_id} complete")
    else:
        bracket.placements = None
    return bracket


# ========== Placements ==========


def is_bracket_complete(bracket: DEBracket) -> bool:
    """True once the final has a winner."""
    final = bracket.final
    return final is not None and final.is_decided


def calculate_final_placements(bracket: DEBracket) -> Dict[str, int]:
    """Final placement of every athlete in a finished bracket.

    The champion is 1st and the beaten finalist 2nd. Losers of round ``r``
    (0-based, of ``R`` rounds) share the band starting at
    ``2 ** (R - r - 1) + 1``, the better seed placed higher. Byes produce no
    loser.

    Raises:
        BracketIncompleteException: If the final is undecided
    """
    if not is_bracket_complete(bracket):
        raise BracketIncompleteException(
            f"Bracket for {bracket.event_id} has no champion yet"
        )

    total_rounds = bracket.total_rounds
    final = bracket.final
    placements = {final.winner_id: 1}
    if final.loser_id is not None:
        placements[final.loser_id] = 2

    for round_index in range(total_rounds - 2, -1, -1):
        losers = sorted(
            (match.loser_seed, match.loser_id)
            for match in bracket.rounds[round_index]
            if match.loser_id is not None
        )
        start = 2 ** (total_rounds - round_index - 1) + 1
        for offset, (_, athlete_id) in enumerate(losers):
            placements[athlete_id] = start + offset
    return placements


# ========== Reporting ==========


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Display name of a 1-based round: Final, Semifinal, Quarterfinal,
    then "Round of N"."""
    rounds_from_end = total_rounds - round_number
    if rounds_from_end == 0:
        return "Final"
    if rounds_from_end == 1:
        return "Semifinal"
    if rounds_from_end == 2:
        return "Quarterfinal"
    return f"Round of {2 ** (rounds_from_end + 1)}"


def get_bracket_stats(bracket: DEBracket) -> BracketStats:
    """Progress summary: bouts in play, bouts decided, byes, current round.

    The current round is the earliest round with an undecided bout, or the
    last round once the bracket is complete.
    """
    total = completed = byes = 0
    current_round = None
    for _, match in bracket.iter_matches():
        if match.is_bye:
            byes += 1
            total += 1
            completed += 1
            continue
        if match.has_both_athletes:
            total += 1
            if match.is_decided:
                completed += 1
        if not match.is_decided and current_round is None:
            current_round = match.round_number

    return BracketStats(
        total_matches=total,
        completed_matches=completed,
        bye_count=byes,
        current_round=current_round or bracket.total_rounds,
        is_complete=is_bracket_complete(bracket),
    )


def get_all_bracket_athletes(bracket: DEBracket) -> List[str]:
    """Every athlete id appearing in the bracket, in order of first appearance."""
    athletes: Dict[str, None] = {}
    for _, match in bracket.iter_matches():
        for athlete_id in (match.athlete1_id, match.athlete2_id):
            if athlete_id is not None:
                athletes.setdefault(athlete_id)
    return list(athletes)
