import pytest

from pentathlonscoring.bracket import (
    DEBracketSeed,
    DEMatchResult,
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
from pentathlonscoring.exceptions import (
    BracketIncompleteException,
    InsufficientCompetitorsException,
    InvalidResultException,
    InvalidSeedException,
    MatchNotFoundException,
    MatchNotReadyException,
    TiedResultException,
)


def _seeds(n):
    return [DEBracketSeed(f"a{i}", i, f"Athlete {i}") for i in range(1, n + 1)]


def _better_seed(match):
    if match.athlete1_seed < match.athlete2_seed:
        return match.athlete1_id
    return match.athlete2_id


def _result(match, winner_id):
    if winner_id == match.athlete1_id:
        return DEMatchResult(match.match_id, winner_id, 15, 10)
    return DEMatchResult(match.match_id, winner_id, 10, 15)


def _play_out(bracket, pick=_better_seed):
    for matches in bracket.rounds:
        for match in matches:
            if match.is_bye or match.is_decided:
                continue
            advance_winner(bracket, _result(match, pick(match)))
    return bracket


@pytest.mark.parametrize(
    "competitors, size",
    [(1, 2), (2, 2), (3, 4), (5, 8), (9, 16), (16, 16), (18, 32)],
)
def test_tableau_size(competitors, size):
    assert get_tableau_size(competitors) == size


def test_seed_positions():
    assert generate_seed_positions(2) == [1, 2]
    assert generate_seed_positions(4) == [1, 4, 2, 3]
    assert generate_seed_positions(8) == [1, 8, 4, 5, 2, 7, 3, 6]


def test_seed_positions_keep_top_seeds_apart():
    positions = generate_seed_positions(16)
    assert sorted(positions) == list(range(1, 17))
    assert positions.index(1) < 8 <= positions.index(2)
    # seed 4 shares the top half with seed 1, seed 3 the bottom with seed 2
    assert positions.index(4) < 8 <= positions.index(3)
    assert positions.index(1) // 4 != positions.index(4) // 4
    assert positions.index(2) // 4 != positions.index(3) // 4


def test_generate_with_byes():
    bracket = generate_de_bracket("event-1", _seeds(5))

    assert bracket.event_id == "event-1"
    assert bracket.tableau_size == 8
    assert bracket.num_competitors == 5
    assert [len(matches) for matches in bracket.rounds] == [4, 2, 1]
    assert bracket.placements is None
    assert bracket.generated_at

    first_round = bracket.rounds[0]
    assert [m.match_id for m in first_round] == ["R1-M0", "R1-M1", "R1-M2", "R1-M3"]
    assert [m.is_bye for m in first_round] == [True, False, True, True]
    assert (first_round[1].athlete1_seed, first_round[1].athlete2_seed) == (4, 5)
    for match in (first_round[0], first_round[2], first_round[3]):
        assert match.is_decided
        assert match.score1 is None and match.score2 is None

    semi_top, semi_bottom = bracket.rounds[1]
    assert semi_top.feeder_match1_id == "R1-M0"
    assert semi_top.feeder_match2_id == "R1-M1"
    assert (semi_top.athlete1_id, semi_top.athlete2_id) == ("a1", None)
    assert (semi_bottom.athlete1_id, semi_bottom.athlete2_id) == ("a2", "a3")
    assert semi_bottom.athlete2_name == "Athlete 3"


@pytest.mark.parametrize("competitors", range(2, 34))
def test_byes_go_to_top_seeds_in_first_round_only(competitors):
    bracket = generate_de_bracket("e", _seeds(competitors))
    byes = bracket.tableau_size - competitors

    assert bracket.tableau_size == get_tableau_size(competitors)
    assert bracket.tableau_size // 2 < competitors <= bracket.tableau_size
    assert sum(match.is_bye for _, match in bracket.iter_matches()) == byes
    assert not any(match.is_bye for matches in bracket.rounds[1:] for match in matches)

    bye_winners = sorted(m.winner_seed for m in bracket.rounds[0] if m.is_bye)
    assert bye_winners == list(range(1, byes + 1))
    for match in bracket.rounds[0]:
        if match.is_bye:
            assert match.athlete1_id is None or match.athlete2_id is None
        else:
            assert match.has_both_athletes
            assert not match.is_decided


def test_generate_rejects_bad_seeds():
    with pytest.raises(InsufficientCompetitorsException):
        generate_de_bracket("e", _seeds(1))
    with pytest.raises(InvalidSeedException):
        generate_de_bracket("e", [])
    with pytest.raises(InvalidSeedException):
        generate_de_bracket(
            "e", [DEBracketSeed("a1", 1, "A"), DEBracketSeed("a3", 3, "C")]
        )
    with pytest.raises(InvalidSeedException):
        generate_de_bracket(
            "e", [DEBracketSeed("a1", 1, "A"), DEBracketSeed("a1", 2, "A")]
        )


def test_advance_winner_fills_next_slot():
    bracket = generate_de_bracket("e", _seeds(5))

    returned = advance_winner(bracket, DEMatchResult("R1-M1", "a4", 15, 10))

    assert returned is bracket
    _, match = find_match(bracket, "R1-M1")
    assert (match.winner_id, match.winner_seed) == ("a4", 4)
    assert (match.score1, match.score2) == (15, 10)
    semi = bracket.rounds[1][0]
    assert (semi.athlete2_id, semi.athlete2_seed, semi.athlete2_name) == (
        "a4",
        4,
        "Athlete 4",
    )
    assert bracket.placements is None


def test_advance_winner_rejections():
    bracket = generate_de_bracket("e", _seeds(5))

    with pytest.raises(MatchNotFoundException):
        advance_winner(bracket, DEMatchResult("R9-M0", "a1", 15, 3))
    with pytest.raises(MatchNotReadyException):
        advance_winner(bracket, DEMatchResult("R1-M0", "a1", 15, 3))
    with pytest.raises(MatchNotReadyException):
        advance_winner(bracket, DEMatchResult("R2-M0", "a1", 15, 3))
    with pytest.raises(InvalidResultException):
        advance_winner(bracket, DEMatchResult("R1-M1", "a1", 15, 3))
    with pytest.raises(TiedResultException):
        advance_winner(bracket, DEMatchResult("R1-M1", "a4", 12, 12))

    _, match = find_match(bracket, "R1-M1")
    assert not match.is_decided


def test_tied_result_is_an_invalid_result():
    assert issubclass(TiedResultException, InvalidResultException)


def test_favourites_finish_in_seed_order():
    bracket = _play_out(generate_de_bracket("e", _seeds(8)))

    assert is_bracket_complete(bracket)
    assert bracket.placements == {f"a{i}": i for i in range(1, 9)}


def test_placements_with_upset():
    def seed_eight_beats_seed_one(match):
        if {match.athlete1_seed, match.athlete2_seed} == {1, 8}:
            return "a8"
        return _better_seed(match)

    bracket = _play_out(generate_de_bracket("e", _seeds(8)), seed_eight_beats_seed_one)

    assert bracket.placements == {
        "a2": 1,
        "a4": 2,
        "a3": 3,
        "a8": 4,
        "a1": 5,
        "a5": 6,
        "a6": 7,
        "a7": 8,
    }
    assert calculate_final_placements(bracket) == bracket.placements


def test_byes_produce_no_placement_band_entries():
    bracket = _play_out(generate_de_bracket("e", _seeds(5)))

    assert bracket.placements == {"a1": 1, "a2": 2, "a3": 3, "a4": 4, "a5": 5}


def test_two_competitor_bracket():
    bracket = generate_de_bracket("e", _seeds(2))
    assert bracket.total_rounds == 1

    advance_winner(bracket, DEMatchResult("R1-M0", "a2", 14, 15))

    assert bracket.placements == {"a2": 1, "a1": 2}


def test_placements_require_a_champion():
    bracket = generate_de_bracket("e", _seeds(4))
    with pytest.raises(BracketIncompleteException):
        calculate_final_placements(bracket)


def test_changed_winner_clears_dependent_results():
    bracket = _play_out(generate_de_bracket("e", _seeds(4)))
    assert bracket.placements is not None

    advance_winner(bracket, DEMatchResult("R1-M0", "a4", 8, 15))

    final = bracket.final
    assert (final.athlete1_id, final.athlete2_id) == ("a4", "a2")
    assert final.winner_id is None
    assert final.score1 is None
    assert not is_bracket_complete(bracket)
    assert bracket.placements is None


def test_changed_winner_without_cascade_keeps_later_results():
    bracket = _play_out(generate_de_bracket("e", _seeds(4)))

    advance_winner(bracket, DEMatchResult("R1-M0", "a4", 8, 15), cascade=False)

    final = bracket.final
    assert final.athlete1_id == "a4"
    assert final.winner_id == "a1"


def test_cascade_reaches_every_later_round():
    bracket = _play_out(generate_de_bracket("e", _seeds(8)))

    advance_winner(bracket, DEMatchResult("R1-M0", "a8", 9, 15))

    semi = bracket.rounds[1][0]
    assert semi.athlete1_id == "a8"
    assert semi.winner_id is None
    final = bracket.final
    assert final.athlete1_id is None
    assert final.athlete2_id == "a2"
    assert final.winner_id is None


def test_resubmitting_same_winner_updates_scores_only():
    bracket = _play_out(generate_de_bracket("e", _seeds(4)))

    advance_winner(bracket, DEMatchResult("R1-M0", "a1", 15, 14))

    _, match = find_match(bracket, "R1-M0")
    assert (match.score1, match.score2) == (15, 14)
    assert bracket.final.winner_id == "a1"
    assert bracket.placements == {"a1": 1, "a2": 2, "a3": 3, "a4": 4}


def test_round_names():
    assert get_round_name(3, 3) == "Final"
    assert get_round_name(2, 3) == "Semifinal"
    assert get_round_name(1, 3) == "Quarterfinal"
    assert get_round_name(2, 5) == "Round of 16"
    assert get_round_name(1, 5) == "Round of 32"


def test_bracket_stats():
    bracket = generate_de_bracket("e", _seeds(5))

    stats = get_bracket_stats(bracket)
    assert stats.total_matches == 5
    assert stats.completed_matches == 3
    assert stats.bye_count == 3
    assert stats.current_round == 1
    assert not stats.is_complete

    advance_winner(bracket, DEMatchResult("R1-M1", "a5", 11, 15))
    assert get_bracket_stats(bracket).current_round == 2

    _play_out(bracket)
    stats = get_bracket_stats(bracket)
    assert stats.is_complete
    assert stats.completed_matches == stats.total_matches == 7
    assert stats.current_round == 3


def test_all_bracket_athletes():
    bracket = generate_de_bracket("e", _seeds(5))
    assert sorted(get_all_bracket_athletes(bracket)) == ["a1", "a2", "a3", "a4", "a5"]
