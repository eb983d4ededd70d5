import pytest

from pentathlonscoring.exceptions import UnknownDisciplineException
from pentathlonscoring.scoring import (
    CalculatedScore,
    LeaderboardAthlete,
    build_leaderboard,
)


def _athletes():
    return [
        LeaderboardAthlete("a", "Ana", "POR", "F"),
        LeaderboardAthlete("b", "Bea", "POL", "F"),
        LeaderboardAthlete("c", "Cleo", "FRA", "F"),
    ]


def test_totals_and_ranks():
    board = build_leaderboard(
        _athletes(),
        {
            "fencing_ranking": {"a": 250, "b": 230, "c": 230},
            "obstacle": {"a": 300, "b": CalculatedScore("obstacle", 320)},
            "swimming": {"c": 280},
        },
    )

    assert [(e.athlete.athlete_id, e.total, e.rank) for e in board] == [
        ("a", 550, 1),
        ("b", 550, 2),
        ("c", 510, 3),
    ]
    assert board[1].discipline_points["obstacle"] == 320
    assert board[0].discipline_points["swimming"] is None
    assert list(board[0].discipline_points) == [
        "fencing_ranking",
        "fencing_de",
        "obstacle",
        "swimming",
        "laser_run",
        "riding",
    ]


def test_athlete_without_scores_totals_zero():
    board = build_leaderboard(_athletes()[:1], {})
    assert board[0].total == 0
    assert board[0].rank == 1
    assert set(board[0].discipline_points.values()) == {None}


def test_entry_to_dict():
    entry = build_leaderboard(_athletes()[:1], {"riding": {"a": 290}})[0]
    data = entry.to_dict()
    assert data["athlete_id"] == "a"
    assert data["age_category"] == "Senior"
    assert data["discipline_points"]["riding"] == 290
    assert (data["total"], data["rank"]) == (290, 1)


def test_unknown_discipline_rejected():
    with pytest.raises(UnknownDisciplineException):
        build_leaderboard(_athletes(), {"fencing": {"a": 250}})
