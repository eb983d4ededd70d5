import json

import pytest

from pentathlonscoring.bracket import (
    BracketKey,
    BracketManager,
    BracketStore,
    DEMatchResult,
    RankingEntry,
)
from pentathlonscoring.config import ScoringConfig
from pentathlonscoring.events import ScoreChangeNotifier
from pentathlonscoring.exceptions import (
    BracketIncompleteException,
    BracketNotFoundException,
    InsufficientCompetitorsException,
)

MEN = BracketKey("M", "Senior")
WOMEN = BracketKey("F", "Senior")


def _ranking():
    return [
        RankingEntry("m1", "Man One", "M", "Senior", 278, 20),
        RankingEntry("m2", "Man Two", "M", "Senior", 250, 16),
        RankingEntry("m3", "Man Three", "M", "Senior", 250, 17),
        RankingEntry("m4", "Man Four", "M", "Senior", 201, 9),
        RankingEntry("w1", "Woman One", "F", "Senior", 264, 18),
        RankingEntry("w2", "Woman Two", "F", "Senior", 236, 14),
        RankingEntry("j1", "Junior One", "M", "Junior", 250, 16),
    ]


def _manager(config=None):
    notifier = ScoreChangeNotifier()
    events = []
    notifier.subscribe(events.append)
    manager = BracketManager("comp-1", "de-event", notifier=notifier, config=config)
    return manager, events


def _play_final_rounds(manager, key):
    bracket = manager.store.require(key)
    for matches in bracket.rounds:
        for match in matches:
            if match.is_bye or match.is_decided:
                continue
            if match.athlete1_seed < match.athlete2_seed:
                result = DEMatchResult(match.match_id, match.athlete1_id, 15, 12)
            else:
                result = DEMatchResult(match.match_id, match.athlete2_id, 12, 15)
            manager.record_result(key, result)
    return bracket


def test_seeding_orders_by_points_then_victories():
    manager, _ = _manager()

    seeds = manager.seed_from_ranking(_ranking(), MEN)

    assert [(s.athlete_id, s.seed) for s in seeds] == [
        ("m1", 1),
        ("m3", 2),
        ("m2", 3),
        ("m4", 4),
    ]
    assert seeds[0].athlete_name == "Man One"


def test_seeding_needs_enough_athletes():
    manager, _ = _manager(ScoringConfig(min_bracket_competitors=3))

    with pytest.raises(InsufficientCompetitorsException):
        manager.seed_from_ranking(_ranking(), WOMEN)
    with pytest.raises(InsufficientCompetitorsException):
        manager.seed_from_ranking(_ranking(), BracketKey("F", "U17"))


def test_generate_stores_bracket_and_announces_seeds():
    manager, events = _manager()

    bracket = manager.generate(_ranking(), MEN)

    assert bracket.event_id == "de-event"
    assert manager.store.get(MEN) is bracket
    assert len(events) == 1
    assert events[0].competition_group_id == "comp-1"
    assert events[0].discipline == "fencing_de"
    assert events[0].athlete_ids == frozenset({"m1", "m2", "m3", "m4"})


def test_can_generate():
    manager, _ = _manager()
    assert manager.can_generate(_ranking(), MEN)
    assert not manager.can_generate(_ranking(), BracketKey("M", "Junior"))

    manager.generate(_ranking(), MEN)
    assert not manager.can_generate(_ranking(), MEN)


def test_record_result_announces_bout_athletes():
    manager, events = _manager()
    manager.generate(_ranking(), MEN)

    bracket = manager.record_result(MEN, DEMatchResult("R1-M0", "m1", 15, 4))

    assert bracket.rounds[1][0].athlete1_id == "m1"
    assert events[-1].athlete_ids == frozenset({"m1", "m4"})


def test_record_result_for_missing_group():
    manager, _ = _manager()
    with pytest.raises(BracketNotFoundException):
        manager.record_result(WOMEN, DEMatchResult("R1-M0", "w1", 15, 4))


def test_cascade_follows_config():
    manager, _ = _manager(ScoringConfig(cascade_invalidation=False))
    manager.generate(_ranking(), MEN)
    _play_final_rounds(manager, MEN)

    bracket = manager.record_result(MEN, DEMatchResult("R1-M0", "m4", 3, 15))

    assert bracket.final.athlete1_id == "m4"
    assert bracket.final.winner_id == "m1"


def test_placement_scores_after_final():
    manager, _ = _manager()
    manager.generate(_ranking(), MEN)

    with pytest.raises(BracketIncompleteException):
        manager.placement_scores(MEN)

    _play_final_rounds(manager, MEN)
    scores = manager.placement_scores(MEN)

    assert {athlete: score.points for athlete, score in scores.items()} == {
        "m1": 250,
        "m3": 244,
        "m2": 238,
        "m4": 236,
    }
    assert scores["m2"].discipline == "fencing_de"
    assert scores["m2"].raw == {"placement": 3}


def test_reset_drops_only_one_group():
    manager, events = _manager()
    manager.generate(_ranking(), MEN)
    manager.generate(_ranking(), WOMEN)

    removed = manager.reset(MEN)

    assert sorted(removed) == ["m1", "m2", "m3", "m4"]
    assert MEN not in manager.store
    assert WOMEN in manager.store
    assert events[-1].athlete_ids == frozenset(removed)
    assert manager.reset(MEN) == []


def test_manager_state_survives_store_round_trip():
    manager, _ = _manager()
    manager.generate(_ranking(), MEN)
    manager.record_result(MEN, DEMatchResult("R1-M1", "m2", 13, 15))

    reloaded = BracketManager(
        "comp-1",
        "de-event",
        store=BracketStore.from_config(manager.store.to_config()),
    )

    assert reloaded.store.require(MEN) == manager.store.require(MEN)


def test_malformed_stored_bracket_can_be_regenerated():
    manager, _ = _manager()
    manager.generate(_ranking(), MEN)
    data = json.loads(manager.store.to_config())
    stored = json.loads(data["M:Senior"])
    stored["rounds"][0].pop()
    data["M:Senior"] = json.dumps(stored)

    reloaded = BracketManager(
        "comp-1", "de-event", store=BracketStore.from_config(json.dumps(data))
    )

    assert reloaded.can_generate(_ranking(), MEN)
    with pytest.raises(BracketNotFoundException):
        reloaded.record_result(MEN, DEMatchResult("R1-M1", "m2", 13, 15))
