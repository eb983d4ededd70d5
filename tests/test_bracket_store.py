import json

import pytest

from pentathlonscoring.bracket import (
    BracketKey,
    BracketStore,
    DEBracketSeed,
    DEMatchResult,
    advance_winner,
    deserialize_bracket,
    generate_de_bracket,
    serialize_bracket,
)
from pentathlonscoring.exceptions import (
    BracketFormatException,
    BracketNotFoundException,
)


def _bracket(n=5, event_id="event-1"):
    seeds = [DEBracketSeed(f"a{i}", i, f"Athlete {i}") for i in range(1, n + 1)]
    return generate_de_bracket(event_id, seeds)


def test_round_trip_fresh_bracket():
    bracket = _bracket()
    assert deserialize_bracket(serialize_bracket(bracket)) == bracket


def test_round_trip_completed_bracket():
    bracket = _bracket(2)
    advance_winner(bracket, DEMatchResult("R1-M0", "a1", 15, 9))

    restored = deserialize_bracket(serialize_bracket(bracket))

    assert restored == bracket
    assert restored.placements == {"a1": 1, "a2": 2}


def test_round_trip_partly_played_bracket():
    bracket = _bracket(6)
    advance_winner(bracket, DEMatchResult("R1-M1", "a4", 15, 7))

    restored = deserialize_bracket(serialize_bracket(bracket))

    assert restored == bracket
    assert restored.placements is None
    assert restored.rounds[1][0].athlete2_id == "a4"


def test_round_trip_after_cascade_edit():
    bracket = _bracket(4)
    advance_winner(bracket, DEMatchResult("R1-M0", "a1", 15, 6))
    advance_winner(bracket, DEMatchResult("R1-M1", "a2", 15, 8))
    advance_winner(bracket, DEMatchResult("R2-M0", "a1", 15, 11))
    advance_winner(bracket, DEMatchResult("R1-M0", "a4", 9, 15))

    restored = deserialize_bracket(serialize_bracket(bracket))

    assert restored == bracket
    assert (restored.final.athlete1_id, restored.final.athlete2_id) == ("a4", "a2")
    assert restored.final.winner_id is None
    assert restored.placements is None


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"event_id": "e"}',
        json.dumps(
            {
                "event_id": "e",
                "tableau_size": 2,
                "num_competitors": 2,
                "rounds": [[{"round_number": 1}]],
            }
        ),
    ],
)
def test_malformed_text_rejected(text):
    with pytest.raises(BracketFormatException):
        deserialize_bracket(text)


def test_bracket_key_string_form():
    key = BracketKey("F", "U19")
    assert key.to_string() == "F:U19"
    assert BracketKey.from_string("F:U19") == key
    assert BracketKey() == BracketKey("M", "Senior")
    with pytest.raises(ValueError):
        BracketKey.from_string("MSenior")


def test_store_round_trip():
    store = BracketStore()
    store.put(BracketKey("M", "Senior"), _bracket(5))
    store.put(BracketKey("F", "Senior"), _bracket(3))

    config = store.to_config()
    assert set(json.loads(config)) == {"M:Senior", "F:Senior"}

    restored = BracketStore.from_config(config)
    assert len(restored) == 2
    assert restored.get(BracketKey("M", "Senior")) == store.get(
        BracketKey("M", "Senior")
    )
    assert restored.require(BracketKey("F", "Senior")).num_competitors == 3


def test_empty_store_has_no_config():
    assert BracketStore().to_config() is None
    assert len(BracketStore.from_config(None)) == 0
    assert len(BracketStore.from_config("")) == 0


def test_legacy_single_bracket_config_is_ignored():
    assert len(BracketStore.from_config(serialize_bracket(_bracket()))) == 0


def test_unreadable_config_is_ignored():
    assert len(BracketStore.from_config("{broken")) == 0
    assert len(BracketStore.from_config("[1, 2]")) == 0


def test_malformed_entries_are_skipped():
    config = json.dumps(
        {
            "M:Senior": serialize_bracket(_bracket()),
            "F:Senior": "{not a bracket",
            "nokey": serialize_bracket(_bracket()),
            "M:U17": 42,
        }
    )

    store = BracketStore.from_config(config)

    assert list(store) == [BracketKey("M", "Senior")]


def test_require_missing_group():
    with pytest.raises(BracketNotFoundException):
        BracketStore().require(BracketKey("F", "Masters"))


def test_remove_leaves_other_groups():
    store = BracketStore()
    store.put(BracketKey("M", "Senior"), _bracket())
    store.put(BracketKey("F", "Senior"), _bracket())

    assert store.remove(BracketKey("M", "Senior")) is not None
    assert store.remove(BracketKey("M", "Senior")) is None
    assert BracketKey("F", "Senior") in store
    assert BracketKey("M", "Senior") not in store


def _reshaped(mutate, n=4):
    data = _bracket(n).to_dict()
    mutate(data)
    return json.dumps(data)


def _set_tableau(data, size):
    data["tableau_size"] = size


def _drop_last_round(data):
    data["rounds"].pop()


def _drop_first_bout(data):
    data["rounds"][0].pop(0)


def _swap_positions(data):
    first, second = data["rounds"][0][:2]
    first["match_position"], second["match_position"] = 1, 0


def _wrong_round_number(data):
    data["rounds"][1][0]["round_number"] = 1


def _late_bye(data):
    data["rounds"][1][0]["is_bye"] = True


def _extra_bye(data):
    data["rounds"][0][0]["is_bye"] = True


@pytest.mark.parametrize(
    "mutate",
    [
        lambda data: _set_tableau(data, "x"),
        lambda data: _set_tableau(data, 3),
        lambda data: _set_tableau(data, 8),
        lambda data: data.update(num_competitors=1, tableau_size=2),
        lambda data: data.update(rounds=[]),
        _drop_last_round,
        _drop_first_bout,
        _swap_positions,
        _wrong_round_number,
        _late_bye,
        _extra_bye,
    ],
)
def test_structurally_invalid_bracket_rejected(mutate):
    with pytest.raises(BracketFormatException):
        deserialize_bracket(_reshaped(mutate))


def test_structurally_invalid_entry_counts_as_absent():
    bad = json.dumps(
        {
            "event_id": "e",
            "tableau_size": 3,
            "num_competitors": 2,
            "rounds": [
                [
                    {"match_id": "R1-M0", "round_number": 1, "match_position": 0},
                    {
                        "match_id": "R1-M3",
                        "round_number": 1,
                        "match_position": 3,
                        "athlete1_id": "a",
                        "athlete2_id": "b",
                    },
                ],
                [{"match_id": "R2-M0", "round_number": 2, "match_position": 0}],
            ],
        }
    )
    config = json.dumps({"M:Senior": bad, "F:Senior": serialize_bracket(_bracket())})

    store = BracketStore.from_config(config)

    assert BracketKey("M", "Senior") not in store
    assert BracketKey("F", "Senior") in store


def test_deeply_nested_config_is_ignored():
    assert len(BracketStore.from_config("[" * 100000)) == 0
    with pytest.raises(BracketFormatException):
        deserialize_bracket("[" * 100000)
