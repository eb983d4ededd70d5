import pytest

from pentathlonscoring.config import ScoringConfig
from pentathlonscoring.events import ScoreChangeNotifier
from pentathlonscoring.exceptions import (
    InvalidConfigurationException,
    ScoringException,
    UnknownDisciplineException,
)
from pentathlonscoring.scoring import (
    FencingRankingInput,
    ObstacleInput,
    RidingInput,
    ScoreRecorder,
    SwimmingInput,
)


def test_record_scores_batch_and_announces_it():
    notifier = ScoreChangeNotifier()
    events = []
    notifier.subscribe(events.append)
    recorder = ScoreRecorder(notifier=notifier)

    scores = recorder.record(
        "comp-1",
        "swimming",
        {"a1": SwimmingInput(7000), "a2": SwimmingInput(7100)},
    )

    assert scores["a1"].points == 250
    assert scores["a2"].points == 245
    assert scores["a2"].raw["time_hundredths"] == 7100
    assert len(events) == 1
    assert events[0].competition_group_id == "comp-1"
    assert events[0].discipline == "swimming"
    assert events[0].athlete_ids == frozenset({"a1", "a2"})


def test_empty_batch_is_not_announced():
    notifier = ScoreChangeNotifier()
    events = []
    notifier.subscribe(events.append)

    assert ScoreRecorder(notifier=notifier).record("comp-1", "obstacle", {}) == {}
    assert events == []


def test_negative_points_are_clamped_when_recorded():
    recorder = ScoreRecorder()
    performance = FencingRankingInput(victories=0, total_bouts=10)

    assert recorder.calculate("fencing_ranking", performance).points == -2
    assert recorder.score("fencing_ranking", performance).points == 0


def test_clamping_can_be_disabled():
    recorder = ScoreRecorder(ScoringConfig(clamp_negative_points=False))
    performance = FencingRankingInput(victories=0, total_bouts=10)
    assert recorder.score("fencing_ranking", performance).points == -2


def test_obstacle_elimination_is_flagged():
    score = ScoreRecorder().score(
        "obstacle", ObstacleInput(time_seconds=20.0, obstacle_failures={4: 2})
    )
    assert score.points == 0
    assert score.eliminated


def test_recorded_scores_are_read_only():
    failures = {4: 1}
    performance = ObstacleInput(time_seconds=20.0, obstacle_failures=failures)
    score = ScoreRecorder().score("obstacle", performance)
    failures[4] = 2

    assert performance.obstacle_failures == {4: 1}
    assert score.raw["obstacle_failures"] == {4: 1}
    with pytest.raises(TypeError):
        score.raw["time_seconds"] = 1.0
    with pytest.raises(TypeError):
        score.raw["obstacle_failures"][4] = 2
    assert score.to_dict()["raw"]["obstacle_failures"] == {4: 1}
    assert hash(score) == hash(ScoreRecorder().score("obstacle", performance))


def test_riding_uses_configured_schedule():
    performance = RidingInput(knockdowns=1, disobediences=0, time_over_seconds=0)
    assert ScoreRecorder().score("riding", performance).points == 293

    field = ScoreRecorder(ScoringConfig(riding_schedule="field_scoring"))
    assert field.score("riding", performance).points == 272


def test_unknown_discipline():
    with pytest.raises(UnknownDisciplineException):
        ScoreRecorder().score("fencing_pools", FencingRankingInput(1, 2))


def test_wrong_input_type():
    with pytest.raises(ScoringException):
        ScoreRecorder().score("swimming", ObstacleInput(time_seconds=15.0))


def test_invalid_config_rejected_on_construction():
    with pytest.raises(InvalidConfigurationException):
        ScoreRecorder(ScoringConfig(riding_schedule="lenient"))


def test_recorder_lists_disciplines():
    assert set(ScoreRecorder().disciplines) == {
        "fencing_ranking",
        "fencing_de",
        "obstacle",
        "swimming",
        "laser_run",
        "riding",
    }
