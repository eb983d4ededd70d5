"""Example script walking through a small pentathlon competition.

This script shows how the scoring, bout order and bracket pieces fit
together programmatically.
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

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pentathlonscoring.bracket import (
    BracketKey,
    BracketManager,
    DEMatchResult,
    RankingEntry,
    get_bracket_stats,
    get_round_name,
)
from pentathlonscoring.events import ScoreChangeNotifier
from pentathlonscoring.pairing import generate_bout_order
from pentathlonscoring.scoring import (
    FencingRankingInput,
    HandicapAthlete,
    LaserRunInput,
    ObstacleInput,
    ScoreRecorder,
    SwimmingInput,
    calculate_handicap_starts,
)
from pentathlonscoring.utils.timing import parse_swimming_time

ATHLETES = {
    "a1": "Ana Duarte",
    "a2": "Bea Kowalska",
    "a3": "Chloe Martin",
    "a4": "Dana Novak",
    "a5": "Eva Lindqvist",
}


def example_ranking_round(recorder):
    """Example: pool bout order and ranking round points."""

    print("\n" + "=" * 70)
    print("EXAMPLE 1: Ranking Round")
    print("=" * 70 + "\n")

    order = generate_bout_order(len(ATHLETES))
    print("Bout order: " + ", ".join(f"{a}-{b}" for a, b in order))

    victories = {"a1": 4, "a2": 3, "a3": 2, "a4": 1, "a5": 0}
    scores = recorder.record(
        "comp-1",
        "fencing_ranking",
        {
            athlete_id: FencingRankingInput(wins, total_bouts=len(ATHLETES) - 1)
            for athlete_id, wins in victories.items()
        },
    )
    for athlete_id, score in scores.items():
        print(f"  {ATHLETES[athlete_id]:<16} {score.points:>4} MP")

    return [
        RankingEntry(
            athlete_id,
            ATHLETES[athlete_id],
            "F",
            "Senior",
            score.points,
            victories[athlete_id],
        )
        for athlete_id, score in scores.items()
    ]


def example_other_disciplines(recorder):
    """Example: obstacle, swimming and laser run scores."""

    print("\n" + "=" * 70)
    print("EXAMPLE 2: Obstacle, Swimming, Laser Run")
    print("=" * 70 + "\n")

    obstacle = recorder.record(
        "comp-1",
        "obstacle",
        {
            "a1": ObstacleInput(time_seconds=18.5),
            "a2": ObstacleInput(time_seconds=21.0, obstacle_failures={3: 1}),
            "a3": ObstacleInput(time_seconds=25.0, obstacle_failures={5: 2}),
        },
    )
    swimming = recorder.record(
        "comp-1",
        "swimming",
        {"a1": SwimmingInput(parse_swimming_time("1:08.40"))},
    )
    laser_run = recorder.record(
        "comp-1", "laser_run", {"a1": LaserRunInput(finish_time_seconds=790.4)}
    )

    for name, scores in (
        ("Obstacle", obstacle),
        ("Swimming", swimming),
        ("Laser run", laser_run),
    ):
        for athlete_id, score in scores.items():
            flag = " (eliminated)" if score.eliminated else ""
            print(f"  {name:<10} {ATHLETES[athlete_id]:<16} {score.points:>4}{flag}")


def example_handicap_start():
    """Example: laser run handicap start list."""

    print("\n" + "=" * 70)
    print("EXAMPLE 3: Handicap Start")
    print("=" * 70 + "\n")

    standings = [
        HandicapAthlete("a1", ATHLETES["a1"], 1120),
        HandicapAthlete("a2", ATHLETES["a2"], 1101),
        HandicapAthlete("a3", ATHLETES["a3"], 1060),
        HandicapAthlete("a4", ATHLETES["a4"], 1012),
    ]
    for start in calculate_handicap_starts(standings):
        print(
            f"  {start.shooting_station:>2}  {start.athlete_name:<16} "
            f"{start.start_time_formatted:>5}  gate {start.gate_assignment}"
        )


def example_direct_elimination(ranking, notifier):
    """Example: seeding and running a direct elimination bracket."""

    print("\n" + "=" * 70)
    print("EXAMPLE 4: Direct Elimination")
    print("=" * 70 + "\n")

    key = BracketKey("F", "Senior")
    manager = BracketManager("comp-1", "de-1", notifier=notifier)
    bracket = manager.generate(ranking, key)

    for matches in bracket.rounds:
        for match in matches:
            if match.is_bye or match.is_decided:
                continue
            if match.athlete1_seed < match.athlete2_seed:
                result = DEMatchResult(match.match_id, match.athlete1_id, 15, 11)
            else:
                result = DEMatchResult(match.match_id, match.athlete2_id, 9, 15)
            manager.record_result(key, result)
            print(
                f"  {get_round_name(match.round_number, bracket.total_rounds):<13}"
                f"{match.athlete1_name} v {match.athlete2_name}: "
                f"{result.score1}-{result.score2}"
            )

    stats = get_bracket_stats(bracket)
    print(f"\n  {stats.completed_matches}/{stats.total_matches} bouts decided")
    for athlete_id, score in sorted(
        manager.placement_scores(key).items(), key=lambda item: -item[1].points
    ):
        placement = bracket.placements[athlete_id]
        print(f"  {placement:>2}. {ATHLETES[athlete_id]:<16} {score.points} MP")


def main():
    with ScoreChangeNotifier() as notifier:
        notifier.subscribe(
            lambda event: print(
                f"    [live] {event.discipline}: {len(event.athlete_ids)} athlete(s)"
            )
        )
        recorder = ScoreRecorder(notifier=notifier)

        ranking = example_ranking_round(recorder)
        example_other_disciplines(recorder)
        example_handicap_start()
        example_direct_elimination(ranking, notifier)


if __name__ == "__main__":
    main()
