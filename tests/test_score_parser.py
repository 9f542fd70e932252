"""
Tests for the score pass.

classify_score_line takes an explicit ScoreState, so single lines are tested
with injected counters; parse_scores is tested on whole boards.
"""

import pytest
from whiteboard_ingestor_api.parsers.score_parser import (
    SCORE_RULES,
    ScoreContext,
    ScoreState,
    classify_score_line,
    looks_like_movement,
    parse_scores,
)


def names(scores):
    return [s.name for s in scores]


class TestScenarios:

    def test_lone_time_is_finish_time(self):
        scores = parse_scores([["8:00"]])
        assert len(scores) == 1
        assert scores[0].kind == "time"
        assert scores[0].name == "Finish Time"
        assert scores[0].value == "8:00"
        assert scores[0].metadata.time_in_seconds == 480

    def test_weight_with_unit_column(self):
        scores = parse_scores([["315", "lbs"]])
        assert len(scores) == 1
        assert scores[0].kind == "weight"
        assert scores[0].name == "Weight"
        assert scores[0].metadata.weight == 315
        assert scores[0].metadata.unit == "lbs"

    @pytest.mark.parametrize("line,unit", [(["225", "#"], "#"), (["135", "pounds"], "pounds")])
    def test_weight_unit_spellings(self, line, unit):
        scores = parse_scores([line])
        assert len(scores) == 1
        assert scores[0].kind == "weight"
        assert scores[0].metadata.unit == unit

    def test_rounds_plus_reps(self):
        scores = parse_scores([["8", "+", "25"]])
        assert scores[0].kind == "reps"
        assert scores[0].name == "Total"
        assert scores[0].value == "8 + 25"
        assert scores[0].metadata.rounds == 8
        assert scores[0].metadata.reps_into_next_round == 25
        assert scores[0].metadata.total_reps == 33


class TestRoundLabels:

    def test_prose_labels(self):
        scores = parse_scores([["Round 1: 2:15"], ["Round 2: 2:08"]])
        assert names(scores) == ["Round 1", "Round 2"]
        assert [s.metadata.time_in_seconds for s in scores] == [135, 128]

    def test_grid_labels(self):
        scores = parse_scores([["Round 1", "2:15"], ["Round", "2", "2:08"]])
        assert names(scores) == ["Round 1", "Round 2"]

    def test_label_without_value_is_skipped(self):
        score, state = classify_score_line(["Round 3"], ScoreState())
        assert score is None
        assert state.round_index == 2
        assert state.labeled_round is None

    def test_set_label_resets_rounds(self):
        score, state = classify_score_line(["Set 2", "4:30"], ScoreState(round_index=5))
        assert score.name == "Set 2"
        assert score.metadata.time_in_seconds == 270
        assert state.set_index == 2
        assert state.round_index == 1

    def test_set_weights(self):
        scores = parse_scores([["Set 1", "225", "lbs"], ["Set 2", "245", "lbs"]])
        assert names(scores) == ["Set 1", "Set 2"]
        assert [s.metadata.weight for s in scores] == [225, 245]

    def test_chained_labels_last_one_names_the_score(self):
        score, state = classify_score_line(["Round 1 Round 2 4:10"], ScoreState())
        assert score.name == "Round 2"
        assert score.metadata.time_in_seconds == 250
        assert state.round_index == 2
        assert state.labeled_round is None

    def test_long_run_of_labels_without_value(self):
        score, state = classify_score_line(["round 1 " * 2000], ScoreState())
        assert score is None
        assert state.round_index == 0


class TestGridTimes:

    def test_unlabeled_times_are_numbered(self):
        scores = parse_scores([["2:15"], ["2:08"], ["2:30"]])
        assert names(scores) == ["Round 1", "Round 2", "Round 3"]

    def test_injected_state(self):
        score, state = classify_score_line(["1:45"], ScoreState(round_index=3))
        assert score.name == "Round 4"
        assert state.round_index == 4

    def test_date_column_is_ignored(self):
        scores = parse_scores([["12:34", "10/12/24"]])
        assert scores[0].metadata.time_in_seconds == 754

    def test_compact_time_beside_a_date(self):
        scores = parse_scores([["406", "11/9/25"]])
        assert len(scores) == 1
        assert scores[0].kind == "time"
        assert scores[0].name == "Finish Time"
        assert scores[0].metadata.time_in_seconds == 246

    def test_compact_time_is_not_read_beside_a_unit(self):
        scores = parse_scores([["315", "lbs"]])
        assert scores[0].kind == "weight"

    def test_hour_or_more_rejected(self):
        assert parse_scores([["75:00"]]) == []

    def test_attached_letters_are_not_times(self):
        assert parse_scores([["200W"]]) == []


class TestBareNumbers:

    def test_large_number_is_compact_time(self):
        scores = parse_scores([["130"]])
        assert scores[0].kind == "time"
        assert scores[0].metadata.time_in_seconds == 90

    def test_small_number_is_reps(self):
        scores = parse_scores([["45"]])
        assert scores[0].kind == "reps"
        assert scores[0].name == "Total"
        assert scores[0].metadata.total_reps == 45

    def test_time_cap_names_reps(self):
        scores = parse_scores([["45"]], time_cap_seconds=900)
        assert scores[0].name == "Time Cap"

    def test_threshold_is_tunable(self):
        scores = parse_scores([["130"]], bare_number_time_threshold=200)
        assert scores[0].kind == "reps"

    def test_number_that_is_not_a_time_is_reps(self):
        scores = parse_scores([["175"]])
        assert scores[0].kind == "reps"
        assert scores[0].metadata.total_reps == 175

    def test_later_reps_are_numbered_by_round(self):
        scores = parse_scores([["20"], ["18"], ["17"]])
        assert names(scores) == ["Total", "Round 1", "Round 2"]


class TestProse:

    def test_result_label_time(self):
        scores = parse_scores([["Time: 12:34"]])
        assert scores[0].name == "Finish Time"
        assert scores[0].metadata.time_in_seconds == 754

    def test_start_stop(self):
        scores = parse_scores([["Start: 0:00, Stop: 1:13"], ["Start: 1:13, Stop: 2:40"]])
        assert scores[0].name == "Round 1"
        assert all(s.kind == "time" for s in scores)
        first = scores[0].metadata
        assert first.start_time == "0:00"
        assert first.stop_time == "1:13"
        assert first.round_time == 73
        assert scores[1].metadata.time_in_seconds == 87

    def test_rounds_plus_reps_words(self):
        scores = parse_scores([["3 rounds + 15 reps"]])
        assert scores[0].metadata.rounds == 3
        assert scores[0].metadata.reps_into_next_round == 15
        assert scores[0].value == "3 rounds + 15 reps"

    def test_reps_with_date(self):
        scores = parse_scores([["8 + 25 10/12/24"]])
        assert scores[0].metadata.rounds == 8
        assert scores[0].value == "8 + 25"

    def test_bare_reps_word(self):
        scores = parse_scores([["150 reps"]])
        assert scores[0].kind == "reps"
        assert scores[0].metadata.rounds is None
        assert scores[0].metadata.total_reps == 150

    def test_weight_in_text(self):
        scores = parse_scores([["225lbs"]])
        assert scores[0].kind == "weight"
        assert scores[0].metadata.weight == 225

    def test_kg_weight(self):
        scores = parse_scores([["100 kg"]])
        assert scores[0].metadata.unit == "kg"


class TestSkips:

    @pytest.mark.parametrize("line", [
        ["30", "Double Unders"],
        ["200W", "Bike Erg"],
        ["21-15-9", "Thrusters"],
        ["10 Deadlifts"],
        ["Burpees"],
        ["Rest", "1:00"],
        ["@", "2:00"],
        ["Score"],
    ])
    def test_non_score_lines(self, line):
        score, state = classify_score_line(line, ScoreState())
        assert score is None
        assert state == ScoreState()

    def test_unit_column_is_not_a_movement(self):
        assert looks_like_movement(["315", "lbs"]) is False
        assert looks_like_movement(["8", "+", "25"]) is False
        assert looks_like_movement(["225", "#"]) is False
        assert looks_like_movement(["135", "pounds"]) is False

    def test_rule_order_starts_with_skips(self):
        assert [r.name for r in SCORE_RULES][:4] == ["header", "descriptive", "movement", "round_label"]


class TestFinishTimeRename:

    def test_only_a_lone_round_one_is_renamed(self):
        scores = parse_scores([["Round 2: 4:10"]])
        assert names(scores) == ["Round 2"]

    def test_reps_scores_do_not_block_rename(self):
        scores = parse_scores([["9:58"], ["8", "+", "3"]])
        assert names(scores) == ["Finish Time", "Round 1"]

    def test_context_defaults(self):
        score, _ = classify_score_line(["45"], ScoreState(), ScoreContext(time_cap_seconds=600))
        assert score.name == "Time Cap"
