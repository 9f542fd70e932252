"""
Tests for the movement pass.

Each rule in MOVEMENT_RULES is exercised on its own through
classify_movement_line, then parse_movements is checked on whole boards.
"""

import pytest
from whiteboard_ingestor_api.models import DescriptiveElement, MovementElement
from whiteboard_ingestor_api.parsers.movement_parser import (
    MOVEMENT_RULES,
    classify_movement_line,
    looks_like_score,
    parse_movements,
)


def movement_of(line):
    rule, element = classify_movement_line(line)
    assert isinstance(element, MovementElement), f"{line!r} matched {rule} -> {element!r}"
    return element.movement


def descriptive_of(line):
    rule, element = classify_movement_line(line)
    assert isinstance(element, DescriptiveElement), f"{line!r} matched {rule} -> {element!r}"
    return element.descriptive


class TestRuleOrder:

    def test_rule_names(self):
        assert [rule.name for rule in MOVEMENT_RULES] == [
            "section_header",
            "score_shaped",
            "descriptive",
            "at_instruction",
            "bare_time",
            "grid_movement",
            "legacy_free_text",
            "bare_exercise",
        ]


class TestSkips:

    @pytest.mark.parametrize("line", [["Workout"], ["Score:"], ["Rounds"], ["Time"], ["Reps", "Weight"]])
    def test_section_headers(self, line):
        assert classify_movement_line(line) == ("section_header", None)

    @pytest.mark.parametrize("line", [
        ["8 + 25"],
        ["8", "+", "25"],
        ["2:15", "10/12/24"],
        ["3 rounds + 15 reps"],
        ["Round 1: 2:15"],
        ["Set 2", "4:30"],
        ["Start: 0:00, Stop: 1:13"],
        ["25 reps"],
        ["315", "lbs"],
        ["Time: 12:34"],
        ["130"],
        ["225", "#"],
        ["135", "pounds"],
    ])
    def test_score_shaped(self, line):
        assert classify_movement_line(line) == ("score_shaped", None)

    @pytest.mark.parametrize("line", [["8:00"], ["12:34"]])
    def test_bare_time(self, line):
        assert classify_movement_line(line) == ("bare_time", None)

    def test_short_noise_is_dropped(self):
        assert classify_movement_line(["ok"]) == (None, None)


class TestDescriptive:

    def test_rest_with_grid_time(self):
        d = descriptive_of(["Rest", "1:00"])
        assert d.kind == "rest"
        assert d.duration_seconds == 60
        assert d.text == "Rest 1:00"

    def test_rest_with_inline_time(self):
        assert descriptive_of(["Rest 2:30 between rounds"]).duration_seconds == 150

    def test_rest_with_seconds_column(self):
        assert descriptive_of(["Rest", "90s"]).duration_seconds == 90

    def test_rest_ratio_defaults_to_a_minute(self):
        d = descriptive_of(["rest 1:1"])
        assert d.kind == "rest"
        assert d.duration_seconds == 60

    def test_repeat(self):
        d = descriptive_of(["Repeat", "x3"])
        assert d.kind == "repeat"
        assert d.duration_seconds is None

    @pytest.mark.parametrize("line", [["Then", "run 400m"], ["and 50 air squats"]])
    def test_instructions(self, line):
        assert descriptive_of(line).kind == "instruction"

    def test_at_instruction(self):
        _, element = classify_movement_line(["@", "every 2:00"])
        assert element.descriptive.kind == "instruction"
        assert element.descriptive.duration_seconds == 120

    def test_word_starting_with_keyword_is_not_descriptive(self):
        movement = movement_of(["Andy's Burpees"])
        assert movement.amount == "1"


class TestGridMovements:

    def test_amount_and_exercise(self):
        m = movement_of(["30", "Double Unders"])
        assert (m.amount, m.exercise, m.unit) == ("30", "Double Unders", None)

    def test_unit_column(self):
        m = movement_of(["21", "Thrusters", "95lbs"])
        assert m.unit == "95lbs"

    def test_rep_ladder(self):
        assert movement_of(["21-15-9", "Thrusters"]).amount == "21-15-9"

    def test_sets_by_reps(self):
        assert movement_of(["5x5", "Back Squat"]).amount == "5x5"

    def test_abbreviation_is_normalized(self):
        assert movement_of(["30", "DU"]).exercise == "Double Unders"

    def test_rest_in_first_column_redirects(self):
        rule, element = classify_movement_line(["Rest", "2 min"])
        assert rule == "descriptive"
        assert element.descriptive.duration_seconds == 120

    def test_pipe_inside_a_column_is_kept(self):
        # Split on ";" so the default "|" survives inside the exercise column
        rule, element = classify_movement_line(["10", "Pull | Push", "20kg"])
        assert rule == "grid_movement"
        assert element.movement.amount == "10"
        assert element.movement.unit == "20kg"


class TestFreeText:

    def test_amount_exercise_unit(self):
        m = movement_of(["21 Hang Power Clean 135"])
        assert (m.amount, m.exercise, m.unit) == ("21", "Hang Power Clean", "135")

    def test_amount_exercise(self):
        m = movement_of(["10 Deadlifts"])
        assert (m.amount, m.exercise, m.unit) == ("10", "Deadlifts", None)

    def test_spaced_sets_by_reps(self):
        m = movement_of(["5 x 5 Back Squat"])
        assert m.amount == "5 x 5"
        assert m.exercise == "Back Squat"

    def test_trailing_unit_word(self):
        m = movement_of(["500 Row m"])
        assert m.unit == "m"

    def test_bare_exercise(self):
        m = movement_of(["Burpees"])
        assert (m.amount, m.exercise, m.unit) == ("1", "Burpees", None)


class TestLooksLikeScore:

    def test_movement_lines_are_not_scores(self):
        assert looks_like_score(["30", "Double Unders"]) is False
        assert looks_like_score(["10 Deadlifts"]) is False

    def test_score_lines(self):
        assert looks_like_score(["Round 2: 2:08"]) is True
        assert looks_like_score(["Finish time 9:45"]) is True

    @pytest.mark.parametrize("line", [["225", "#"], ["135", "pounds"], ["315", "lbs"]])
    def test_number_beside_weight_unit(self, line):
        assert looks_like_score(line) is True


class TestParseMovements:

    def test_board_order_is_kept(self):
        elements = parse_movements([
            ["21-15-9", "Thrusters", "95lbs"],
            ["Rest", "1:00"],
            ["21-15-9", "Pull-ups"],
            ["7:42"],
        ])
        assert [el.type for el in elements] == ["movement", "descriptive", "movement"]
        assert elements[2].movement.exercise == "Pull-ups"

    def test_empty(self):
        assert parse_movements([]) == []
        assert parse_movements([[]]) == []
