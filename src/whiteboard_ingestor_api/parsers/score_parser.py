"""
Score Parser

Classifies every non-title grid line as a time, reps or weight score. Round
and set counters are threaded through the lines as an explicit ScoreState so
any line can be classified on its own with an injected starting state.

Lines that look like movements, rests or instructions are left to the
movement pass.

    ["2:15"]               -> time  "Round 1" (renamed "Finish Time" when alone)
    ["8", "+", "25"]       -> reps  "Total"   rounds=8 reps_into_next_round=25
    ["315", "lbs"]         -> weight "Weight" 315 lbs
    "Round 2: 2:08"        -> time  "Round 2"
    "Set 1 | 4:30"         -> time  "Set 1"
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, NamedTuple, Optional, Tuple

from whiteboard_ingestor_api.models import (
    RepsScoreMetadata,
    ScoreElement,
    TimeScoreMetadata,
    WeightScoreMetadata,
)
from whiteboard_ingestor_api.utils import (
    find_clock_time,
    format_seconds_to_time,
    leading_int,
    parse_time_to_seconds,
)

from .grid import get_column, join_columns, parse_line_to_grid
from .models import BARE_NUMBER_TIME_THRESHOLD, MAX_TIME_SECONDS, GridLine
from .movement_parser import looks_like_score
from .patterns import (
    ATTACHED_LETTERS_PATTERNS,
    CLOCK_TIME_PATTERN,
    DATE_PATTERN,
    DESCRIPTIVE_PATTERN,
    HEADER_PATTERN,
    INSTRUCTION_PREFIX_PATTERN,
    INTEGER_PATTERN,
    LABEL_NUMBER_PATTERN,
    LEADING_WORD_PATTERN,
    MOVEMENT_AMOUNT_COLUMN_PATTERN,
    PROSE_MOVEMENT_PATTERN,
    PROSE_REPS_PATTERN,
    RESULT_LABEL_PATTERN,
    ROUND_LABEL_COLUMN_PATTERN,
    ROUND_LABEL_PATTERN,
    ROUND_WORD_PATTERN,
    SHORT_UNIT_COLUMN_PATTERN,
    START_STOP_PATTERN,
    WEIGHT_LINE_PATTERN,
    WEIGHT_UNIT_PATTERN,
)

logger = logging.getLogger(__name__)

# Numbers at or below this are rep counts, not loads
MIN_WEIGHT = 50


@dataclass(frozen=True)
class ScoreState:
    """Counters threaded across the lines of one parse call"""
    round_index: int = 0
    set_index: int = 0
    # Set while classifying the remainder of a "Round N" line
    labeled_round: Optional[int] = None


@dataclass(frozen=True)
class ScoreContext:
    """Per-call inputs that do not change from line to line"""
    time_cap_seconds: Optional[int] = None
    bare_number_time_threshold: int = BARE_NUMBER_TIME_THRESHOLD


class RuleResult(NamedTuple):
    """Outcome of a matching rule; score is None when the line is skipped"""
    score: Optional[ScoreElement]
    state: ScoreState


class ScoreRule(NamedTuple):
    name: str
    apply: Callable[[GridLine, ScoreState, ScoreContext], Optional[RuleResult]]


# ---------------------------------------------------------------------------
# Naming and builders
# ---------------------------------------------------------------------------

def _time_name(state: ScoreState) -> str:
    if state.set_index > 0:
        return f"Set {state.set_index}"
    if state.labeled_round is not None:
        return f"Round {state.labeled_round}"
    return f"Round {state.round_index + 1}"


def _reps_name(state: ScoreState, context: Optional[ScoreContext] = None) -> str:
    if state.set_index > 0:
        return f"Set {state.set_index}"
    if state.labeled_round is not None:
        return f"Round {state.labeled_round}"
    if context is not None and context.time_cap_seconds is not None:
        return "Time Cap"
    if state.round_index == 0:
        return "Total"
    return f"Round {state.round_index}"


def _weight_name(state: ScoreState) -> str:
    return f"Set {state.set_index}" if state.set_index > 0 else "Weight"


def _advance(state: ScoreState) -> ScoreState:
    return replace(state, round_index=state.round_index + 1)


def _time_result(seconds: int, state: ScoreState, **extra) -> RuleResult:
    score = ScoreElement(
        name=_time_name(state),
        kind="time",
        value=format_seconds_to_time(seconds),
        metadata=TimeScoreMetadata(time_in_seconds=seconds, **extra),
    )
    return RuleResult(score, _advance(state))


def _reps_result(
    value: str,
    state: ScoreState,
    rounds: Optional[int] = None,
    reps_into_next: Optional[int] = None,
    total_reps: int = 0,
    context: Optional[ScoreContext] = None,
) -> RuleResult:
    score = ScoreElement(
        name=_reps_name(state, context),
        kind="reps",
        value=value,
        metadata=RepsScoreMetadata(
            rounds=rounds,
            reps_into_next_round=reps_into_next,
            total_reps=total_reps,
        ),
    )
    return RuleResult(score, _advance(state))


def _weight_result(weight: int, unit: str, value: str, state: ScoreState) -> RuleResult:
    score = ScoreElement(
        name=_weight_name(state),
        kind="weight",
        value=value,
        metadata=WeightScoreMetadata(weight=weight, unit=unit),
    )
    return RuleResult(score, state)


def _strip_date(text: str) -> str:
    return " ".join(DATE_PATTERN.sub(" ", text).split())


def _has_attached_letters(text: str) -> bool:
    return any(pattern.search(text) for pattern in ATTACHED_LETTERS_PATTERNS)


# ---------------------------------------------------------------------------
# Skip rules
# ---------------------------------------------------------------------------

def _header(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    if HEADER_PATTERN.match(join_columns(line)):
        return RuleResult(None, state)
    return None


def _descriptive(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    text = join_columns(line)
    if DESCRIPTIVE_PATTERN.match(text):
        return RuleResult(None, state)
    if get_column(line, 0) == "@" or INSTRUCTION_PREFIX_PATTERN.match(text):
        return RuleResult(None, state)
    return None


def looks_like_movement(line: GridLine) -> bool:
    """
    Movement-shaped lines belong to the movement pass.

    Grid form: an amount ("30", "200W", "21-15-9") followed by an exercise
    column that is not a number, "+", time, date, short unit or weight unit.
    Free-text form: the line opens with a word, or with an amount followed
    by a word ("10 Deadlifts"), and is not score-shaped ("Round 2: 2:08",
    "25 reps", "Time: 12:34").
    """
    col0 = get_column(line, 0)
    col1 = get_column(line, 1)
    if len(line) >= 2 and MOVEMENT_AMOUNT_COLUMN_PATTERN.match(col0):
        if (col1
                and not INTEGER_PATTERN.match(col1)
                and col1 != "+"
                and not CLOCK_TIME_PATTERN.match(col1)
                and not DATE_PATTERN.fullmatch(col1)
                and len(col1) > 1
                and not SHORT_UNIT_COLUMN_PATTERN.match(col1)
                and not WEIGHT_UNIT_PATTERN.match(col1)):
            return True
    text = join_columns(line)
    if not (LEADING_WORD_PATTERN.match(text) or PROSE_MOVEMENT_PATTERN.match(text)):
        return False
    if ROUND_WORD_PATTERN.match(col0) or looks_like_score(line):
        return False
    return True


def _movement(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    if looks_like_movement(line):
        return RuleResult(None, state)
    return None


# ---------------------------------------------------------------------------
# Round / set labels
# ---------------------------------------------------------------------------

def _split_label(line: GridLine) -> Optional[Tuple[str, int, Optional[GridLine]]]:
    """(kind, number, remainder) for "Round 2: 2:08", "Round 2 | 2:08", "Round | 2 | 2:08" """
    col0 = get_column(line, 0)
    label = ROUND_LABEL_COLUMN_PATTERN.match(col0)
    if label:
        return label.group(1).lower(), int(label.group(2)), line[1:] or None
    if ROUND_WORD_PATTERN.match(col0):
        number = LABEL_NUMBER_PATTERN.match(get_column(line, 1))
        if number:
            return col0.lower(), int(number.group(1)), line[2:] or None
    prose = ROUND_LABEL_PATTERN.match(join_columns(line))
    if prose:
        remainder = prose.group(3).strip()
        return prose.group(1).lower(), int(prose.group(2)), parse_line_to_grid(remainder) if remainder else None
    return None


def _round_label(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    label = _split_label(line)
    if label is None:
        return None
    # "Round 1 Round 2 4:10": each label updates the counters, the last one names the score
    while label is not None:
        kind, number, remainder = label
        if kind == "set":
            state = replace(state, set_index=number, round_index=0, labeled_round=None)
        else:
            state = replace(state, round_index=max(number - 1, 0), labeled_round=number)
        if not remainder:
            return RuleResult(None, replace(state, labeled_round=None))
        line = remainder
        label = _split_label(line)
    score, next_state = classify_score_line(line, state, context)
    return RuleResult(score, replace(next_state, labeled_round=None))


# ---------------------------------------------------------------------------
# Grid rules
# ---------------------------------------------------------------------------

def _grid_time(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    raw = get_column(line, 0)
    time_str = _strip_date(raw)
    if not time_str or _has_attached_letters(time_str):
        return None
    if ":" not in time_str:
        # Colon-less "406" is a time only beside a date ("406 | 11/9/25");
        # alone it goes through the bare number threshold, "315 | lbs" is a weight
        others = line[1:]
        dated = bool(DATE_PATTERN.search(raw)) or bool(others)
        if not dated or not all(DATE_PATTERN.fullmatch(col) for col in others):
            return None
    seconds = parse_time_to_seconds(time_str)
    if seconds is None or seconds >= MAX_TIME_SECONDS:
        return None
    return _time_result(seconds, state)


def _grid_rounds_reps(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    if len(line) < 3 or get_column(line, 1) != "+":
        return None
    rounds = leading_int(get_column(line, 0))
    if rounds is None:
        return None
    # Any column after the third (usually a date) does not affect the value
    reps_into_next = leading_int(get_column(line, 2)) or 0
    return _reps_result(
        f"{rounds} + {reps_into_next}",
        state,
        rounds=rounds,
        reps_into_next=reps_into_next,
        total_reps=rounds + reps_into_next,
    )


def _bare_number(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    if len(line) != 1 or not INTEGER_PATTERN.match(get_column(line, 0)):
        return None
    value = get_column(line, 0)
    number = int(value)
    seconds = parse_time_to_seconds(value)
    if seconds is not None and seconds < MAX_TIME_SECONDS and number >= context.bare_number_time_threshold:
        return _time_result(seconds, state)
    return _reps_result(str(number), state, total_reps=number, context=context)


def _grid_weight(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    if len(line) != 2 or not WEIGHT_UNIT_PATTERN.match(get_column(line, 1)):
        return None
    weight = leading_int(get_column(line, 0))
    if weight is None or weight <= MIN_WEIGHT:
        return None
    return _weight_result(weight, get_column(line, 1), join_columns(line), state)


# ---------------------------------------------------------------------------
# Free-text rules
# ---------------------------------------------------------------------------

def _prose_start_stop(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    match = START_STOP_PATTERN.search(join_columns(line))
    if not match:
        return None
    start_time = f"{match.group(1)}:{match.group(2)}"
    stop_time = f"{match.group(3)}:{match.group(4)}"
    start = parse_time_to_seconds(start_time)
    stop = parse_time_to_seconds(stop_time)
    if start is None or stop is None:
        return None
    round_time = stop - start
    score = ScoreElement(
        name=f"Round {state.labeled_round or state.round_index or 1}",
        kind="time",
        value=format_seconds_to_time(round_time),
        metadata=TimeScoreMetadata(
            time_in_seconds=round_time,
            start_time=start_time,
            stop_time=stop_time,
            round_time=round_time,
        ),
    )
    return RuleResult(score, _advance(state))


def _prose_text(line: GridLine) -> str:
    """Line text with dates and a leading result label ("Time:", "Total") removed"""
    text = _strip_date(join_columns(line))
    return RESULT_LABEL_PATTERN.sub("", text, count=1).strip()


def _prose_time(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    seconds = find_clock_time(_prose_text(line))
    if seconds is None or seconds >= MAX_TIME_SECONDS:
        return None
    return _time_result(seconds, state)


def _prose_rounds_reps(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    text = _prose_text(line)
    match = PROSE_REPS_PATTERN.match(text)
    if not match:
        return None
    first = int(match.group(1))
    second = int(match.group(3)) if match.group(3) else None
    if match.group(2) or second is not None:
        rounds = first
        reps_into_next = second or 0
        return _reps_result(
            text, state, rounds=rounds, reps_into_next=reps_into_next, total_reps=rounds + reps_into_next
        )
    return _reps_result(text, state, total_reps=first)


def _prose_weight(line: GridLine, state: ScoreState, context: ScoreContext) -> Optional[RuleResult]:
    text = _prose_text(line)
    match = WEIGHT_LINE_PATTERN.match(text)
    if not match or int(match.group(1)) <= MIN_WEIGHT:
        return None
    return _weight_result(int(match.group(1)), match.group(2) or "lbs", text, state)


SCORE_RULES: List[ScoreRule] = [
    ScoreRule("header", _header),
    ScoreRule("descriptive", _descriptive),
    ScoreRule("movement", _movement),
    ScoreRule("round_label", _round_label),
    ScoreRule("grid_time", _grid_time),
    ScoreRule("grid_rounds_reps", _grid_rounds_reps),
    ScoreRule("bare_number", _bare_number),
    ScoreRule("grid_weight", _grid_weight),
    ScoreRule("prose_start_stop", _prose_start_stop),
    ScoreRule("prose_time", _prose_time),
    ScoreRule("prose_rounds_reps", _prose_rounds_reps),
    ScoreRule("prose_weight", _prose_weight),
]


def classify_score_line(
    line: GridLine,
    state: ScoreState,
    context: Optional[ScoreContext] = None,
) -> Tuple[Optional[ScoreElement], ScoreState]:
    """
    Classify one grid line with the given starting state.

    Returns:
        (score or None, state for the next line)
    """
    context = context or ScoreContext()
    for rule in SCORE_RULES:
        result = rule.apply(line, state, context)
        if result is not None:
            return result.score, result.state
    return None, state


def rename_lone_round_time(scores: List[ScoreElement]) -> List[ScoreElement]:
    """A single time score is the finish time, never "Round 1" """
    time_scores = [s for s in scores if s.kind == "time"]
    if len(time_scores) == 1 and time_scores[0].name == "Round 1":
        lone = time_scores[0]
        return [s.model_copy(update={"name": "Finish Time"}) if s is lone else s for s in scores]
    return scores


def parse_scores(
    lines: List[GridLine],
    time_cap_seconds: Optional[int] = None,
    bare_number_time_threshold: int = BARE_NUMBER_TIME_THRESHOLD,
) -> List[ScoreElement]:
    """
    Parse scores from grid lines.

    Args:
        lines: Grid lines with the title line already removed
        time_cap_seconds: Time cap from the title; only affects naming
        bare_number_time_threshold: See BARE_NUMBER_TIME_THRESHOLD

    Returns:
        Scores in board order
    """
    context = ScoreContext(
        time_cap_seconds=time_cap_seconds,
        bare_number_time_threshold=bare_number_time_threshold,
    )
    state = ScoreState()
    scores: List[ScoreElement] = []
    for line in lines:
        if not line:
            continue
        score, state = classify_score_line(line, state, context)
        if score is not None:
            scores.append(score)
            logger.debug(f"Score {score.name!r} ({score.kind}) from {line!r}")
    return rename_lone_round_time(scores)
