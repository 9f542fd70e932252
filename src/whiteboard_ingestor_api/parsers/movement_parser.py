"""
Movement Parser

Classifies every non-title grid line as a movement, a descriptive element
(rest / repeat / instruction) or not-a-movement. Classification is an ordered
rule table; the first rule that matches a line decides it.

    ["30", "Double Unders"]      -> Movement(amount="30", exercise="Double Unders")
    ["Rest", "1:00"]             -> Descriptive(kind="rest", duration_seconds=60)
    ["8", "+", "25"]             -> skipped (score)
    "21 Hang Power Clean 135"    -> Movement(amount="21", ..., unit="135")
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from whiteboard_ingestor_api.models import (
    Descriptive,
    DescriptiveElement,
    Movement,
    MovementElement,
    WorkoutElement,
)
from whiteboard_ingestor_api.services.movement_normalizer import normalize_movement_name
from whiteboard_ingestor_api.utils import find_clock_time, leading_int, parse_duration_to_seconds

from .grid import get_column, join_columns
from .models import GridLine
from .patterns import (
    AMOUNT_PATTERN,
    BARE_COUNT_PATTERN,
    CLOCK_TIME_PATTERN,
    DATE_PATTERN,
    DESCRIPTIVE_KEYWORD_PATTERN,
    DESCRIPTIVE_PATTERN,
    HEADER_PATTERN,
    INSTRUCTION_PREFIX_PATTERN,
    INTEGER_PATTERN,
    LEGACY_MOVEMENT_PATTERNS,
    NUMBER_PLUS_NUMBER_PATTERN,
    RESULT_LABEL_PATTERN,
    REST_RATIO_PATTERN,
    ROUND_LABEL_PREFIX_PATTERN,
    ROUNDS_PLUS_REPS_PATTERN,
    START_STOP_PATTERN,
    TRAILING_UNIT_PATTERN,
    WEIGHT_SHAPED_PATTERN,
    WEIGHT_UNIT_PATTERN,
)

logger = logging.getLogger(__name__)

DESCRIPTIVE_KINDS = {
    "rest": "rest",
    "repeat": "repeat",
    "then": "instruction",
    "and": "instruction",
}

# Free-text lines at or under this length are noise, not exercises
MIN_BARE_EXERCISE_LENGTH = 3


class RuleResult(NamedTuple):
    """Outcome of a matching rule; element is None when the line is skipped"""
    element: Optional[WorkoutElement]


class MovementRule(NamedTuple):
    name: str
    apply: Callable[[GridLine], Optional[RuleResult]]


SKIP = RuleResult(None)


# ---------------------------------------------------------------------------
# Element builders
# ---------------------------------------------------------------------------

def _rest_duration(line: GridLine, text: str) -> Optional[int]:
    """Duration for a rest/repeat line: any M:SS, then column 3 or 2, then a 1:1 ratio"""
    duration = find_clock_time(text)
    if duration is not None:
        return duration
    for index in (2, 1):
        duration = parse_duration_to_seconds(get_column(line, index))
        if duration is not None:
            return duration
    if REST_RATIO_PATTERN.search(text):
        return 60
    return None


def build_descriptive(line: GridLine, keyword: str) -> DescriptiveElement:
    text = join_columns(line)
    return DescriptiveElement(descriptive=Descriptive(
        text=text,
        kind=DESCRIPTIVE_KINDS.get(keyword.lower()),
        duration_seconds=_rest_duration(line, text),
    ))


def build_movement(amount: str, exercise: str, unit: Optional[str]) -> MovementElement:
    return MovementElement(movement=Movement(
        amount=amount.strip(),
        exercise=normalize_movement_name(exercise),
        unit=unit.strip() if unit else None,
    ))


# ---------------------------------------------------------------------------
# Rules, highest priority first
# ---------------------------------------------------------------------------

def _section_header(line: GridLine) -> Optional[RuleResult]:
    if HEADER_PATTERN.match(get_column(line, 0)):
        return SKIP
    return None


def looks_like_score(line: GridLine) -> bool:
    """Shapes reserved for the score pass"""
    text = join_columns(line)
    if NUMBER_PLUS_NUMBER_PATTERN.search(text):
        return True
    if (len(line) >= 3 and get_column(line, 1) == "+"
            and leading_int(get_column(line, 0)) is not None
            and leading_int(get_column(line, 2)) is not None):
        return True
    if DATE_PATTERN.search(text) or ROUNDS_PLUS_REPS_PATTERN.search(text):
        return True
    if ROUND_LABEL_PREFIX_PATTERN.match(text) or START_STOP_PATTERN.search(text):
        return True
    if BARE_COUNT_PATTERN.match(text) or WEIGHT_SHAPED_PATTERN.match(text):
        return True
    if INTEGER_PATTERN.match(text):
        return True
    # "225 | #", "135 | pounds"
    if (len(line) == 2 and INTEGER_PATTERN.match(get_column(line, 0))
            and WEIGHT_UNIT_PATTERN.match(get_column(line, 1))):
        return True
    return bool(RESULT_LABEL_PATTERN.match(text))


def _score_shaped(line: GridLine) -> Optional[RuleResult]:
    return SKIP if looks_like_score(line) else None


def _descriptive(line: GridLine) -> Optional[RuleResult]:
    match = DESCRIPTIVE_PATTERN.match(join_columns(line))
    if match:
        return RuleResult(build_descriptive(line, match.group(1)))
    first = get_column(line, 0)
    if DESCRIPTIVE_KEYWORD_PATTERN.match(first):
        return RuleResult(build_descriptive(line, first))
    return None


def _at_instruction(line: GridLine) -> Optional[RuleResult]:
    text = join_columns(line)
    if get_column(line, 0) != "@" and not INSTRUCTION_PREFIX_PATTERN.match(text):
        return None
    return RuleResult(DescriptiveElement(descriptive=Descriptive(
        text=text,
        kind="instruction",
        duration_seconds=find_clock_time(text),
    )))


def _bare_time(line: GridLine) -> Optional[RuleResult]:
    if len(line) <= 2 and not get_column(line, 1).strip() and CLOCK_TIME_PATTERN.match(get_column(line, 0)):
        return SKIP
    return None


def _grid_movement(line: GridLine) -> Optional[RuleResult]:
    if len(line) < 2:
        return None
    amount = get_column(line, 0)
    exercise = get_column(line, 1)
    if DESCRIPTIVE_KEYWORD_PATTERN.match(amount):
        return RuleResult(build_descriptive(line, amount))
    if not AMOUNT_PATTERN.match(amount):
        return None
    if not exercise.strip():
        return None
    return RuleResult(build_movement(amount, exercise, get_column(line, 2) or None))


def _legacy_free_text(line: GridLine) -> Optional[RuleResult]:
    text = join_columns(line)
    for pattern in LEGACY_MOVEMENT_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        amount, exercise = match.group(1), match.group(2).strip()
        unit = match.group(3) if match.lastindex and match.lastindex >= 3 else None
        if not unit:
            trailing = TRAILING_UNIT_PATTERN.search(exercise)
            if trailing:
                unit = trailing.group(1)
                exercise = exercise[:trailing.start()].strip()
        return RuleResult(build_movement(amount, exercise, unit))
    return None


def _bare_exercise(line: GridLine) -> Optional[RuleResult]:
    text = join_columns(line)
    if len(text) > MIN_BARE_EXERCISE_LENGTH:
        return RuleResult(build_movement("1", text, None))
    return None


MOVEMENT_RULES: List[MovementRule] = [
    MovementRule("section_header", _section_header),
    MovementRule("score_shaped", _score_shaped),
    MovementRule("descriptive", _descriptive),
    MovementRule("at_instruction", _at_instruction),
    MovementRule("bare_time", _bare_time),
    MovementRule("grid_movement", _grid_movement),
    MovementRule("legacy_free_text", _legacy_free_text),
    MovementRule("bare_exercise", _bare_exercise),
]


def classify_movement_line(line: GridLine) -> Tuple[Optional[str], Optional[WorkoutElement]]:
    """
    Run one grid line through the rule table.

    Returns:
        (rule name, element). The rule name is None when nothing matched;
        the element is None when the line was skipped or unmatched.
    """
    for rule in MOVEMENT_RULES:
        result = rule.apply(line)
        if result is not None:
            return rule.name, result.element
    return None, None


def parse_movements(lines: List[GridLine]) -> List[WorkoutElement]:
    """
    Parse movements and descriptive elements from grid lines.

    Args:
        lines: Grid lines with the title line already removed

    Returns:
        Elements in board order
    """
    elements: List[WorkoutElement] = []
    for line in lines:
        if not line:
            continue
        rule, element = classify_movement_line(line)
        if element is not None:
            elements.append(element)
        else:
            logger.debug(f"Movement pass skipped {line!r} (rule={rule})")
    return elements
