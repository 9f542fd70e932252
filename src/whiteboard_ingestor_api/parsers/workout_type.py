"""
Workout Type Detection

Infers the workout type from the title and parsed structure, then builds the
description sentence and the final display title from it.
"""

import logging
import re
from typing import List, Sequence

from whiteboard_ingestor_api.models import (
    MovementElement,
    ScoreElement,
    WorkoutElement,
    WorkoutType,
)

from .models import TitleMetadata
from .title_parser import FALLBACK_TITLE

logger = logging.getLogger(__name__)

# Checked in order against the lower-cased title
TITLE_KEYWORDS = [
    (re.compile(r'amrap'), WorkoutType.AMRAP),
    (re.compile(r'e\d+mom'), WorkoutType.EMOM),
    (re.compile(r'emom'), WorkoutType.EMOM),
    (re.compile(r'chipper'), WorkoutType.CHIPPER),
    (re.compile(r'rounds for time'), WorkoutType.ROUNDS_FOR_TIME),
    (re.compile(r'for time'), WorkoutType.FOR_TIME),
    (re.compile(r'for reps'), WorkoutType.FOR_REPS),
]

DESCRIPTION_TEMPLATES = {
    WorkoutType.AMRAP: "A brutal AMRAP with {movement1} and {movement2}.",
    WorkoutType.EMOM: "An {type} with high output in {movement1} and {movement2}.",
    WorkoutType.CHIPPER: "A savage chipper that tested {movement1}, {movement2}, and {movement3}.",
    WorkoutType.ROUNDS_FOR_TIME: "A fast-paced {type} with {movement1} and {movement2}.",
    WorkoutType.LIFT: "Heavy {type} session with {movement1}.",
    WorkoutType.FOR_TIME: "A {type} that pushed the limits with {movement1} and {movement2}.",
    WorkoutType.FOR_REPS: "A {type} that tested everything from {movement1} to {movement2}.",
}
GENERIC_TEMPLATE = "A {type} with {movement1} and {movement2}."
MISSING_MOVEMENT = "movements"

EMOM_TITLE_PATTERN = re.compile(r'^E(\d+)MOM$', re.IGNORECASE)


def _type_value(workout_type) -> str:
    return workout_type.value if isinstance(workout_type, WorkoutType) else str(workout_type)


def movement_names(elements: Sequence[WorkoutElement], limit: int) -> List[str]:
    """Exercise names of the first `limit` movements, in board order"""
    names = [
        el.movement.exercise
        for el in elements
        if isinstance(el, MovementElement) and el.movement.exercise
    ]
    return names[:limit]


def detect_workout_type(
    title: str,
    elements: Sequence[WorkoutElement],
    scores: Sequence[ScoreElement],
) -> WorkoutType:
    """
    Title keywords win; otherwise infer from structure.

    A single "N x M" movement is a lift, a single time score is For Time and
    a single reps score is For Reps. Anything else is Unknown.
    """
    title_lower = (title or "").lower()
    for pattern, workout_type in TITLE_KEYWORDS:
        if pattern.search(title_lower):
            return workout_type

    movements = [el.movement for el in elements if isinstance(el, MovementElement)]
    if len(movements) == 1 and "x" in movements[0].amount.lower():
        return WorkoutType.LIFT

    time_scores = sum(1 for s in scores if s.kind == "time")
    reps_scores = sum(1 for s in scores if s.kind == "reps")
    if time_scores == 1 and reps_scores == 0:
        return WorkoutType.FOR_TIME
    if reps_scores == 1 and time_scores == 0:
        return WorkoutType.FOR_REPS
    return WorkoutType.UNKNOWN


def generate_description(workout_type: WorkoutType, elements: Sequence[WorkoutElement]) -> str:
    """Fill the template for this type with up to three movement names"""
    type_name = _type_value(workout_type)
    names = movement_names(elements, 3)
    if not names:
        return f"A {type_name} workout."

    template = DESCRIPTION_TEMPLATES.get(workout_type, GENERIC_TEMPLATE)
    padded = names + [MISSING_MOVEMENT] * (3 - len(names))
    return template.format(
        type=type_name,
        movement1=padded[0],
        movement2=padded[1],
        movement3=padded[2],
    )


def finalize_title(
    title_meta: TitleMetadata,
    workout_type: WorkoutType,
    elements: Sequence[WorkoutElement],
) -> str:
    """
    Final display title.

    "e5mom" becomes "E5MOM"; the "Workout" placeholder becomes
    "AMRAP: Burpees + Wall Balls" (or "AMRAP Workout" with no movements).
    Any other title is kept as written.
    """
    title = (title_meta.title or "").strip()
    emom = EMOM_TITLE_PATTERN.match(title)
    if emom:
        return f"E{emom.group(1)}MOM"
    if title and title != FALLBACK_TITLE:
        return title

    type_name = _type_value(workout_type)
    names = movement_names(elements, 2)
    if names:
        generated = f"{type_name}: {' + '.join(names)}"
    else:
        generated = f"{type_name} Workout"
    logger.debug(f"Generated title {generated!r} for placeholder title")
    return generated
