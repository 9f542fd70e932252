"""Flat summaries of a parsed whiteboard for list views and legacy records."""
import re
from typing import List, Optional

from whiteboard_ingestor_api.models import (
    ExtractedData,
    RepsScoreMetadata,
    TimeScoreMetadata,
    WorkoutExtraction,
)

_COUNTED_RE = re.compile(r"^(\d+)\s+(.+)$")
_WEIGHT_SUFFIX_RE = re.compile(r"\d+(lbs?|kg|oz|#)", re.I)


def pluralize_movement(movement: str) -> str:
    """Pluralize a counted movement.

    "10 Deadlift" -> "10 Deadlifts", "20 Wall Ball 30lbs" -> "20 Wall Balls 30lbs".
    Text without a leading count, or already ending in "s", is returned unchanged.
    """
    match = _COUNTED_RE.match(movement or "")
    if not match:
        return movement

    count, rest = match.group(1), match.group(2).strip()
    parts = rest.split()
    name, suffix = rest, ""
    if len(parts) > 1 and _WEIGHT_SUFFIX_RE.search(parts[-1]):
        name, suffix = " ".join(parts[:-1]), parts[-1]

    if name.lower().endswith("s"):
        return movement
    pluralized = f"{count} {name}s"
    return f"{pluralized} {suffix}" if suffix else pluralized


def pluralize_movements(movements: List[str]) -> List[str]:
    return [pluralize_movement(m) for m in movements]


def movement_display(amount: str, exercise: str, unit: Optional[str]) -> str:
    return " ".join(part for part in (amount, exercise, unit) if part)


def to_extracted_data(extraction: WorkoutExtraction) -> ExtractedData:
    """Collapse an extraction into the flat ExtractedData shape.

    type is "time" when any time score exists, else "reps" when any reps
    score exists, else "unknown". rounds comes from the first reps score.
    """
    times = [
        s.metadata.time_in_seconds
        for s in extraction.scores
        if s.kind == "time" and isinstance(s.metadata, TimeScoreMetadata)
    ]
    reps_metadata = [
        s.metadata
        for s in extraction.scores
        if s.kind == "reps" and isinstance(s.metadata, RepsScoreMetadata)
    ]

    if times:
        kind = "time"
    elif reps_metadata:
        kind = "reps"
    else:
        kind = "unknown"

    rounds = reps_metadata[0].rounds if reps_metadata else None
    movements = [
        movement_display(m.amount, m.exercise, m.unit)
        for m in extraction.movements
    ]

    return ExtractedData(
        type=kind,
        rounds=rounds,
        movements=movements,
        times=times or None,
        reps=[m.total_reps for m in reps_metadata] or None,
    )
