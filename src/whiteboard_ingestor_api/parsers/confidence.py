"""Confidence score for a parsed whiteboard."""
from typing import Sequence

from whiteboard_ingestor_api.models import ScoreElement, WorkoutElement

from .models import OCRData

TOKEN_WEIGHT = 0.4
PARSING_WEIGHT = 0.3
COMPLETENESS_WEIGHT = 0.3

# Used when the OCR step reported no tokens
NO_TOKEN_CONFIDENCE = 0.5


def average_token_confidence(ocr_data: OCRData) -> float:
    if not ocr_data.words:
        return NO_TOKEN_CONFIDENCE
    return sum(w.confidence for w in ocr_data.words) / len(ocr_data.words)


def calculate_confidence(
    ocr_data: OCRData,
    elements: Sequence[WorkoutElement],
    scores: Sequence[ScoreElement],
) -> float:
    """
    Weighted confidence in [0, 1].

    0.4 * average token confidence + 0.3 * parsing success + 0.3 * completeness,
    where parsing success is 0.9 when anything parsed (else 0.5) and
    completeness is 0.3 for the title plus 0.4 for elements and 0.3 for scores.
    """
    parsing_success = 0.9 if (elements or scores) else 0.5
    completeness = 0.3
    if elements:
        completeness += 0.4
    if scores:
        completeness += 0.3

    confidence = (
        average_token_confidence(ocr_data) * TOKEN_WEIGHT
        + parsing_success * PARSING_WEIGHT
        + completeness * COMPLETENESS_WEIGHT
    )
    return round(min(1.0, max(0.0, confidence)), 4)
