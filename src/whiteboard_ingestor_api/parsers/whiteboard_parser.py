"""
Whiteboard Parser

Turns delimiter-annotated whiteboard text into a WorkoutExtraction:

    lines -> normalize -> grid -> title / movements / scores
          -> type -> description -> confidence -> final title

Parsing never raises for string input. Unmatched lines are dropped and
logged at DEBUG.
"""

import logging
from typing import List, Optional

from whiteboard_ingestor_api.models import WorkoutExtraction

from .confidence import calculate_confidence
from .grid import build_grid, normalize_line, normalize_text
from .models import OCRData, ParseOptions
from .movement_parser import parse_movements
from .score_parser import parse_scores
from .title_parser import parse_title
from .workout_type import detect_workout_type, finalize_title, generate_description

logger = logging.getLogger(__name__)


class WhiteboardParser:
    """Stateless whiteboard parser; every knob comes in through ParseOptions"""

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()

    def parse_raw_text(self, raw_text: str) -> WorkoutExtraction:
        """
        Parse a multi-line string straight from the text-extraction step.

        Args:
            raw_text: Lines separated by newlines, columns by the delimiter

        Returns:
            WorkoutExtraction (always complete)
        """
        return self.parse_lines(normalize_text(raw_text or "", self.options.delimiter))

    def parse_lines(self, lines: List[str]) -> WorkoutExtraction:
        """
        Parse an ordered list of lines.

        Every line gets a token confidence of options.default_token_confidence.
        """
        delimiter = self.options.delimiter
        normalized = [normalize_line(line or "", delimiter) for line in (lines or [])]
        normalized = [line for line in normalized if line]
        ocr_data = OCRData.from_lines(normalized, self.options.default_token_confidence)
        return self.parse_ocr_data(ocr_data)

    def parse_ocr_data(self, ocr_data: OCRData) -> WorkoutExtraction:
        """Parse OCR data whose token confidences were reported by the extraction step"""
        delimiter = self.options.delimiter
        lines = ocr_data.lines or normalize_text(ocr_data.text, delimiter)
        lines = [normalize_line(line, delimiter) for line in lines]
        lines = [line for line in lines if line]

        grid = build_grid(lines, delimiter)
        logger.debug(f"Grid built: {len(grid)} lines")

        title_meta = parse_title(grid, delimiter)
        body = grid[1:]
        elements = parse_movements(body)
        scores = parse_scores(
            body,
            time_cap_seconds=title_meta.time_cap_seconds,
            bare_number_time_threshold=self.options.bare_number_time_threshold,
        )

        workout_type = detect_workout_type(title_meta.title, elements, scores)
        description = generate_description(workout_type, elements)
        confidence = calculate_confidence(ocr_data, elements, scores)
        title = finalize_title(title_meta, workout_type, elements)

        logger.info(
            f"Parsed whiteboard {title!r}: {len(elements)} elements, {len(scores)} scores, "
            f"type={workout_type.value}, confidence={confidence:.2f}"
        )

        return WorkoutExtraction(
            title=title,
            description=description,
            workout_type=workout_type,
            elements=elements,
            scores=scores,
            confidence=confidence,
            raw_text=lines,
        )


_default_parser = WhiteboardParser()


def parse_lines(lines: List[str], options: Optional[ParseOptions] = None) -> WorkoutExtraction:
    """Parse a line list with the default options unless others are given"""
    parser = WhiteboardParser(options) if options is not None else _default_parser
    return parser.parse_lines(lines)


def parse_raw_text(raw_text: str, options: Optional[ParseOptions] = None) -> WorkoutExtraction:
    """Parse a raw multi-line string with the default options unless others are given"""
    parser = WhiteboardParser(options) if options is not None else _default_parser
    return parser.parse_raw_text(raw_text)
