"""
Grid Builder

Normalizes delimiter-annotated OCR lines and splits them into columns.

    "AMRAP | | 10 min"  ->  "AMRAP | 10 min"  ->  ["AMRAP", "10 min"]
    "30 | DU |"         ->  "30 | DU"         ->  ["30", "DU"]
"""

import re
from typing import List, Optional

from .models import Grid, GridLine
from .patterns import DEFAULT_DELIMITER


def _split(line: str, delimiter: str) -> List[str]:
    return [part.strip() for part in line.split(delimiter) if part.strip()]


def normalize_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """
    Collapse redundant delimiters and whitespace in one OCR line.

    Runs of delimiters become one, empty fields are dropped, and fields are
    rejoined with a single space either side of the delimiter. Applying it to
    an already-normalized line returns the line unchanged.
    """
    if not line:
        return ""
    d = re.escape(delimiter)
    line = re.sub(rf"\s*{d}\s*", delimiter, line)
    line = re.sub(rf"{d}+", delimiter, line)
    parts = [" ".join(part.split()) for part in _split(line, delimiter)]
    return f" {delimiter} ".join(parts)


def normalize_text(raw_text: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Normalize every line of a multi-line string, dropping blank lines"""
    lines = (normalize_line(line, delimiter) for line in (raw_text or "").splitlines())
    return [line for line in lines if line]


def parse_line_to_grid(line: str, delimiter: str = DEFAULT_DELIMITER) -> Optional[GridLine]:
    """Split a line into its non-empty columns, or None for a blank line"""
    if not line or not line.strip():
        return None
    parts = _split(line.strip(), delimiter)
    return parts or None


def build_grid(lines: List[str], delimiter: str = DEFAULT_DELIMITER) -> Grid:
    """Build the grid from ordered lines; blank lines are not represented"""
    grid: Grid = []
    for line in lines:
        columns = parse_line_to_grid(line, delimiter)
        if columns:
            grid.append(columns)
    return grid


def get_column(line: GridLine, index: int, fallback: str = "") -> str:
    """Column value or fallback when the line is shorter"""
    return line[index] if 0 <= index < len(line) else fallback


def join_columns(line: GridLine) -> str:
    """Line text without delimiters"""
    return " ".join(col for col in line if col and col.strip())
