"""
Title Parser

The first grid line is always the title. Besides the title text it can carry
a time cap ("15 min cap"), an EMOM interval ("E5MOM", "3 min EMOM") and a
sets/rounds scheme ("2 sets, 3 rds").
"""

import logging
import re

from .grid import join_columns
from .models import Grid, SetsInfo, TitleMetadata
from .patterns import (
    DEFAULT_DELIMITER,
    EMOM_CODE_PATTERN,
    EMOM_MINUTES_PATTERN,
    SETS_INFO_PATTERN,
    TIME_CAP_PATTERN,
    TYPE_CODE_TITLE_PATTERN,
)

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Workout"

# The extraction model reads a handwritten "E" as a pound sign ("£5MOM")
OCR_GLYPH_FIXES = {
    "£": "E",
}


def clean_title(text: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Strip delimiters, collapse whitespace and repair known glyph swaps"""
    title = " ".join((text or "").replace(delimiter, " ").split())
    for bad, good in OCR_GLYPH_FIXES.items():
        title = title.replace(bad, good)
    if len(title) < 2:
        return FALLBACK_TITLE
    return title


def parse_title(grid: Grid, delimiter: str = DEFAULT_DELIMITER) -> TitleMetadata:
    """
    Extract the title and its metadata from grid[0].

    The metadata extractions are independent; a title may match several.

    Args:
        grid: Full grid, title line first
        delimiter: Column separator to strip from the title

    Returns:
        TitleMetadata with the cleaned title (never empty)
    """
    raw = join_columns(grid[0]) if grid else ""
    title = clean_title(raw, delimiter)
    result = TitleMetadata(title=title)

    cap = TIME_CAP_PATTERN.search(title)
    if cap:
        result.time_cap_seconds = int(cap.group(1)) * 60

    emom = EMOM_CODE_PATTERN.search(title) or EMOM_MINUTES_PATTERN.search(title)
    if emom:
        result.emom_period_minutes = int(emom.group(1))
    elif re.search(r'emom', title, re.IGNORECASE):
        result.emom_period_minutes = 1

    sets = SETS_INFO_PATTERN.search(title)
    if sets:
        result.sets_info = SetsInfo(sets=int(sets.group(1)), rounds=int(sets.group(2)))

    result.is_type_code = bool(TYPE_CODE_TITLE_PATTERN.match(title))

    logger.debug(
        f"Title parsed: {title!r} cap={result.time_cap_seconds} "
        f"emom={result.emom_period_minutes} sets={result.sets_info}"
    )
    return result
