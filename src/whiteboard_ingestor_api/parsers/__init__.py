"""Whiteboard text parsing pipeline."""
from .models import OCRData, OCRWord, ParseOptions, TitleMetadata
from .whiteboard_parser import WhiteboardParser, parse_lines, parse_raw_text

__all__ = [
    "OCRData",
    "OCRWord",
    "ParseOptions",
    "TitleMetadata",
    "WhiteboardParser",
    "parse_lines",
    "parse_raw_text",
]
