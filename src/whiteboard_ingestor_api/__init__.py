"""Structured workout extraction from whiteboard photo text."""
from .parsers import ParseOptions, WhiteboardParser, parse_lines, parse_raw_text

__version__ = "0.1.0"

__all__ = [
    "ParseOptions",
    "WhiteboardParser",
    "parse_lines",
    "parse_raw_text",
    "__version__",
]
