"""Utility functions."""
import re
from typing import Optional

_CLOCK_TIME_RE = re.compile(r"^(\d{1,2}):?(\d{2})$")
_CLOCK_TIME_SEARCH_RE = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)")
_DURATION_RE = re.compile(r"^(\d+)\s*(s|sec|secs|seconds?|m|min|mins|minutes?)$", re.I)


def leading_int(s: Optional[str]) -> Optional[int]:
    """Read the integer a string starts with: "25 reps" -> 25, "abc" -> None."""
    if not s:
        return None
    match = re.match(r"\s*(\d+)", s)
    return int(match.group(1)) if match else None


def parse_time_to_seconds(text: Optional[str]) -> Optional[int]:
    """
    Convert a whiteboard time to seconds.

    Accepts "M:SS", "MM:SS" and the colon-less "MSS"/"MMSS" that handwriting
    often produces ("406" -> 4:06). Seconds must be below 60.

    Returns:
        Total seconds, or None when the text is not a time
    """
    if text is None:
        return None
    match = _CLOCK_TIME_RE.match(text.strip())
    if not match:
        return None
    minutes, seconds = int(match.group(1)), int(match.group(2))
    if seconds >= 60:
        return None
    return minutes * 60 + seconds


def find_clock_time(text: Optional[str]) -> Optional[int]:
    """Seconds for the first "M:SS" found anywhere in text, or None."""
    if not text:
        return None
    for match in _CLOCK_TIME_SEARCH_RE.finditer(text):
        seconds = int(match.group(2))
        if seconds < 60:
            return int(match.group(1)) * 60 + seconds
    return None


def format_seconds_to_time(total_seconds: int) -> str:
    """Format seconds as "M:SS" (135 -> "2:15")."""
    sign = "-" if total_seconds < 0 else ""
    minutes, seconds = divmod(abs(int(total_seconds)), 60)
    return f"{sign}{minutes}:{seconds:02d}"


def parse_duration_to_seconds(text: Optional[str]) -> Optional[int]:
    """Parse a rest-style duration: "1:30", "90s", "2 min"."""
    if not text:
        return None
    text = text.strip()
    clock = find_clock_time(text)
    if clock is not None:
        return clock
    match = _DURATION_RE.match(text)
    if not match:
        return None
    value = int(match.group(1))
    if match.group(2).lower().startswith("m"):
        return value * 60
    return value
