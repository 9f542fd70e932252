"""Canonical names for movements written in whiteboard shorthand.

Coaches abbreviate heavily ("DU", "T2B", "KBS"). Lookups are whole-name and
case-insensitive; anything unknown comes back with whitespace cleaned up.
"""
import re
from typing import Dict

MOVEMENT_ABBREVIATIONS: Dict[str, str] = {
    "du": "Double Unders",
    "dus": "Double Unders",
    "su": "Single Unders",
    "sus": "Single Unders",
    "t2b": "Toes to Bar",
    "ttb": "Toes to Bar",
    "k2e": "Knees to Elbows",
    "wb": "Wall Balls",
    "wbs": "Wall Balls",
    "kbs": "Kettlebell Swings",
    "kb swings": "Kettlebell Swings",
    "hspu": "Handstand Push-ups",
    "c2b": "Chest to Bar Pull-ups",
    "ctb": "Chest to Bar Pull-ups",
    "mu": "Muscle-ups",
    "bmu": "Bar Muscle-ups",
    "rmu": "Ring Muscle-ups",
    "ohs": "Overhead Squats",
    "dl": "Deadlifts",
    "dls": "Deadlifts",
    "sdhp": "Sumo Deadlift High Pulls",
    "pc": "Power Cleans",
    "hpc": "Hang Power Cleans",
    "sq cl": "Squat Cleans",
    "ps": "Power Snatches",
    "pp": "Push Press",
    "pj": "Push Jerks",
    "s2oh": "Shoulder to Overhead",
    "stoh": "Shoulder to Overhead",
    "g2oh": "Ground to Overhead",
    "bj": "Box Jumps",
    "bjo": "Box Jump Overs",
    "bbjo": "Burpee Box Jump Overs",
    "bfb": "Bar Facing Burpees",
    "ghd": "GHD Sit-ups",
    "abmat": "AbMat Sit-ups",
    "fs": "Front Squats",
    "bs": "Back Squats",
    "ring dips": "Ring Dips",
    "cal row": "Calorie Row",
    "cal bike": "Calorie Bike",
    "ski": "Ski Erg",
}

_WS_RE = re.compile(r"\s+")


def _lookup_key(name: str) -> str:
    return _WS_RE.sub(" ", name).strip().rstrip(".").lower()


def normalize_movement_name(name: str) -> str:
    """Return the canonical movement name for whiteboard text.

    Args:
        name: Exercise text as written ("DU", "t2b", "Wall  Balls").

    Returns:
        Canonical name when the text is a known abbreviation, otherwise the
        text with whitespace collapsed.
    """
    cleaned = _WS_RE.sub(" ", name or "").strip()
    return MOVEMENT_ABBREVIATIONS.get(_lookup_key(cleaned), cleaned)
