"""
Test fixtures for whiteboard-ingestor-api.

Parsing is pure and offline, so fixtures are just the app client and a few
representative whiteboards.
"""

import sys
from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import whiteboard_ingestor_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from whiteboard_ingestor_api.main import app


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def api_client() -> TestClient:
    """Shared FastAPI TestClient for whiteboard-ingestor-api."""
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Sample Whiteboards
# ---------------------------------------------------------------------------


@pytest.fixture
def amrap_lines() -> List[str]:
    """AMRAP with a movement, a rest and a rounds + reps result."""
    return ["AMRAP 10 min", "30 | Double Unders", "Rest | 1:00", "8 + 25"]


@pytest.fixture
def round_times_lines() -> List[str]:
    """Rounds workout with one labeled time per round."""
    return ["5 Rounds", "10 Deadlifts", "Round 1: 2:15", "Round 2: 2:08"]


@pytest.fixture
def chipper_text() -> str:
    """Raw multi-line text as the extraction step returns it."""
    return "\n".join([
        "Filthy Fifty Chipper",
        "50 | Box Jumps | 24in",
        "50 || Jumping Pull-ups",
        "50 | KBS | 35lbs",
        "",
        "Time: 24:10",
    ])
