"""Data models for whiteboard workout extraction."""
from enum import Enum
from typing import List, Optional, Literal, Union

from pydantic import BaseModel, Field


class WorkoutType(str, Enum):
    """Workout type labels inferred from title and structure."""
    AMRAP = "AMRAP"
    EMOM = "EMOM"
    CHIPPER = "Chipper"
    ROUNDS_FOR_TIME = "Rounds for Time"
    FOR_TIME = "For Time"
    FOR_REPS = "For Reps"
    LIFT = "Lift"
    UNKNOWN = "Unknown"


DescriptiveKind = Literal["rest", "repeat", "instruction"]
ScoreKind = Literal["time", "reps", "weight"]


class Movement(BaseModel):
    """A single movement line: amount, exercise and optional unit."""
    amount: str = Field(..., description="'21', '21-15-9', '5x5'")
    exercise: str = Field(..., description="Normalized exercise name")
    unit: Optional[str] = None


class Descriptive(BaseModel):
    """Non-movement instruction such as rest, repeat or 'then'."""
    text: str
    kind: Optional[DescriptiveKind] = None
    duration_seconds: Optional[int] = None


class MovementElement(BaseModel):
    type: Literal["movement"] = "movement"
    movement: Movement


class DescriptiveElement(BaseModel):
    type: Literal["descriptive"] = "descriptive"
    descriptive: Descriptive


WorkoutElement = Union[MovementElement, DescriptiveElement]


class TimeScoreMetadata(BaseModel):
    time_in_seconds: int
    start_time: Optional[str] = None  # "0:00" for start/stop lines
    stop_time: Optional[str] = None
    round_time: Optional[int] = None


class RepsScoreMetadata(BaseModel):
    rounds: Optional[int] = None
    reps_into_next_round: Optional[int] = None
    # Simplified: rounds + reps_into_next_round, not a true rep count
    total_reps: int = 0


class WeightScoreMetadata(BaseModel):
    weight: int
    unit: str = "lbs"


ScoreMetadata = Union[TimeScoreMetadata, RepsScoreMetadata, WeightScoreMetadata]


class ScoreElement(BaseModel):
    """A single result line with its generated display name."""
    name: str = Field(..., description="'Round 2', 'Total', 'Finish Time', 'Set 1', 'Weight', 'Time Cap'")
    kind: ScoreKind
    value: str = Field(..., description="Display value, e.g. '2:15' or '8 + 25'")
    metadata: ScoreMetadata


class WorkoutExtraction(BaseModel):
    """Structured workout parsed from whiteboard text."""
    title: str = "Workout"
    description: str = ""
    workout_type: WorkoutType = WorkoutType.UNKNOWN
    elements: List[WorkoutElement] = Field(default_factory=list)
    scores: List[ScoreElement] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0, le=1)
    privacy: Literal["public"] = "public"
    # Normalized input lines kept for debugging
    raw_text: List[str] = Field(default_factory=list)

    class Config:
        use_enum_values = True

    @property
    def movements(self) -> List[Movement]:
        return [el.movement for el in self.elements if isinstance(el, MovementElement)]


class ExtractedData(BaseModel):
    """Flat summary kept for storage records written before structured extraction."""
    type: Literal["time", "reps", "unknown"] = "unknown"
    rounds: Optional[int] = None
    movements: List[str] = Field(default_factory=list)
    times: Optional[List[int]] = None  # In seconds
    reps: Optional[List[int]] = None
