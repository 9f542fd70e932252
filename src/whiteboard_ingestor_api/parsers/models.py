"""
Parser Models

Pydantic models shared by the whiteboard parsing stages: parse options,
title metadata and the OCR line/token data the parser consumes.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .patterns import DEFAULT_DELIMITER

# One delimiter-split line of OCR output; every column is non-empty
GridLine = List[str]
Grid = List[GridLine]

# Single bare numbers at or above this are read as MMSS times ("130" -> 1:30),
# below it as rep counts. Most rep counts on a board are under 60.
BARE_NUMBER_TIME_THRESHOLD = 60

# Results of an hour or more are not workout times
MAX_TIME_SECONDS = 3600


class ParseOptions(BaseModel):
    """Explicit knobs for one parse call"""
    delimiter: str = Field(default=DEFAULT_DELIMITER, description="Column separator used by the OCR step")
    default_token_confidence: float = Field(default=0.95, ge=0, le=1)
    bare_number_time_threshold: int = Field(default=BARE_NUMBER_TIME_THRESHOLD, ge=0)

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1 or value.isspace() or value.isalnum():
            raise ValueError("delimiter must be a single non-alphanumeric character")
        return value


class SetsInfo(BaseModel):
    sets: int
    rounds: int


class TitleMetadata(BaseModel):
    """Title plus metadata pulled out of the first line"""
    title: str = "Workout"
    time_cap_seconds: Optional[int] = None
    emom_period_minutes: Optional[int] = None
    sets_info: Optional[SetsInfo] = None
    # Title is only a type code ("E5MOM", "AMRAP") and may be replaced
    is_type_code: bool = False


class OCRWord(BaseModel):
    text: str
    confidence: float = Field(default=0.95, ge=0, le=1)


class OCRData(BaseModel):
    """Text lines from the extraction step plus per-token confidence"""
    text: str = ""
    words: List[OCRWord] = Field(default_factory=list)
    lines: List[str] = Field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: List[str], token_confidence: float = 0.95) -> "OCRData":
        """Build OCR data from already-normalized lines, one token per word"""
        text_lines = [line.strip() for line in lines if line and line.strip()]
        words = [
            OCRWord(text=word, confidence=token_confidence)
            for line in text_lines
            for word in line.split()
        ]
        return cls(text="\n".join(text_lines), words=words, lines=text_lines)
