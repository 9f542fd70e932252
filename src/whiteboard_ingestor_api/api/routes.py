"""
Whiteboard parse endpoints

POST /parse/whiteboard        raw text from the extraction step
POST /parse/whiteboard/lines  pre-split lines
GET  /health, GET /version
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from whiteboard_ingestor_api import __version__
from whiteboard_ingestor_api.config import settings
from whiteboard_ingestor_api.models import ExtractedData, WorkoutExtraction
from whiteboard_ingestor_api.parsers import ParseOptions, WhiteboardParser
from whiteboard_ingestor_api.services.extraction_summary import to_extracted_data

logger = logging.getLogger(__name__)

router = APIRouter()

BUILD_TIMESTAMP = datetime.now().isoformat()

# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------


class ParseWhiteboardRequest(BaseModel):
    """Request model for POST /parse/whiteboard"""
    text: str = Field(..., max_length=50000, description="Whiteboard text, one line per row")
    delimiter: Optional[str] = Field(
        default=None, min_length=1, max_length=1,
        description="Column separator; defaults to the configured OCR delimiter",
    )


class ParseWhiteboardLinesRequest(BaseModel):
    """Request model for POST /parse/whiteboard/lines"""
    lines: List[str] = Field(..., max_length=2000, description="Ordered whiteboard lines")
    delimiter: Optional[str] = Field(default=None, min_length=1, max_length=1)


class ParseWhiteboardResponse(BaseModel):
    extraction: WorkoutExtraction
    summary: ExtractedData


def _parser_for(delimiter: Optional[str]) -> WhiteboardParser:
    try:
        options = ParseOptions(
            delimiter=delimiter or settings.OCR_DELIMITER,
            default_token_confidence=settings.DEFAULT_TOKEN_CONFIDENCE,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid parse options: {e.errors()[0]['msg']}")
    return WhiteboardParser(options)


def _respond(extraction: WorkoutExtraction) -> ParseWhiteboardResponse:
    return ParseWhiteboardResponse(extraction=extraction, summary=to_extracted_data(extraction))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/parse/whiteboard", response_model=ParseWhiteboardResponse)
def parse_whiteboard(request: ParseWhiteboardRequest):
    """
    Parse whiteboard text into a structured workout.

    Columns within a line are separated by the delimiter ("30 | Double Unders").
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    parser = _parser_for(request.delimiter)
    logger.info(f"Parsing whiteboard text ({len(request.text)} chars)")
    return _respond(parser.parse_raw_text(request.text))


@router.post("/parse/whiteboard/lines", response_model=ParseWhiteboardResponse)
def parse_whiteboard_lines(request: ParseWhiteboardLinesRequest):
    """Parse pre-split whiteboard lines; the first non-blank line is the title."""
    parser = _parser_for(request.delimiter)
    logger.info(f"Parsing {len(request.lines)} whiteboard lines")
    return _respond(parser.parse_lines(request.lines))


# ---------------------------------------------------------------------------
# Version / health
# ---------------------------------------------------------------------------


@router.get("/version")
def get_version():
    """Get API version and build information."""
    return JSONResponse({
        "service": "whiteboard-ingestor-api",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "build_timestamp": BUILD_TIMESTAMP,
    })


@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}
