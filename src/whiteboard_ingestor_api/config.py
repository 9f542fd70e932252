"""Configuration settings for the whiteboard ingestor API."""
import os
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Parsing defaults handed to the parser as explicit options
    OCR_DELIMITER: str = "|"
    DEFAULT_TOKEN_CONFIDENCE: float = 0.95

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # Parsing
        delimiter = os.getenv("OCR_DELIMITER", "|")
        self.OCR_DELIMITER = delimiter if len(delimiter) == 1 else "|"
        try:
            confidence = float(os.getenv("DEFAULT_TOKEN_CONFIDENCE", "0.95"))
        except ValueError:
            confidence = 0.95
        self.DEFAULT_TOKEN_CONFIDENCE = min(1.0, max(0.0, confidence))

        # CORS
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        else:
            self.CORS_ORIGINS = list(Settings.CORS_ORIGINS)


settings = Settings()
