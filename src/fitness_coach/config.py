"""Configuration management for the fitness coach engine."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project root (parent of src/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Config:
    """Application configuration."""

    # Storage
    DEFAULT_USER_ID: str = os.getenv("FITNESS_COACH_USER", "guest")
    HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "90"))

    # Exercise catalog
    EXERCISE_INDEX_PATH: str = os.getenv("EXERCISE_INDEX_PATH", "")
    EXERCISE_INDEX_URL: str = os.getenv("EXERCISE_INDEX_URL", "")

    # Coaching / program collaborator
    COACH_BASE_URL: str = os.getenv("COACH_BASE_URL", "")
    COACH_TIMEOUT: float = float(os.getenv("COACH_TIMEOUT", "30"))

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command-line and server entry points."""
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
