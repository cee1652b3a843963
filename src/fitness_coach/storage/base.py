"""Base storage class with data directory configuration."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from fitness_coach.config import PROJECT_ROOT

logger = logging.getLogger(__name__)


def get_data_dir() -> Path:
    """
    Get the data directory for storing local files.

    Uses FITNESS_COACH_DATA_DIR environment variable if set, otherwise defaults
    to the project root directory.

    Returns:
        Path to the data directory
    """
    env_dir = os.environ.get("FITNESS_COACH_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return PROJECT_ROOT


def safe_key(value: str) -> str:
    """Make a user or record id usable as part of a file name."""
    return re.sub(r"[^A-Za-z0-9._-]", "_", value) or "_"


class BaseStorage:
    """Key/value JSON store: one file per key inside a data subdirectory."""

    def __init__(self, subdirectory: str):
        """
        Initialize storage with a subdirectory name.

        Args:
            subdirectory: Name of the subdirectory within the data directory
        """
        self.data_dir = get_data_dir() / subdirectory
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        return self.data_dir / f"{safe_key(key)}.json"

    def _load_json(self, file_path: Path) -> dict[str, Any] | list[Any] | None:
        """Load JSON from a file, returning None if it doesn't exist or is corrupt."""
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Ignoring unreadable data file %s: %s", file_path, e)
            return None

    def _save_json(self, file_path: Path, data: Any) -> None:
        """Save data as JSON to a file."""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str, ensure_ascii=False)

    def read(self, key: str, default: Any = None) -> Any:
        """Value stored under key, or default when absent or unparseable."""
        value = self._load_json(self._key_path(key))
        return default if value is None else value

    def write(self, key: str, value: Any) -> None:
        """Store a JSON-serialisable value under key."""
        self._save_json(self._key_path(key), value)

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        file_path = self._key_path(key)
        if file_path.exists():
            file_path.unlink()
            return True
        return False
