"""Exercise catalog sources: a local index file or a remote index URL."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from fitness_coach.catalog.index import ExerciseCatalog, unwrap_exercise_list
from fitness_coach.config import Config
from fitness_coach.storage.base import get_data_dir

logger = logging.getLogger(__name__)


def load_catalog_file(file_path: Path) -> list[Any]:
    """
    Load raw exercise records from a local index file.

    Args:
        file_path: Path to index.json (a list or an ``{"exercises": [...]}`` wrapper)

    Returns:
        Raw exercise records, or an empty list if the file is missing or unreadable
    """
    if not file_path.exists():
        logger.warning("Exercise index not found: %s", file_path)
        return []
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Exercise index unreadable (%s): %s", file_path, e)
        return []
    return unwrap_exercise_list(data)


def fetch_catalog(
    url: str,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> list[Any]:
    """
    Fetch raw exercise records from a URL.

    Any failure (network error, bad status, invalid JSON) yields an empty list.

    Args:
        url: URL of the exercise index
        timeout: Request timeout in seconds (defaults to COACH_TIMEOUT)
        client: Optional httpx client to reuse

    Returns:
        Raw exercise records
    """
    own_client = client is None
    http = client or httpx.Client(timeout=timeout or Config.COACH_TIMEOUT)
    try:
        response = http.get(url, headers={"Cache-Control": "no-store"})
        if response.status_code != 200:
            logger.warning("Exercise index fetch failed (%s): %s", response.status_code, url)
            return []
        return unwrap_exercise_list(response.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Exercise index fetch failed: %s", e)
        return []
    finally:
        if own_client:
            http.close()


async def fetch_catalog_async(
    url: str,
    timeout: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> list[Any]:
    """Awaitable variant of fetch_catalog."""
    own_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout or Config.COACH_TIMEOUT)
    try:
        response = await http.get(url, headers={"Cache-Control": "no-store"})
        if response.status_code != 200:
            logger.warning("Exercise index fetch failed (%s): %s", response.status_code, url)
            return []
        return unwrap_exercise_list(response.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Exercise index fetch failed: %s", e)
        return []
    finally:
        if own_client:
            await http.aclose()


def default_index_path() -> Path:
    """Local exercise index: EXERCISE_INDEX_PATH, else exercise-db/index.json in the data dir."""
    if Config.EXERCISE_INDEX_PATH:
        return Path(Config.EXERCISE_INDEX_PATH)
    return get_data_dir() / "exercise-db" / "index.json"


def load_default_catalog() -> ExerciseCatalog:
    """
    Build the catalog from the configured source.

    Uses EXERCISE_INDEX_URL when set, otherwise the local index file. A
    failed load leaves the catalog empty.
    """
    if Config.EXERCISE_INDEX_URL:
        records = fetch_catalog(Config.EXERCISE_INDEX_URL)
    else:
        records = load_catalog_file(default_index_path())
    return ExerciseCatalog(records)
