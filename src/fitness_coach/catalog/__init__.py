"""Exercise catalog index, search and sources."""

from fitness_coach.catalog.index import ExerciseCatalog, unwrap_exercise_list
from fitness_coach.catalog.search import matches, normalize, search
from fitness_coach.catalog.source import (
    fetch_catalog,
    fetch_catalog_async,
    load_catalog_file,
    load_default_catalog,
)

__all__ = [
    "ExerciseCatalog",
    "unwrap_exercise_list",
    "search",
    "matches",
    "normalize",
    "load_catalog_file",
    "fetch_catalog",
    "fetch_catalog_async",
    "load_default_catalog",
]
