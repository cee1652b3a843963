"""In-memory index over the exercise catalog."""

import logging
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError

from fitness_coach.models.exercise import ExerciseRecord

logger = logging.getLogger(__name__)


def unwrap_exercise_list(data: Any) -> list[Any]:
    """Accept either a flat list or an ``{"exercises": [...]}`` wrapper."""
    if isinstance(data, (list, tuple)):
        return list(data)
    if isinstance(data, dict):
        exercises = data.get("exercises")
        return list(exercises) if isinstance(exercises, list) else []
    if isinstance(data, Iterator):
        return list(data)
    return []


class ExerciseCatalog:
    """
    Queryable view over a list of exercise records.

    The record list and the id lookup table are always replaced together, so
    readers never observe a half-loaded catalog.
    """

    def __init__(self, records: Optional[Iterable[Any]] = None):
        """
        Initialize the catalog.

        Args:
            records: Optional initial records (raw mappings or ExerciseRecord)
        """
        self._records: tuple[ExerciseRecord, ...] = ()
        self._by_id: dict[str, ExerciseRecord] = {}
        if records is not None:
            self.load(records)

    def load(self, records: Any) -> int:
        """
        Replace the catalog contents.

        Records without an id remain searchable but are left out of the id
        table. When an id repeats, the later record wins the lookup.

        Args:
            records: Flat list of records or an ``{"exercises": [...]}`` wrapper

        Returns:
            Number of records loaded
        """
        parsed: list[ExerciseRecord] = []
        skipped = 0
        for raw in unwrap_exercise_list(records):
            if isinstance(raw, ExerciseRecord):
                parsed.append(raw)
                continue
            if not isinstance(raw, dict):
                skipped += 1
                continue
            try:
                parsed.append(ExerciseRecord.model_validate(raw))
            except ValidationError as e:
                skipped += 1
                logger.warning("Skipping malformed exercise %r: %s", raw.get("id"), e.error_count())

        by_id: dict[str, ExerciseRecord] = {}
        for record in parsed:
            if record.id:
                by_id[record.id] = record

        # Swap both views at once
        self._records, self._by_id = tuple(parsed), by_id

        if skipped:
            logger.warning("Skipped %d malformed exercise entries", skipped)
        logger.info("Exercise catalog loaded (%d)", len(parsed))
        return len(parsed)

    def lookup(self, exercise_id: str) -> Optional[ExerciseRecord]:
        """Get an exercise by id, or None when it is not in the catalog."""
        return self._by_id.get(exercise_id)

    @property
    def records(self) -> tuple[ExerciseRecord, ...]:
        """All records in catalog order."""
        return self._records

    def __iter__(self) -> Iterator[ExerciseRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
