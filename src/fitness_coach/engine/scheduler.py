"""Flatten a multi-week program into a dated schedule."""

import logging
from datetime import date, timedelta
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from fitness_coach.models.program import Program, ScheduleEntry
from fitness_coach.utils.formatting import format_day_summary

logger = logging.getLogger(__name__)


class Schedule:
    """
    Date-ordered program days with a date lookup.

    A schedule is built once from a program and never edited; loading another
    program builds a new one.
    """

    def __init__(self, entries: Optional[list[ScheduleEntry]] = None):
        self._entries: tuple[ScheduleEntry, ...] = tuple(entries or ())
        self._by_date: dict[date, ScheduleEntry] = {entry.date: entry for entry in self._entries}

    @property
    def entries(self) -> tuple[ScheduleEntry, ...]:
        return self._entries

    def entry_for(self, day: date) -> Optional[ScheduleEntry]:
        """Entry scheduled on the given date, or None."""
        return self._by_date.get(day)

    def next_entry(self, from_date: date) -> Optional[ScheduleEntry]:
        """First entry on or after the date; the first entry if all are past."""
        if not self._entries:
            return None
        for entry in self._entries:
            if entry.date >= from_date:
                return entry
        return self._entries[0]

    def default_entry(self, today: date) -> Optional[ScheduleEntry]:
        """Today's entry, falling back to the first day of the program."""
        if not self._entries:
            return None
        return self.entry_for(today) or self._entries[0]

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ScheduleEntry:
        return self._entries[index]


def coerce_program(program: Any) -> Optional[Program]:
    """Validate a raw program mapping; None when it has no usable plan."""
    if isinstance(program, Program):
        return program
    if not isinstance(program, dict) or not isinstance(program.get("plan"), list):
        return None
    try:
        return Program.model_validate(program)
    except ValidationError as e:
        logger.warning("Program could not be parsed (%d errors); schedule is empty", e.error_count())
        return None


def build_schedule(program: Any, start_date: date) -> Schedule:
    """
    Flatten a program into consecutive dated entries.

    Weeks are ordered by week number and days by day_index, then dated one
    day apart starting at start_date. Gaps in the numbering are ignored: the
    mapping is positional.

    Args:
        program: Program model or raw program mapping
        start_date: Date of the first program day

    Returns:
        The schedule; empty for a missing or malformed program
    """
    parsed = coerce_program(program)
    if parsed is None:
        return Schedule()

    entries: list[ScheduleEntry] = []
    cursor = start_date
    for week in sorted(parsed.plan, key=lambda w: w.week or 0):
        for day in sorted(week.days, key=lambda d: d.day_index or 0):
            entries.append(
                ScheduleEntry(
                    date=cursor,
                    week=week.week,
                    day_index=day.day_index,
                    label=day.label,
                    focus=day.focus,
                    summary=format_day_summary(day),
                )
            )
            cursor += timedelta(days=1)

    logger.info("Built schedule with %d days starting %s", len(entries), start_date.isoformat())
    return Schedule(entries)


def entry_for_date(schedule: Schedule, day: date) -> Optional[ScheduleEntry]:
    """Entry scheduled on the given date, or None."""
    return schedule.entry_for(day)
