"""Scheduling, workout generation and session lifecycle."""

from fitness_coach.engine.assessment import correctives_for
from fitness_coach.engine.generator import generate
from fitness_coach.engine.lifecycle import SessionManager, weekly_stats
from fitness_coach.engine.scheduler import Schedule, build_schedule, entry_for_date
from fitness_coach.engine.selection import (
    CallableSelection,
    FirstSelection,
    RandomSelection,
    WorkoutPolicy,
)

__all__ = [
    "correctives_for",
    "generate",
    "SessionManager",
    "weekly_stats",
    "Schedule",
    "build_schedule",
    "entry_for_date",
    "WorkoutPolicy",
    "RandomSelection",
    "FirstSelection",
    "CallableSelection",
]
