"""Pydantic models for the fitness coach engine."""

from fitness_coach.models.coaching import AthleteProfile, ProfileSnapshot
from fitness_coach.models.exercise import ExerciseRecord, SearchFacets
from fitness_coach.models.program import Block, DayPlan, Program, ScheduleEntry, WeekPlan
from fitness_coach.models.session import (
    CorrectiveExercise,
    CurrentPointer,
    ExerciseSlot,
    PerformedSet,
    SessionBlocks,
    SessionStatus,
    WarmupItem,
    WeeklyStats,
    WorkoutSession,
)

__all__ = [
    # Exercise catalog models
    "ExerciseRecord",
    "SearchFacets",
    # Program models
    "Block",
    "DayPlan",
    "WeekPlan",
    "Program",
    "ScheduleEntry",
    # Session models
    "SessionStatus",
    "WarmupItem",
    "CorrectiveExercise",
    "PerformedSet",
    "ExerciseSlot",
    "SessionBlocks",
    "CurrentPointer",
    "WorkoutSession",
    "WeeklyStats",
    # Coaching models
    "AthleteProfile",
    "ProfileSnapshot",
]
