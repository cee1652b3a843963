"""Shared fixtures for the fitness coach tests."""

from datetime import datetime

import pytest

from fitness_coach.catalog.index import ExerciseCatalog

SAMPLE_EXERCISES = [
    {
        "id": "push-up",
        "name": "Pushups",
        "category": "strength",
        "equipment": "body only",
        "primaryMuscles": ["chest"],
        "secondaryMuscles": ["shoulders", "triceps"],
    },
    {
        "id": "db-row",
        "name": "Dumbbell Row",
        "category": "strength",
        "equipment": "dumbbell",
        "primaryMuscles": ["lats"],
        "secondaryMuscles": ["biceps"],
    },
    {
        "id": "goblet-squat",
        "name": "Goblet Squat",
        "category": "strength",
        "equipment": "kettlebells",
        "primaryMuscles": ["quadriceps"],
        "secondaryMuscles": ["glutes"],
    },
    {
        "id": "cable-fly",
        "name": "Cable Fly",
        "category": "strength",
        "equipment": "cable",
        "primaryMuscles": ["chest"],
    },
    {
        "id": "childs-pose",
        "name": "Child's Pose",
        "category": "stretching",
        "equipment": "body only",
        "primaryMuscles": ["lower back"],
    },
    {
        "id": "bike",
        "name": "Recumbent Bike",
        "category": "cardio",
        "equipment": "machine",
        "primaryMuscles": ["quadriceps"],
    },
]


PUSH_PULL = {
    "title": "Starter",
    "weeks": 1,
    "days_per_week": 2,
    "plan": [
        {
            "week": 1,
            "days": [
                {"day_index": 1, "label": "Push Day", "focus": "Chest"},
                {"day_index": 2, "label": "Pull Day", "focus": "Back"},
            ],
        }
    ],
}


class FixedClock:
    """Clock returning a settable time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point all storage at an isolated temporary directory."""
    monkeypatch.setenv("FITNESS_COACH_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def catalog():
    """Small catalog covering every generator pool."""
    return ExerciseCatalog(SAMPLE_EXERCISES)
