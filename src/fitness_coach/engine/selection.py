"""Pluggable exercise selection policies for workout generation."""

import random
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from fitness_coach.models.exercise import ExerciseRecord

# Catalog equipment tags for bodyweight, dumbbell, resistance band, kettlebell, barbell, machine
DEFAULT_EQUIPMENT_ALLOWED: tuple[str, ...] = (
    "body only",
    "dumbbell",
    "bands",
    "kettlebells",
    "barbell",
    "machine",
)


class SelectionPolicy(Protocol):
    """Picks one exercise from a pool, or None for an empty pool."""

    def pick(self, pool: Sequence[ExerciseRecord]) -> Optional[ExerciseRecord]: ...


class RandomSelection:
    """Uniform random pick; pass a seed for reproducible workouts."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def pick(self, pool: Sequence[ExerciseRecord]) -> Optional[ExerciseRecord]:
        if not pool:
            return None
        return self.rng.choice(pool)


class FirstSelection:
    """Always picks the first exercise in catalog order."""

    def pick(self, pool: Sequence[ExerciseRecord]) -> Optional[ExerciseRecord]:
        return pool[0] if pool else None


class CallableSelection:
    """Delegates to an explicit pick function."""

    def __init__(self, fn: Callable[[Sequence[ExerciseRecord]], Optional[ExerciseRecord]]):
        self.fn = fn

    def pick(self, pool: Sequence[ExerciseRecord]) -> Optional[ExerciseRecord]:
        if not pool:
            return None
        return self.fn(pool)


@dataclass
class WorkoutPolicy:
    """Constraints and selection strategy for workout generation."""

    equipment_allowed: tuple[str, ...] = DEFAULT_EQUIPMENT_ALLOWED
    selector: SelectionPolicy = field(default_factory=RandomSelection)
