"""Pydantic models for generated workout sessions and their history."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from fitness_coach.models.coaching import ProfileSnapshot


class SessionStatus(str, Enum):
    """Lifecycle states of a workout session."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# Position of each status in the one-way lifecycle
STATUS_ORDER = {
    SessionStatus.PLANNED.value: 0,
    SessionStatus.IN_PROGRESS.value: 1,
    SessionStatus.COMPLETED.value: 2,
}


def status_rank(status: "SessionStatus | str") -> int:
    """Return the lifecycle position of a status."""
    return STATUS_ORDER[SessionStatus(status).value]


class WarmupItem(BaseModel):
    """A fixed warm-up movement."""

    name: str
    sets: int = 1
    reps: str
    rest_sec: int = Field(default=0, alias="restSec")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class CorrectiveExercise(WarmupItem):
    """A remedial exercise chosen from assessment findings."""

    cue: str = ""


class PerformedSet(BaseModel):
    """One logged set of a slot."""

    set_number: int = Field(alias="set")
    reps: Optional[int] = None
    weight: Optional[float] = None
    notes: str = ""

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class ExerciseSlot(BaseModel):
    """A strength or finisher slot bound to one catalog exercise."""

    slot: str
    id: Optional[str] = None
    name: str
    equipment: Optional[str] = None
    sets: int
    reps: str
    rest_sec: int = Field(default=0, alias="restSec")
    cue: str = ""
    performed: list[PerformedSet] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class SessionBlocks(BaseModel):
    """The four blocks of a daily workout."""

    warmup: list[WarmupItem] = Field(default_factory=list)
    corrective: list[CorrectiveExercise] = Field(default_factory=list)
    strength: list[ExerciseSlot] = Field(default_factory=list)
    finisher: list[ExerciseSlot] = Field(default_factory=list)


class CurrentPointer(BaseModel):
    """Where coaching resumes within a session."""

    block: str = "strength"
    slot: str = "A1"
    set_index: int = Field(default=1, alias="setIndex")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class WorkoutSession(BaseModel):
    """One day's generated workout with lifecycle status."""

    id: Optional[str] = None
    date: date
    status: SessionStatus = Field(default=SessionStatus.PLANNED, validate_default=True)
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")
    source: str = "exercise_db_v1"
    profile_snapshot: ProfileSnapshot = Field(default_factory=ProfileSnapshot, alias="profileSnapshot")
    blocks: SessionBlocks = Field(default_factory=SessionBlocks)
    current: CurrentPointer = Field(default_factory=CurrentPointer)
    coaching_focus: str = Field(default="", alias="coachingFocus")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    coach_note: Optional[str] = Field(default=None, alias="coachNote")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True
        use_enum_values = True
        validate_assignment = True

    def to_storage(self) -> dict:
        """Serialise with the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)

    def find_slot(self, block: str, slot: str) -> Optional[ExerciseSlot]:
        """Look up a strength or finisher slot by name."""
        slots = self.blocks.strength if block == "strength" else self.blocks.finisher
        for candidate in slots:
            if candidate.slot == slot:
                return candidate
        return None


class WeeklyStats(BaseModel):
    """Planned versus completed sessions for one Monday-start week."""

    week_start: date
    week_end: date  # exclusive
    planned: int = 0
    completed: int = 0
    consistency: int = 0  # percent
