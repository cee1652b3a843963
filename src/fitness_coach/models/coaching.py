"""Pydantic models for athlete profile data."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _as_list(value: Any) -> list[Any]:
    # Profiles come from loose JSON: null, a bare string or a list
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class ProfileSnapshot(BaseModel):
    """The profile fields captured on a session at generation time."""

    name: str = ""
    goal: str = ""
    injuries: list[Any] = Field(default_factory=list)

    @field_validator("name", "goal", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("injuries", mode="before")
    @classmethod
    def _coerce_injuries(cls, value: Any) -> list[Any]:
        return _as_list(value)


class AthleteProfile(BaseModel):
    """Athlete profile as supplied by the caller."""

    user_id: str = "guest"
    name: Optional[str] = None
    display_name: Optional[str] = None
    goal: Optional[str] = None
    goals: dict[str, Any] = Field(default_factory=dict)  # primary_goal, frequency_days_per_week
    injuries: list[Any] = Field(default_factory=list)

    @field_validator("name", "display_name", "goal", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("goals", mode="before")
    @classmethod
    def _coerce_goals(cls, value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @field_validator("injuries", mode="before")
    @classmethod
    def _coerce_injuries(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @property
    def days_per_week(self) -> int:
        """Training frequency target, defaulting to four days."""
        value = self.goals.get("frequency_days_per_week")
        return value if isinstance(value, int) and value > 0 else 4

    def snapshot(self) -> ProfileSnapshot:
        """Capture name, goal and injuries for a session."""
        goal = self.goals.get("primary_goal") or self.goal
        return ProfileSnapshot(
            name=self.name or self.display_name or "",
            goal=str(goal) if goal else "",
            injuries=list(self.injuries),
        )
