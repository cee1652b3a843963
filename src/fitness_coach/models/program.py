"""Pydantic models for training programs and their dated schedules."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class Block(BaseModel):
    """A block of work within a program day (warm-up, strength, mobility...)."""

    type: str = ""
    description: str = ""
    items: list[str] = Field(default_factory=list)

    @field_validator("type", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if item is not None]


class DayPlan(BaseModel):
    """One training day of a program week."""

    day_index: Optional[int] = None  # 1-based within the week
    label: Optional[str] = None
    focus: Optional[str] = None
    blocks: list[Block] = Field(default_factory=list)

    @field_validator("blocks", mode="before")
    @classmethod
    def _drop_malformed_blocks(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [block for block in value if isinstance(block, (dict, Block))]


class WeekPlan(BaseModel):
    """A week in the program."""

    week: Optional[int] = None  # 1-based
    days: list[DayPlan] = Field(default_factory=list)

    @field_validator("days", mode="before")
    @classmethod
    def _drop_malformed_days(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [day for day in value if isinstance(day, (dict, DayPlan))]


class Program(BaseModel):
    """A multi-week training program authored by the coaching collaborator."""

    id: Optional[str] = None
    title: Optional[str] = None
    goal: Optional[str] = None
    weeks: Optional[int] = None  # duration in weeks
    days_per_week: Optional[int] = None
    plan: list[WeekPlan] = Field(default_factory=list)

    # Metadata
    start_date: Optional[date] = None
    created_at: Optional[str] = None

    @field_validator("plan", mode="before")
    @classmethod
    def _drop_malformed_weeks(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [week for week in value if isinstance(week, (dict, WeekPlan))]


class ScheduleEntry(BaseModel):
    """One dated day of a flattened program."""

    date: date
    week: Optional[int] = None
    day_index: Optional[int] = Field(default=None, alias="dayIndex")
    label: Optional[str] = None
    focus: Optional[str] = None
    summary: str = ""

    class Config:
        """Pydantic configuration."""

        frozen = True
        populate_by_name = True
