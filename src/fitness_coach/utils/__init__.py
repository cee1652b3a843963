"""Utility functions for the fitness coach engine."""

from fitness_coach.utils.dates import coerce_date, get_week_range, get_week_start, parse_date
from fitness_coach.utils.formatting import (
    format_day_summary,
    format_status,
    primary_exercise_name,
    render_plan_text,
    summarize_strength,
)

__all__ = [
    "parse_date",
    "coerce_date",
    "get_week_start",
    "get_week_range",
    "format_day_summary",
    "render_plan_text",
    "primary_exercise_name",
    "summarize_strength",
    "format_status",
]
