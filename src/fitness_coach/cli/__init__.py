"""CLI tools for the fitness coach engine."""

from fitness_coach.cli.show_program import main as show_program_main
from fitness_coach.cli.today_workout import main as today_workout_main
from fitness_coach.cli.weekly_report import main as weekly_report_main

__all__ = [
    "show_program_main",
    "today_workout_main",
    "weekly_report_main",
]
