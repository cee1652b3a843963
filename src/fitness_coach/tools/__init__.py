"""MCP tools for the fitness coach engine."""

from fitness_coach.tools.exercises import register_exercise_tools
from fitness_coach.tools.programs import register_program_tools
from fitness_coach.tools.workouts import register_workout_tools

__all__ = [
    "register_exercise_tools",
    "register_program_tools",
    "register_workout_tools",
]


def register_all_tools(mcp, catalog, coach_client=None):
    """Register all MCP tools with the server."""
    register_exercise_tools(mcp, catalog)
    register_program_tools(mcp, coach_client)
    register_workout_tools(mcp, catalog, coach_client)
