"""MCP tools for programs and their dated schedules."""

import json
from datetime import date
from typing import Any, Optional

from fitness_coach.coach_client import CoachClient
from fitness_coach.engine.scheduler import Schedule, build_schedule, entry_for_date
from fitness_coach.storage.programs import ProgramStorage
from fitness_coach.utils.dates import coerce_date, parse_date


def load_program_schedule(
    storage: ProgramStorage,
    user_id: str,
    program_id: str | None = None,
    start_date: str | None = None,
) -> tuple[Optional[dict[str, Any]], Schedule]:
    """
    Load a stored program (default: the user's newest) and build its schedule.

    The schedule starts at start_date if given, else at the date the program
    was anchored to when saved, else today.
    """
    program = storage.get_program(program_id) if program_id else storage.get_latest_program(user_id)
    if program is None:
        return None, Schedule()
    if start_date:
        start = parse_date(start_date)
    else:
        start = coerce_date(program.get("start_date")) or date.today()
    return program, build_schedule(program, start)


def register_program_tools(mcp, coach_client: CoachClient | None = None):
    """Register program and schedule MCP tools."""

    program_storage = ProgramStorage()

    @mcp.tool()
    def save_program(
        program_json: str,
        user_id: str = "guest",
        program_id: str | None = None,
        start_date: str | None = None,
    ) -> dict[str, Any]:
        """
        Save a multi-week program for a user.

        Args:
            program_json: JSON string with goal, weeks, days_per_week and plan
            user_id: Owner of the program
            program_id: Optional program ID. If not provided, one will be generated.
            start_date: Optional date of Week 1 / Day 1 (YYYY-MM-DD); defaults to today

        Returns:
            Dictionary with program_id and the number of scheduled days
        """
        try:
            program = json.loads(program_json)
        except json.JSONDecodeError as e:
            return {"error": f"Invalid JSON: {e}"}
        if not isinstance(program, dict):
            return {"error": "Program must be a JSON object"}

        try:
            start = parse_date(start_date) if start_date else None
            saved_id = program_storage.save_program(program, user_id, program_id, start)
            _, schedule = load_program_schedule(program_storage, user_id, saved_id)
            return {
                "data": {
                    "program_id": saved_id,
                    "saved": True,
                    "title": program.get("title", "Untitled Program"),
                    "scheduled_days": len(schedule),
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def list_programs(user_id: str = "guest") -> dict[str, Any]:
        """
        List a user's saved programs, newest first.

        Returns:
            Dictionary containing program summaries
        """
        try:
            programs = program_storage.list_programs(user_id)
            return {"data": {"programs": programs, "count": len(programs)}}
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def sync_latest_program(user_id: str = "guest") -> dict[str, Any]:
        """
        Fetch the user's newest program from the coaching service and store it.

        Returns:
            Dictionary with the stored program id
        """
        if coach_client is None:
            return {"error": "Coaching service not configured. Set COACH_BASE_URL."}
        try:
            program = coach_client.get_latest_program(user_id)
            if program is None:
                return {"error": f"No program found for user: {user_id}"}
            program_id = program_storage.save_program(program, user_id, program.get("id"))
            return {"data": {"program_id": program_id, "synced": True}}
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def get_program_schedule(
        user_id: str = "guest", program_id: str | None = None, start_date: str | None = None
    ) -> dict[str, Any]:
        """
        Get the dated schedule of a program.

        Args:
            user_id: Owner of the program
            program_id: Program to schedule (default: the user's newest)
            start_date: Override the start date (YYYY-MM-DD)

        Returns:
            Dictionary with one entry per program day, in date order
        """
        try:
            program, schedule = load_program_schedule(program_storage, user_id, program_id, start_date)
            if program is None:
                return {"error": "No program loaded yet."}
            return {
                "data": {
                    "program_id": program.get("id"),
                    "title": program.get("title"),
                    "entries": [entry.model_dump(mode="json") for entry in schedule],
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def get_scheduled_day(
        day: str | None = None, user_id: str = "guest", program_id: str | None = None
    ) -> dict[str, Any]:
        """
        Get what the program schedules on a date.

        Args:
            day: Date in ISO format (YYYY-MM-DD); defaults to today
            user_id: Owner of the program
            program_id: Program to use (default: the user's newest)

        Returns:
            Dictionary containing the scheduled entry and its summary text
        """
        try:
            target = parse_date(day) if day else date.today()
            program, schedule = load_program_schedule(program_storage, user_id, program_id)
            if program is None:
                return {"error": "No program loaded yet."}
            entry = entry_for_date(schedule, target)
            if entry is None:
                return {"data": {"date": target.isoformat(), "scheduled": False}}
            return {"data": {"scheduled": True, **entry.model_dump(mode="json")}}
        except Exception as e:
            return {"error": str(e)}
