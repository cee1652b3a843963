"""MCP tools for daily workouts and session history."""

import json
from datetime import date
from typing import Any

from fitness_coach.catalog.index import ExerciseCatalog
from fitness_coach.coach_client import CoachClient
from fitness_coach.engine.coaching import enrich_session
from fitness_coach.engine.generator import generate
from fitness_coach.engine.lifecycle import SessionManager
from fitness_coach.engine.selection import RandomSelection, WorkoutPolicy
from fitness_coach.models.coaching import AthleteProfile
from fitness_coach.models.session import SessionStatus
from fitness_coach.utils.dates import parse_date
from fitness_coach.utils.formatting import format_status, render_plan_text, summarize_strength


def register_workout_tools(mcp, catalog: ExerciseCatalog, coach_client: CoachClient | None = None):
    """Register workout and session history MCP tools."""

    @mcp.tool()
    def generate_today_workout(
        user_id: str = "guest",
        profile_json: str | None = None,
        findings_json: str | None = None,
        start: bool = True,
        seed: int | None = None,
    ) -> dict[str, Any]:
        """
        Generate today's workout from the exercise catalog and make it active.

        Args:
            user_id: Athlete identifier
            profile_json: Optional JSON profile (name, goal, goals, injuries)
            findings_json: Optional JSON list of movement-assessment findings
            start: Mark the workout in progress right away (default: True)
            seed: Optional seed for reproducible exercise picks

        Returns:
            Dictionary with the session and its plan text
        """
        try:
            profile = json.loads(profile_json) if profile_json else {}
            findings = json.loads(findings_json) if findings_json else []
        except json.JSONDecodeError as e:
            return {"error": f"Invalid JSON: {e}"}

        try:
            if not isinstance(profile, dict):
                profile = {}
            athlete = AthleteProfile.model_validate({**profile, "user_id": user_id})
            session = generate(
                catalog,
                athlete,
                findings,
                policy=WorkoutPolicy(selector=RandomSelection(seed)),
                status=SessionStatus.IN_PROGRESS if start else SessionStatus.PLANNED,
            )
            enrich_session(session, coach_client, user_id)
            SessionManager.for_user(user_id).set_active(session)
            return {
                "data": {
                    "session": session.to_storage(),
                    "plan_text": render_plan_text(session, athlete.days_per_week),
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def get_active_workout(user_id: str = "guest") -> dict[str, Any]:
        """
        Get the active workout session.

        Returns:
            Dictionary containing the active session, or a message if there is none
        """
        try:
            session = SessionManager.for_user(user_id).active
            if session is None:
                return {"data": None, "message": "No active workout found."}
            return {"data": session.to_storage()}
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def log_set(
        user_id: str = "guest", reps: int | None = None, weight: float | None = None, notes: str = ""
    ) -> dict[str, Any]:
        """
        Log a performed set on the active workout and move to the next set.

        Args:
            user_id: Athlete identifier
            reps: Reps performed
            weight: Load used
            notes: Free-form notes

        Returns:
            Dictionary with the updated position in the workout
        """
        try:
            session = SessionManager.for_user(user_id).record_set(reps, weight, notes)
            return {"data": {"session_id": session.id, "current": session.current.model_dump(by_alias=True)}}
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def complete_workout(user_id: str = "guest") -> dict[str, Any]:
        """
        Mark the active workout completed.

        Returns:
            Dictionary with the completed session id and completion time
        """
        try:
            session = SessionManager.for_user(user_id).complete()
            return {
                "data": {
                    "session_id": session.id,
                    "status": session.status,
                    "completed_at": session.completed_at.isoformat() if session.completed_at else None,
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def mark_workout_done(user_id: str = "guest", day: str | None = None) -> dict[str, Any]:
        """
        Mark the workout for a date (default: today) as completed.

        Args:
            user_id: Athlete identifier
            day: Date in ISO format (YYYY-MM-DD)

        Returns:
            Dictionary with the completed session id
        """
        try:
            target = parse_date(day) if day else date.today()
            session = SessionManager.for_user(user_id).mark_today(target)
            return {"data": {"session_id": session.id, "date": session.date.isoformat(), "status": session.status}}
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def get_workout_dashboard(user_id: str = "guest", reference_date: str | None = None) -> dict[str, Any]:
        """
        Get weekly consistency, the active workout and recent history.

        Args:
            user_id: Athlete identifier
            reference_date: Any date in the week to report (default: today)

        Returns:
            Dictionary containing:
            - weekly: planned, completed and consistency percentage
            - active: short summary of the active workout
            - history: the 25 most recent sessions
        """
        try:
            manager = SessionManager.for_user(user_id)
            stats = manager.weekly_stats(parse_date(reference_date) if reference_date else date.today())
            active = manager.active
            history = manager.history()
            return {
                "data": {
                    "weekly": stats.model_dump(mode="json"),
                    "active": {
                        "id": active.id,
                        "date": active.date.isoformat(),
                        "status": format_status(active.status),
                        "goal": active.profile_snapshot.goal or "Goal not set",
                        "strength": [f"{s.slot}) {s.name}" for s in active.blocks.strength],
                    }
                    if active
                    else None,
                    "history": [
                        {
                            "id": s.id,
                            "date": s.date.isoformat(),
                            "status": format_status(s.status),
                            "summary": summarize_strength(s),
                            "goal": s.profile_snapshot.goal or "—",
                            "completed_at": s.completed_at.isoformat() if s.completed_at else None,
                        }
                        for s in history[:25]
                    ],
                }
            }
        except Exception as e:
            return {"error": str(e)}

    @mcp.tool()
    def reset_workout_history(user_id: str = "guest") -> dict[str, Any]:
        """
        Clear the active workout and the session history.

        Returns:
            Dictionary with reset status
        """
        try:
            SessionManager.for_user(user_id).reset()
            return {"data": {"reset": True}}
        except Exception as e:
            return {"error": str(e)}
