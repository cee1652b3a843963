#!/usr/bin/env python3
"""
Print the workout dashboard from local session history.

Structure:
1. This week's planned / completed / consistency
2. The active workout
3. Recent sessions
"""

import argparse
from datetime import date

from fitness_coach.config import Config, configure_logging
from fitness_coach.engine.lifecycle import SessionManager
from fitness_coach.models.session import WeeklyStats, WorkoutSession
from fitness_coach.utils.dates import parse_date
from fitness_coach.utils.formatting import format_status, primary_exercise_name, summarize_strength


def print_weekly_summary(stats: WeeklyStats) -> None:
    """Print the weekly KPIs."""
    print("=" * 100)
    print(f"WEEK OF {stats.week_start.strftime('%B %d, %Y').upper()}")
    print("=" * 100)
    print()
    print(f"Planned:     {stats.planned}")
    print(f"Completed:   {stats.completed}")
    print(f"Consistency: {stats.consistency}%")
    print()


def print_active(session: WorkoutSession | None) -> None:
    """Print the active workout."""
    print("=" * 100)
    print("ACTIVE WORKOUT")
    print("=" * 100)
    print()
    if session is None:
        print("No active workout. Generate one to begin.")
        print()
        return

    print(f"{primary_exercise_name(session)} ({format_status(session.status)})")
    print(f"Date: {session.date.isoformat()}   Goal: {session.profile_snapshot.goal or 'Goal not set'}")
    for slot in session.blocks.strength:
        done = len(slot.performed)
        print(f"  {slot.slot}) {slot.name:<40} {done}/{slot.sets} sets")
    if session.coach_note:
        print()
        print(session.coach_note)
    print()


def print_history(history: list[WorkoutSession], limit: int) -> None:
    """Print the most recent sessions."""
    print("=" * 100)
    print("HISTORY")
    print("=" * 100)
    print()
    if not history:
        print("No sessions yet.")
        return

    print(f"{'Date':<12} {'Status':<12} {'Goal':<24} Exercises")
    print("-" * 100)
    for session in history[:limit]:
        print(
            f"{session.date.isoformat():<12} {format_status(session.status):<12} "
            f"{(session.profile_snapshot.goal or '—')[:23]:<24} {summarize_strength(session)}"
        )
    print()


def main() -> int:
    """Main function to print the workout dashboard."""
    parser = argparse.ArgumentParser(description="Print weekly consistency and workout history")
    parser.add_argument("--user", default=Config.DEFAULT_USER_ID, help="Athlete identifier")
    parser.add_argument("--date", help="Any date in the week to report (YYYY-MM-DD, default: today)")
    parser.add_argument(
        "--limit",
        type=int,
        default=25,
        help="Number of history entries to show (default: 25)",
    )

    args = parser.parse_args()
    configure_logging()

    try:
        reference = parse_date(args.date) if args.date else date.today()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    manager = SessionManager.for_user(args.user)
    print_weekly_summary(manager.weekly_stats(reference))
    print_active(manager.active)
    print_history(manager.history(), args.limit)
    return 0


if __name__ == "__main__":
    exit(main())
