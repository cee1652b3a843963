#!/usr/bin/env python3
"""
Show a program's dated schedule and what is scheduled next.

This script flattens the user's program into calendar days and prints:
- Program overview
- Today's (or the next) scheduled day with its blocks
- Upcoming scheduled days
"""

import argparse
from datetime import date
from typing import Any

from fitness_coach.config import Config, configure_logging
from fitness_coach.engine.scheduler import Schedule
from fitness_coach.storage.programs import ProgramStorage
from fitness_coach.tools.programs import load_program_schedule


def print_program_overview(program: dict[str, Any], schedule: Schedule) -> None:
    """Print overview of the program."""
    print("=" * 100)
    print("PROGRAM OVERVIEW")
    print("=" * 100)
    print()

    print(f"Title:           {program.get('title') or 'Untitled Program'}")
    print(f"Goal:            {program.get('goal') or '—'}")
    print(f"Duration:        {program.get('weeks', 'N/A')} weeks, {program.get('days_per_week', 'N/A')} days/week")
    if len(schedule):
        print(f"Schedule:        {schedule[0].date.isoformat()} to {schedule[-1].date.isoformat()} ({len(schedule)} days)")
    else:
        print("Schedule:        Program has no structured plan yet.")
    print()


def print_selected_day(schedule: Schedule, today: date) -> None:
    """Print today's scheduled day, or the next one."""
    entry = schedule.entry_for(today) or schedule.next_entry(today)
    if entry is None:
        return

    print("=" * 100)
    label = "TODAY" if entry.date == today else entry.date.strftime("%A, %B %d")
    print(f"{label}: Week {entry.week}, Day {entry.day_index}")
    print("=" * 100)
    print()
    print(entry.summary)
    print()


def print_upcoming_days(schedule: Schedule, today: date, days_ahead: int = 7) -> None:
    """Print scheduled days in the next N days."""
    print("=" * 100)
    print(f"UPCOMING DAYS (Next {days_ahead} days)")
    print("=" * 100)
    print()

    upcoming = [e for e in schedule if 0 <= (e.date - today).days <= days_ahead]
    if not upcoming:
        print("Nothing scheduled in the next week.")
        return

    for entry in upcoming:
        days_away = (entry.date - today).days
        day_label = "TODAY" if days_away == 0 else "TOMORROW" if days_away == 1 else f"in {days_away} days"
        print(f"{entry.date.strftime('%A, %B %d')} ({day_label})")
        print(f"  {entry.label or 'Workout'}: {entry.focus or '—'}")
    print()


def main() -> int:
    """Main function to show the program schedule."""
    parser = argparse.ArgumentParser(description="Show a program's dated schedule")
    parser.add_argument(
        "program_id",
        nargs="?",
        help="Program ID to show (if not provided, uses the user's newest program)",
    )
    parser.add_argument("--user", default=Config.DEFAULT_USER_ID, help="User whose program to show")
    parser.add_argument("--start-date", help="Override the start date (YYYY-MM-DD)")
    parser.add_argument(
        "--days",
        type=int,
        default=7,
        help="Number of days ahead to show (default: 7)",
    )

    args = parser.parse_args()
    configure_logging()

    try:
        program, schedule = load_program_schedule(ProgramStorage(), args.user, args.program_id, args.start_date)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if program is None:
        print("No program found yet. Save a program first.")
        return 1

    today = date.today()
    print_program_overview(program, schedule)
    print_selected_day(schedule, today)
    print_upcoming_days(schedule, today, days_ahead=args.days)
    return 0


if __name__ == "__main__":
    exit(main())
