#!/usr/bin/env python3
"""
Generate today's workout and make it the active session.

Prints the plan text for the generated session. With --complete, marks
today's session done instead of generating a new one.
"""

import argparse
import json
from pathlib import Path
from typing import Any

from fitness_coach.catalog.source import load_default_catalog
from fitness_coach.config import Config, configure_logging
from fitness_coach.engine.generator import generate
from fitness_coach.engine.lifecycle import SessionManager
from fitness_coach.engine.selection import RandomSelection, WorkoutPolicy
from fitness_coach.exceptions import InvalidStateError
from fitness_coach.models.coaching import AthleteProfile
from fitness_coach.models.session import SessionStatus
from fitness_coach.utils.formatting import render_plan_text


def load_json_file(file_path: str | None) -> Any:
    """Load an optional JSON file given on the command line."""
    if not file_path:
        return None
    with open(Path(file_path), "r", encoding="utf-8") as f:
        return json.load(f)


def main() -> int:
    """Main function to generate or complete today's workout."""
    parser = argparse.ArgumentParser(description="Generate today's workout from the exercise catalog")
    parser.add_argument("--user", default=Config.DEFAULT_USER_ID, help="Athlete identifier")
    parser.add_argument("--profile", help="Path to a JSON athlete profile")
    parser.add_argument("--findings", help="Path to a JSON list of movement-assessment findings")
    parser.add_argument("--seed", type=int, help="Seed for reproducible exercise picks")
    parser.add_argument(
        "--planned",
        action="store_true",
        help="Leave the workout planned instead of starting it",
    )
    parser.add_argument(
        "--complete",
        action="store_true",
        help="Mark today's workout completed instead of generating one",
    )

    args = parser.parse_args()
    configure_logging()
    manager = SessionManager.for_user(args.user)

    if args.complete:
        try:
            session = manager.mark_today()
        except InvalidStateError as e:
            print(f"Error: {e}")
            return 1
        print(f"Completed {session.id} at {session.completed_at:%Y-%m-%d %H:%M}")
        return 0

    try:
        profile = load_json_file(args.profile) or {}
        findings = load_json_file(args.findings)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}")
        return 1
    if not isinstance(profile, dict):
        print("Error: profile must be a JSON object")
        return 1

    athlete = AthleteProfile.model_validate({**profile, "user_id": args.user})
    session = generate(
        load_default_catalog(),
        athlete,
        findings,
        policy=WorkoutPolicy(selector=RandomSelection(args.seed)),
        status=SessionStatus.PLANNED if args.planned else SessionStatus.IN_PROGRESS,
    )
    manager.set_active(session)

    print("=" * 100)
    print(f"WORKOUT {session.date.isoformat()} ({session.status})")
    print("=" * 100)
    print()
    print(render_plan_text(session, athlete.days_per_week))
    print()
    print(f"Session id: {session.id}")
    return 0


if __name__ == "__main__":
    exit(main())
