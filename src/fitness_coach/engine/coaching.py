"""Optional coaching-text enrichment of a session."""

import logging
from typing import Optional

from fitness_coach.coach_client import CoachClient
from fitness_coach.models.session import WorkoutSession

logger = logging.getLogger(__name__)


def coaching_prompt(session: WorkoutSession) -> str:
    """Telemetry text describing where the athlete is in the session."""
    snapshot = session.profile_snapshot
    pointer = session.current
    slot = session.find_slot(pointer.block, pointer.slot)

    lines = [
        f"Athlete: {snapshot.name or 'unknown'}",
        f"Goal: {snapshot.goal or 'not set'}",
        f"Session {session.date.isoformat()} ({session.status})",
    ]
    if snapshot.injuries:
        lines.append("Injuries: " + ", ".join(str(i) for i in snapshot.injuries))
    if slot is not None:
        lines.append(f"Now: {slot.slot} {slot.name}, set {pointer.set_index} of {slot.sets} x {slot.reps}")
    if session.blocks.corrective:
        lines.append("Correctives: " + ", ".join(c.name for c in session.blocks.corrective))
    lines.append(f"Focus: {session.coaching_focus}")
    return "\n".join(lines)


def enrich_session(session: WorkoutSession, client: Optional[CoachClient], user_id: str = "guest") -> Optional[str]:
    """
    Attach coaching text to a session when the coaching service answers.

    Returns:
        The coaching text, or None when no client is configured or it failed
    """
    if client is None:
        return None
    text = client.ask_coach(coaching_prompt(session), user_id=user_id)
    if text:
        session.coach_note = text
    else:
        logger.info("No coaching text for session %s", session.id)
    return text
