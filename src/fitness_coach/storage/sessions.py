"""Workout session storage: the active session and the session history."""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from fitness_coach.models.session import WorkoutSession
from fitness_coach.storage.base import BaseStorage

logger = logging.getLogger(__name__)


class SessionStorage(BaseStorage):
    """Per-user storage for the active workout and the workout history."""

    ACTIVE_KEY = "active_workout_v1"
    HISTORY_KEY = "workout_history_v1"

    def __init__(self, user_id: str = "guest") -> None:
        """
        Initialize session storage in the sessions directory.

        Args:
            user_id: Namespace for this user's keys
        """
        super().__init__("sessions")
        self.user_id = user_id

    def _user_key(self, key: str) -> str:
        return f"{key}_{self.user_id}"

    def _parse_session(self, raw: Any) -> Optional[WorkoutSession]:
        if not isinstance(raw, dict):
            return None
        try:
            return WorkoutSession.model_validate(raw)
        except ValidationError as e:
            logger.warning("Dropping unreadable stored session %r: %d errors", raw.get("id"), e.error_count())
            return None

    def get_active(self) -> Optional[WorkoutSession]:
        """
        Get the active session.

        Returns:
            The active session, or None if there is none or it is unreadable
        """
        return self._parse_session(self.read(self._user_key(self.ACTIVE_KEY)))

    def save_active(self, session: Optional[WorkoutSession]) -> None:
        """Replace the active session slot (None clears it)."""
        self.write(self._user_key(self.ACTIVE_KEY), session.to_storage() if session else None)

    def get_history(self) -> list[WorkoutSession]:
        """
        Get the session history.

        Returns:
            Sessions, most recent first; unreadable entries are skipped
        """
        raw = self.read(self._user_key(self.HISTORY_KEY), [])
        if not isinstance(raw, list):
            logger.warning("Stored history for %s is not a list; starting empty", self.user_id)
            return []
        history = [self._parse_session(item) for item in raw]
        return [session for session in history if session is not None]

    def save_history(self, history: list[WorkoutSession]) -> None:
        """Persist the full history list."""
        self.write(self._user_key(self.HISTORY_KEY), [s.to_storage() for s in history])
