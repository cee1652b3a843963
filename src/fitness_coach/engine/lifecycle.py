"""Active session ownership, session history and weekly rollups."""

import logging
import math
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from fitness_coach.config import Config
from fitness_coach.exceptions import InvalidStateError
from fitness_coach.models.session import (
    PerformedSet,
    SessionStatus,
    WeeklyStats,
    WorkoutSession,
    status_rank,
)
from fitness_coach.storage.sessions import SessionStorage
from fitness_coach.utils.dates import coerce_date, get_week_range

logger = logging.getLogger(__name__)


def weekly_stats(history: Iterable[Any], reference_date: date) -> WeeklyStats:
    """
    Planned and completed counts for the Monday-start week containing a date.

    Every session dated inside the week counts as planned; consistency is the
    completed share rounded half up to a whole percent (0 for an empty week).

    Args:
        history: WorkoutSession objects or their stored mappings
        reference_date: Any date inside the week of interest

    Returns:
        WeeklyStats for that week
    """
    week_start, week_end = get_week_range(reference_date)
    planned = 0
    completed = 0
    for entry in history:
        if isinstance(entry, WorkoutSession):
            entry_date, status = entry.date, entry.status
        elif isinstance(entry, dict):
            entry_date, status = coerce_date(entry.get("date")), entry.get("status")
        else:
            continue
        if entry_date is None or not (week_start <= entry_date < week_end):
            continue
        planned += 1
        if status == SessionStatus.COMPLETED.value:
            completed += 1

    consistency = math.floor(100 * completed / planned + 0.5) if planned else 0
    return WeeklyStats(
        week_start=week_start,
        week_end=week_end,
        planned=planned,
        completed=completed,
        consistency=consistency,
    )


class SessionManager:
    """
    Sole writer of a user's active session slot and session history.

    Sessions move planned -> in_progress -> completed and never back. Once a
    session is completed its blocks and profile snapshot are frozen.
    """

    def __init__(
        self,
        storage: SessionStorage,
        history_limit: int = Config.HISTORY_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the session manager.

        Args:
            storage: Session storage for one user
            history_limit: Number of most recent sessions kept
            clock: Source of completion timestamps
        """
        self.storage = storage
        self.history_limit = history_limit
        self.clock = clock

    @classmethod
    def for_user(cls, user_id: str, **kwargs: Any) -> "SessionManager":
        """Manager backed by the default JSON storage for a user."""
        return cls(SessionStorage(user_id), **kwargs)

    @property
    def active(self) -> Optional[WorkoutSession]:
        """The active session, if any."""
        return self.storage.get_active()

    def history(self) -> list[WorkoutSession]:
        """Stored sessions, most recent first."""
        return self.storage.get_history()

    def _stored_copy(self, session_id: str) -> Optional[WorkoutSession]:
        """Stored version of a session: its history entry, else the active slot."""
        for stored in self.storage.get_history():
            if stored.id == session_id:
                return stored
        active = self.storage.get_active()
        if active is not None and active.id == session_id:
            return active
        return None

    def set_active(self, session: WorkoutSession) -> WorkoutSession:
        """
        Make a session the active one and upsert it into history.

        An existing history entry with the same id is replaced in place;
        otherwise the session is inserted at the front. History is truncated
        to the most recent entries.

        Raises:
            InvalidStateError: if the session has no id, would move backwards
                in the lifecycle, would edit a completed session, or is a
                completed session that is no longer stored
        """
        if not session.id:
            raise InvalidStateError("Session has no identifier")
        if session.status == SessionStatus.COMPLETED.value and self._stored_copy(session.id) is None:
            raise InvalidStateError(f"Session {session.id} is completed and is no longer stored")

        self._upsert_history(session)
        self.storage.save_active(session)
        return session

    def _upsert_history(self, session: WorkoutSession) -> None:
        history = self.storage.get_history()
        index = next((i for i, stored in enumerate(history) if stored.id == session.id), None)
        if index is None:
            active = self.storage.get_active()
            if active is not None and active.id == session.id:
                self._check_update(active, session)
            history.insert(0, session)
        else:
            self._check_update(history[index], session)
            history[index] = session
        self.storage.save_history(history[: self.history_limit])

    def _check_update(self, stored: WorkoutSession, incoming: WorkoutSession) -> None:
        if status_rank(incoming.status) < status_rank(stored.status):
            raise InvalidStateError(
                f"Session {stored.id} cannot go from {stored.status} back to {incoming.status}"
            )
        if stored.status == SessionStatus.COMPLETED.value and (
            incoming.blocks.model_dump() != stored.blocks.model_dump()
            or incoming.profile_snapshot.model_dump() != stored.profile_snapshot.model_dump()
            or incoming.completed_at != stored.completed_at
        ):
            raise InvalidStateError(f"Session {stored.id} is completed and can no longer be changed")

    def _transition(self, session: WorkoutSession, target: SessionStatus) -> WorkoutSession:
        if not session.id:
            raise InvalidStateError("Session has no identifier")

        session = session.model_copy(deep=True)
        # The stored copy is authoritative once it has moved on
        stored = self._stored_copy(session.id)
        if stored is None and session.status == SessionStatus.COMPLETED.value:
            raise InvalidStateError(f"Session {session.id} is completed and is no longer stored")
        if stored is not None and status_rank(stored.status) >= status_rank(session.status):
            session.status = stored.status
            session.completed_at = stored.completed_at

        current = status_rank(session.status)
        wanted = status_rank(target)
        if wanted < current:
            raise InvalidStateError(f"Session {session.id} cannot go from {session.status} back to {target.value}")
        if wanted == current and stored is not None:
            return session

        if wanted > current:
            session.status = target
        if target == SessionStatus.COMPLETED and session.completed_at is None:
            session.completed_at = self.clock()
        logger.info("Session %s is now %s", session.id, session.status)

        # Only the session that already holds the active slot is written there
        self._upsert_history(session)
        active = self.storage.get_active()
        if active is not None and active.id == session.id:
            self.storage.save_active(session)
        return session

    def start(self, session: Optional[WorkoutSession] = None) -> WorkoutSession:
        """Move a session (default: the active one) to in_progress."""
        session = session if session is not None else self.active
        if session is None:
            raise InvalidStateError("No active session to start")
        return self._transition(session, SessionStatus.IN_PROGRESS)

    def complete(self, session: Optional[WorkoutSession] = None) -> WorkoutSession:
        """
        Mark a session (default: the active one) completed and persist it.

        Completing an already completed session keeps its first timestamp.
        The active slot is only updated when it holds this session. The
        argument is not modified; the stored state is returned.

        Raises:
            InvalidStateError: if there is no session or it has no id
        """
        session = session if session is not None else self.active
        if session is None:
            raise InvalidStateError("No active session to complete")
        return self._transition(session, SessionStatus.COMPLETED)

    def mark_today(self, day: Optional[date] = None) -> WorkoutSession:
        """
        Complete the session for a date (default: today).

        The active session is used when it is for that date, otherwise the
        most recent history entry for the date; the active slot is left alone.

        Raises:
            InvalidStateError: if no session exists for the date
        """
        day = day or self.clock().date()
        active = self.active
        if active is not None and active.date == day:
            return self.complete(active)
        for stored in self.storage.get_history():
            if stored.date == day:
                return self.complete(stored)
        raise InvalidStateError(f"No session found for {day.isoformat()}")

    def record_set(
        self,
        reps: Optional[int] = None,
        weight: Optional[float] = None,
        notes: str = "",
        session: Optional[WorkoutSession] = None,
    ) -> WorkoutSession:
        """
        Log a performed set at the current pointer and advance the pointer.

        The pointer moves to the next set, then to the next slot (strength
        slots, then the finisher). A planned session becomes in_progress.
        The updated session is returned and made active.

        Raises:
            InvalidStateError: if there is no session, it is completed, or
                every set has already been logged
        """
        session = session if session is not None else self.active
        if session is None:
            raise InvalidStateError("No active session")
        if session.status == SessionStatus.COMPLETED.value:
            raise InvalidStateError(f"Session {session.id} is completed and can no longer be changed")

        session = session.model_copy(deep=True)
        pointer = session.current
        slot = session.find_slot(pointer.block, pointer.slot)
        if slot is None:
            raise InvalidStateError(f"Session {session.id} has no sets left to log")

        slot.performed.append(PerformedSet(set_number=pointer.set_index, reps=reps, weight=weight, notes=notes))
        _advance_pointer(session)

        if session.status == SessionStatus.PLANNED.value:
            session.status = SessionStatus.IN_PROGRESS
        return self.set_active(session)

    def weekly_stats(self, reference_date: Optional[date] = None) -> WeeklyStats:
        """Weekly rollup over this user's history."""
        return weekly_stats(self.storage.get_history(), reference_date or self.clock().date())

    def reset(self) -> None:
        """Clear the active session and the history."""
        self.storage.save_active(None)
        self.storage.save_history([])
        logger.info("Cleared session history for %s", self.storage.user_id)


def _advance_pointer(session: WorkoutSession) -> None:
    pointer = session.current
    slot = session.find_slot(pointer.block, pointer.slot)
    if slot is not None and pointer.set_index < slot.sets:
        pointer.set_index += 1
        return

    order = [("strength", s.slot) for s in session.blocks.strength]
    order += [("finisher", s.slot) for s in session.blocks.finisher]
    position = order.index((pointer.block, pointer.slot)) if (pointer.block, pointer.slot) in order else -1
    if 0 <= position < len(order) - 1:
        pointer.block, pointer.slot = order[position + 1]
        pointer.set_index = 1
    else:
        pointer.block, pointer.slot, pointer.set_index = "done", "", 0
