"""Tests for the session lifecycle manager and weekly rollups."""

import json
from datetime import date, datetime, timedelta

import pytest

from fitness_coach.config import Config
from fitness_coach.engine.generator import generate
from fitness_coach.engine.lifecycle import SessionManager, weekly_stats
from fitness_coach.engine.selection import FirstSelection, WorkoutPolicy
from fitness_coach.exceptions import InvalidStateError
from fitness_coach.models.session import SessionStatus, WorkoutSession
from fitness_coach.storage.sessions import SessionStorage

from conftest import FixedClock

DAY = date(2024, 1, 3)


def new_session(day=DAY, **kwargs):
    return generate(None, policy=WorkoutPolicy(selector=FirstSelection()), today=day, now=datetime(2024, 1, 3, 6, 0), **kwargs)


class TestSetActive:
    """Test the active slot and history upsert."""

    @pytest.fixture(autouse=True)
    def _manager(self, data_dir):
        self.data_dir = data_dir
        self.clock = FixedClock(datetime(2024, 1, 3, 18, 0))
        self.manager = SessionManager(SessionStorage("tester"), clock=self.clock)

    def test_set_active_twice_keeps_one_entry(self):
        """The same session set twice is one history entry."""
        session = new_session()
        self.manager.set_active(session)
        self.manager.set_active(session)

        assert [s.id for s in self.manager.history()] == [session.id]
        assert self.manager.active.id == session.id

    def test_new_sessions_go_first(self):
        """History is newest first."""
        first, second = new_session(), new_session()
        self.manager.set_active(first)
        self.manager.set_active(second)

        assert [s.id for s in self.manager.history()] == [second.id, first.id]

    def test_update_replaces_in_place(self):
        """Re-setting an older session keeps its history position."""
        first, second = new_session(), new_session()
        self.manager.set_active(first)
        self.manager.set_active(second)
        first.coach_note = "Nice work"
        self.manager.set_active(first)

        history = self.manager.history()
        assert [s.id for s in history] == [second.id, first.id]
        assert history[1].coach_note == "Nice work"
        assert self.manager.active.id == first.id

    def test_session_without_id_is_rejected(self):
        """Sessions must carry an identifier."""
        with pytest.raises(InvalidStateError):
            self.manager.set_active(WorkoutSession(date=DAY))
        assert self.manager.history() == []

    def test_history_is_bounded(self):
        """Only the most recent sessions are kept."""
        manager = SessionManager(SessionStorage("bounded"), history_limit=3)
        sessions = [new_session(DAY + timedelta(days=i)) for i in range(5)]
        for session in sessions:
            manager.set_active(session)

        assert [s.id for s in manager.history()] == [s.id for s in reversed(sessions[2:])]

    def test_default_history_limit(self):
        """The history bound comes from configuration."""
        assert SessionManager(SessionStorage("tester")).history_limit == Config.HISTORY_LIMIT

    def test_stored_json_uses_camel_case(self):
        """Persisted sessions use the stored field names."""
        self.manager.complete(new_session())
        path = self.data_dir / "sessions" / "workout_history_v1_tester.json"
        stored = json.loads(path.read_text(encoding="utf-8"))

        assert stored[0]["status"] == "completed"
        assert "completedAt" in stored[0]
        assert "profileSnapshot" in stored[0]
        assert stored[0]["current"]["setIndex"] == 1

    def test_users_are_isolated(self):
        """Each user has their own active slot and history."""
        self.manager.set_active(new_session())
        other = SessionManager.for_user("someone-else")

        assert other.active is None
        assert other.history() == []


class TestTransitions:
    """Test the planned -> in_progress -> completed state machine."""

    @pytest.fixture(autouse=True)
    def _manager(self, data_dir):
        self.clock = FixedClock(datetime(2024, 1, 3, 18, 0))
        self.manager = SessionManager(SessionStorage("tester"), clock=self.clock)

    def test_complete_stamps_time(self):
        """Completing records the clock time."""
        session = self.manager.complete(new_session())

        assert session.status == "completed"
        assert session.completed_at == datetime(2024, 1, 3, 18, 0)
        assert self.manager.history()[0].completed_at == datetime(2024, 1, 3, 18, 0)

    def test_complete_twice_keeps_first_timestamp(self):
        """A second completion does not move the timestamp."""
        session = new_session()
        self.manager.complete(session)
        self.clock.now = datetime(2024, 1, 3, 21, 0)
        again = self.manager.complete(session)

        assert again.status == "completed"
        assert again.completed_at == datetime(2024, 1, 3, 18, 0)
        assert self.manager.history()[0].completed_at == datetime(2024, 1, 3, 18, 0)
        assert len(self.manager.history()) == 1

    def test_complete_stale_copy_is_a_no_op(self):
        """Completing an old copy of a completed session keeps the stored state."""
        session = new_session()
        stale = session.model_copy(deep=True)
        self.manager.complete(session)
        self.clock.now = datetime(2024, 1, 4, 9, 0)

        result = self.manager.complete(stale)
        assert result.completed_at == datetime(2024, 1, 3, 18, 0)

    def test_complete_defaults_to_active(self):
        """Without an argument the active session is completed."""
        session = new_session()
        self.manager.set_active(session)
        assert self.manager.complete().id == session.id
        assert self.manager.active.status == "completed"

    def test_complete_without_session(self):
        """There must be something to complete."""
        with pytest.raises(InvalidStateError):
            self.manager.complete()

    def test_start(self):
        """Starting moves a planned session to in_progress."""
        session = new_session()
        self.manager.set_active(session)
        assert self.manager.start().status == "in_progress"

    def test_cannot_go_backwards(self):
        """A completed session cannot be stored as planned again."""
        session = self.manager.complete(new_session())
        reverted = session.model_copy(deep=True)
        reverted.status = SessionStatus.PLANNED

        with pytest.raises(InvalidStateError):
            self.manager.set_active(reverted)
        with pytest.raises(InvalidStateError):
            self.manager.start(session)

    def test_completed_session_is_frozen(self):
        """Blocks of a completed session cannot be edited."""
        session = self.manager.complete(new_session())
        edited = session.model_copy(deep=True)
        edited.blocks.strength[0].name = "Something else"

        with pytest.raises(InvalidStateError):
            self.manager.set_active(edited)

    def test_completed_session_cannot_be_reinserted(self):
        """A completed session that fell out of storage cannot come back edited."""
        manager = SessionManager(SessionStorage("bounded"), history_limit=1, clock=self.clock)
        manager.set_active(new_session())
        finished = manager.complete()
        manager.set_active(new_session(DAY + timedelta(days=1)))
        assert finished.id not in [s.id for s in manager.history()]

        edited = finished.model_copy(deep=True)
        edited.blocks.strength[0].name = "Something else"
        with pytest.raises(InvalidStateError):
            manager.set_active(edited)
        with pytest.raises(InvalidStateError):
            manager.complete(edited)

    def test_completion_time_cannot_be_rewritten(self):
        """The completion timestamp of a stored session is fixed."""
        session = self.manager.complete(new_session())
        edited = session.model_copy(deep=True)
        edited.completed_at = datetime(2024, 1, 5, 8, 0)

        with pytest.raises(InvalidStateError):
            self.manager.set_active(edited)

    def test_mark_today_uses_active(self):
        """Marking a date completes the active session for that date."""
        session = new_session()
        self.manager.set_active(session)
        assert self.manager.mark_today(DAY).id == session.id
        assert self.manager.history()[0].status == "completed"

    def test_mark_today_falls_back_to_history(self):
        """Without a matching active session the history entry is used."""
        earlier = new_session(DAY - timedelta(days=1))
        self.manager.set_active(earlier)
        today = self.manager.start(self.manager.set_active(new_session()))

        marked = self.manager.mark_today(DAY - timedelta(days=1))
        assert marked.id == earlier.id
        assert marked.status == "completed"
        assert self.manager.history()[1].status == "completed"
        assert self.manager.active.id == today.id
        assert self.manager.active.status == "in_progress"

    def test_completing_another_session_keeps_active_slot(self):
        """Logging continues on the active session after an older one is completed."""
        earlier = new_session(DAY - timedelta(days=1))
        self.manager.set_active(earlier)
        today = self.manager.set_active(new_session())

        self.manager.complete(earlier)
        session = self.manager.record_set(reps=10)
        assert session.id == today.id
        assert session.status == "in_progress"

    def test_argument_is_not_modified(self):
        """Transitions and set logging return updated copies."""
        session = new_session()
        self.manager.set_active(session)

        completed = self.manager.complete(session)
        assert completed.status == "completed"
        assert session.status == "planned"
        assert session.completed_at is None

        other = new_session()
        self.manager.set_active(other)
        logged = self.manager.record_set(reps=5, session=other)
        assert len(logged.blocks.strength[0].performed) == 1
        assert other.blocks.strength[0].performed == []
        assert other.status == "planned"

    def test_mark_today_defaults_to_clock_date(self):
        """The default date comes from the clock."""
        self.manager.set_active(new_session())
        assert self.manager.mark_today().date == DAY

    def test_mark_today_without_session(self):
        """A date with no session is an error."""
        with pytest.raises(InvalidStateError):
            self.manager.mark_today(DAY)

    def test_reset(self):
        """Reset clears the active slot and history."""
        self.manager.complete(new_session())
        self.manager.reset()
        assert self.manager.active is None
        assert self.manager.history() == []


class TestRecordSet:
    """Test set logging and pointer movement."""

    @pytest.fixture(autouse=True)
    def _manager(self, data_dir):
        self.manager = SessionManager(SessionStorage("tester"), clock=FixedClock(datetime(2024, 1, 3, 18, 0)))
        self.session = new_session()
        self.manager.set_active(self.session)

    def test_first_set(self):
        """Logging a set records it and moves to the next set."""
        session = self.manager.record_set(reps=10, weight=20.0, notes="easy")
        a1 = session.blocks.strength[0]

        assert [(p.set_number, p.reps, p.weight) for p in a1.performed] == [(1, 10, 20.0)]
        assert (session.current.slot, session.current.set_index) == ("A1", 2)
        assert session.status == "in_progress"
        assert self.manager.active.blocks.strength[0].performed[0].notes == "easy"

    def test_pointer_moves_to_next_slot(self):
        """After the last set of a slot the pointer moves on."""
        for _ in range(3):
            session = self.manager.record_set(reps=10)
        assert (session.current.block, session.current.slot, session.current.set_index) == ("strength", "A2", 1)

    def test_pointer_reaches_finisher_then_done(self):
        """Strength slots lead to the finisher, then the session is done."""
        for _ in range(12):
            session = self.manager.record_set(reps=8)
        assert (session.current.block, session.current.slot) == ("finisher", "F1")

        session = self.manager.record_set()
        assert session.current.block == "done"
        with pytest.raises(InvalidStateError):
            self.manager.record_set()

    def test_completed_session_rejects_sets(self):
        """Completed sessions cannot log sets."""
        self.manager.complete()
        with pytest.raises(InvalidStateError):
            self.manager.record_set(reps=10)


class TestWeeklyStats:
    """Test weekly consistency rollups."""

    def test_three_of_four(self):
        """Three completed out of four gives 75."""
        history = [
            {"date": "2024-01-01", "status": "completed"},
            {"date": "2024-01-02", "status": "completed"},
            {"date": "2024-01-04", "status": "completed"},
            {"date": "2024-01-06", "status": "planned"},
        ]
        stats = weekly_stats(history, date(2024, 1, 3))

        assert (stats.planned, stats.completed, stats.consistency) == (4, 3, 75)
        assert (stats.week_start, stats.week_end) == (date(2024, 1, 1), date(2024, 1, 8))

    def test_week_bounds(self):
        """Monday through Sunday count; the next Monday does not."""
        history = [
            {"date": "2023-12-31", "status": "completed"},
            {"date": "2024-01-07", "status": "completed"},
            {"date": "2024-01-08", "status": "completed"},
        ]
        stats = weekly_stats(history, date(2024, 1, 1))
        assert (stats.planned, stats.completed) == (1, 1)

    def test_empty_week(self):
        """No sessions means zero consistency."""
        stats = weekly_stats([], date(2024, 1, 3))
        assert (stats.planned, stats.completed, stats.consistency) == (0, 0, 0)

    def test_rounds_half_up(self):
        """Consistency rounds to the nearest whole percent, halves up."""
        one_of_eight = [{"date": "2024-01-02", "status": "completed"}] + [
            {"date": "2024-01-03", "status": "planned"} for _ in range(7)
        ]
        two_of_three = [
            {"date": "2024-01-02", "status": "completed"},
            {"date": "2024-01-03", "status": "completed"},
            {"date": "2024-01-04", "status": "in_progress"},
        ]
        assert weekly_stats(one_of_eight, date(2024, 1, 3)).consistency == 13
        assert weekly_stats(two_of_three, date(2024, 1, 3)).consistency == 67

    def test_unreadable_entries_are_skipped(self):
        """Entries without a usable date are ignored."""
        history = [{"status": "completed"}, {"date": "soon"}, "junk", {"date": "2024-01-02", "status": "completed"}]
        assert weekly_stats(history, date(2024, 1, 3)).planned == 1

    def test_manager_stats_use_history(self, data_dir):
        """The manager rolls up its own stored history."""
        manager = SessionManager(SessionStorage("tester"), clock=FixedClock(datetime(2024, 1, 3, 18, 0)))
        manager.complete(new_session())
        manager.set_active(new_session(DAY + timedelta(days=1)))

        stats = manager.weekly_stats()
        assert (stats.planned, stats.completed, stats.consistency) == (2, 1, 50)


class TestCorruptStorage:
    """Test recovery from unreadable stored data."""

    @pytest.fixture(autouse=True)
    def _paths(self, data_dir):
        self.sessions_dir = data_dir / "sessions"
        self.manager = SessionManager(SessionStorage("tester"))

    def test_corrupt_history_reads_as_empty(self):
        """Invalid JSON is treated as an empty history."""
        (self.sessions_dir / "workout_history_v1_tester.json").write_text("{not json", encoding="utf-8")
        (self.sessions_dir / "active_workout_v1_tester.json").write_text("[[[", encoding="utf-8")

        assert self.manager.history() == []
        assert self.manager.active is None

    def test_non_list_history_reads_as_empty(self):
        """A history that is not a list is treated as empty."""
        (self.sessions_dir / "workout_history_v1_tester.json").write_text('{"a": 1}', encoding="utf-8")
        assert self.manager.history() == []

    def test_unparsable_entries_are_dropped(self):
        """Individual bad entries are skipped."""
        good = new_session().to_storage()
        (self.sessions_dir / "workout_history_v1_tester.json").write_text(
            json.dumps([good, {"id": "bad"}, 5]), encoding="utf-8"
        )
        assert [s.id for s in self.manager.history()] == [good["id"]]

    def test_writes_recover_after_corruption(self):
        """The next write replaces the corrupt file."""
        (self.sessions_dir / "workout_history_v1_tester.json").write_text("{not json", encoding="utf-8")
        session = new_session()
        self.manager.set_active(session)
        assert [s.id for s in self.manager.history()] == [session.id]
