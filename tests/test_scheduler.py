"""Tests for flattening programs into dated schedules."""

from datetime import date, timedelta

import pytest

from fitness_coach.engine.scheduler import Schedule, build_schedule, entry_for_date
from fitness_coach.models.program import Program

from conftest import PUSH_PULL


def make_program(weeks, days_per_week):
    return {
        "plan": [
            {
                "week": w,
                "days": [{"day_index": d, "label": f"W{w}D{d}", "focus": "Full body"} for d in range(1, days_per_week + 1)],
            }
            for w in range(1, weeks + 1)
        ]
    }


class TestBuildSchedule:
    """Test schedule construction."""

    def test_push_pull_example(self):
        """Two days starting on a Monday land on consecutive dates."""
        schedule = build_schedule(PUSH_PULL, date(2024, 1, 1))

        assert [(e.date, e.label, e.focus) for e in schedule] == [
            (date(2024, 1, 1), "Push Day", "Chest"),
            (date(2024, 1, 2), "Pull Day", "Back"),
        ]
        assert schedule[0].week == 1
        assert schedule[1].day_index == 2

    def test_length_and_ordering(self):
        """One entry per program day, strictly increasing in date."""
        start = date(2024, 2, 26)
        schedule = build_schedule(make_program(4, 3), start)

        assert len(schedule) == 12
        dates = [e.date for e in schedule]
        assert all(later > earlier for earlier, later in zip(dates, dates[1:]))
        assert dates[-1] == start + timedelta(days=11)

    def test_entry_for_date_is_inverse(self):
        """Every produced date looks up its own entry."""
        schedule = build_schedule(make_program(2, 4), date(2024, 5, 1))
        for entry in schedule:
            assert entry_for_date(schedule, entry.date) is entry

    def test_unscheduled_date(self):
        """Dates outside the schedule have no entry."""
        schedule = build_schedule(PUSH_PULL, date(2024, 1, 1))
        assert entry_for_date(schedule, date(2023, 12, 31)) is None
        assert entry_for_date(schedule, date(2024, 1, 3)) is None

    def test_out_of_order_input_is_sorted(self):
        """Weeks sort by number and days by day_index."""
        program = {
            "plan": [
                {"week": 2, "days": [{"day_index": 1, "label": "C"}]},
                {"week": 1, "days": [{"day_index": 2, "label": "B"}, {"day_index": 1, "label": "A"}]},
            ]
        }
        schedule = build_schedule(program, date(2024, 1, 1))
        assert [e.label for e in schedule] == ["A", "B", "C"]

    def test_numbering_gaps_are_positional(self):
        """Missing week or day numbers do not leave calendar gaps."""
        program = {
            "plan": [
                {"week": 1, "days": [{"day_index": 1, "label": "A"}, {"day_index": 4, "label": "B"}]},
                {"week": 3, "days": [{"day_index": 2, "label": "C"}]},
            ]
        }
        schedule = build_schedule(program, date(2024, 1, 1))
        assert [e.date for e in schedule] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]

    def test_summary_text(self):
        """Summary shows label and focus, then each block with its items."""
        program = {
            "plan": [
                {
                    "week": 1,
                    "days": [
                        {
                            "day_index": 1,
                            "label": "Leg Day",
                            "focus": "Legs",
                            "blocks": [{"type": "strength", "description": "3 rounds", "items": ["Squat", "Lunge"]}],
                        }
                    ],
                }
            ]
        }
        schedule = build_schedule(program, date(2024, 1, 1))
        assert schedule[0].summary == "**Leg Day** — Legs\n\nSTRENGTH: 3 rounds\n • Squat\n • Lunge"

    def test_program_model_input(self):
        """A parsed Program schedules the same as its mapping."""
        schedule = build_schedule(Program.model_validate(PUSH_PULL), date(2024, 1, 1))
        assert [e.label for e in schedule] == ["Push Day", "Pull Day"]

    @pytest.mark.parametrize(
        "program",
        [None, {}, "junk", {"plan": "weekly"}, {"plan": [1, "a"]}, {"plan": [{"week": 1, "days": "x"}]}],
    )
    def test_malformed_program_gives_empty_schedule(self, program):
        """A missing or malformed plan never raises."""
        schedule = build_schedule(program, date(2024, 1, 1))
        assert len(schedule) == 0
        assert list(schedule) == []

    def test_rebuild_does_not_touch_previous_schedule(self):
        """Building again yields a new schedule."""
        first = build_schedule(PUSH_PULL, date(2024, 1, 1))
        second = build_schedule(PUSH_PULL, date(2024, 2, 1))
        assert first[0].date == date(2024, 1, 1)
        assert second[0].date == date(2024, 2, 1)


class TestScheduleNavigation:
    """Test next/default entry helpers."""

    def setup_method(self):
        """Set up test fixtures."""
        self.schedule = build_schedule(make_program(1, 3), date(2024, 1, 1))

    def test_next_entry(self):
        """First entry on or after the date."""
        assert self.schedule.next_entry(date(2023, 12, 1)).date == date(2024, 1, 1)
        assert self.schedule.next_entry(date(2024, 1, 2)).date == date(2024, 1, 2)

    def test_next_entry_when_all_past(self):
        """Falls back to the first entry."""
        assert self.schedule.next_entry(date(2025, 1, 1)).date == date(2024, 1, 1)

    def test_default_entry(self):
        """Today's entry, else the first day."""
        assert self.schedule.default_entry(date(2024, 1, 3)).label == "W1D3"
        assert self.schedule.default_entry(date(2024, 6, 1)).label == "W1D1"

    def test_empty_schedule(self):
        """An empty schedule has no entries to offer."""
        assert Schedule().next_entry(date(2024, 1, 1)) is None
        assert Schedule().default_entry(date(2024, 1, 1)) is None
