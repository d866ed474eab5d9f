"""
Tests for slot generator.
"""

import pendulum

from servicehours.domain.clock import FixedClock
from servicehours.domain.models import ResolvedTimeWindow, ServiceType, ServiceWindow
from servicehours.domain.slot_generator import (
    MAX_SLOTS_PER_WINDOW,
    SlotGenerator,
    round_up_to_interval,
)

TZ = "America/New_York"


def _generator(now):
    return SlotGenerator(clock=FixedClock(now))


class TestRoundUpToInterval:
    """Tests for lead time rounding."""

    def test_rounds_up_to_next_half_hour(self):
        """22:10 becomes 22:30."""
        instant = pendulum.datetime(2024, 1, 8, 22, 10, tz=TZ)
        assert round_up_to_interval(instant) == pendulum.datetime(2024, 1, 8, 22, 30, tz=TZ)

    def test_keeps_exact_boundary(self):
        """An instant already on a boundary is unchanged."""
        instant = pendulum.datetime(2024, 1, 8, 22, 30, tz=TZ)
        assert round_up_to_interval(instant) == instant

    def test_seconds_past_boundary_round_up(self):
        """22:30:15 is past 22:30, so it becomes 23:00."""
        instant = pendulum.datetime(2024, 1, 8, 22, 30, 15, tz=TZ)
        assert round_up_to_interval(instant) == pendulum.datetime(2024, 1, 8, 23, 0, tz=TZ)

    def test_rolls_over_hour_and_day(self):
        """23:45 rounds to midnight of the next day."""
        instant = pendulum.datetime(2024, 1, 8, 23, 45, tz=TZ)
        assert round_up_to_interval(instant) == pendulum.datetime(2024, 1, 9, 0, 0, tz=TZ)


class TestGenerateForWindow:
    """Tests for slots of a single window."""

    def test_regular_window_not_today(self):
        """A future date yields every half hour from open to close inclusive."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        window = ResolvedTimeWindow(open="11:00", close="13:00")

        slots = generator.generate_for_window(window, pendulum.datetime(2024, 1, 5, tz=TZ))

        assert [s.display_time for s in slots] == ["11:00", "11:30", "12:00", "12:30", "13:00"]
        assert not any(s.is_next_day for s in slots)

    def test_overnight_window_spills_into_next_day(self):
        """20:00-02:00 on Friday runs until 02:00 Saturday: 13 slots."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        window = ResolvedTimeWindow(open="20:00", close="02:00")

        slots = generator.generate_for_window(window, pendulum.datetime(2024, 1, 5, tz=TZ))

        assert len(slots) == 13
        assert [s.display_time for s in slots] == [
            "20:00", "20:30", "21:00", "21:30", "22:00", "22:30", "23:00", "23:30",
            "00:00", "00:30", "01:00", "01:30", "02:00",
        ]
        assert slots[0].instant == pendulum.datetime(2024, 1, 5, 20, 0, tz=TZ)
        assert slots[-1].instant == pendulum.datetime(2024, 1, 6, 2, 0, tz=TZ)
        assert [s.is_next_day for s in slots] == [False] * 8 + [True] * 5

    def test_lead_time_past_close_yields_nothing(self):
        """At 21:50 with 20 minutes lead, a window closing at 22:00 is done."""
        now = pendulum.datetime(2024, 1, 8, 21, 50, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="11:00", close="22:00")

        slots = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))

        assert slots == []

    def test_lead_time_clips_start(self):
        """At 12:05 with 20 minutes lead the first slot is 12:30."""
        now = pendulum.datetime(2024, 1, 8, 12, 5, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="11:00", close="14:00")

        slots = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))

        assert [s.display_time for s in slots] == ["12:30", "13:00", "13:30", "14:00"]

    def test_lead_time_before_open_starts_at_open(self):
        """An early lead instant doesn't move the start before opening."""
        now = pendulum.datetime(2024, 1, 8, 8, 0, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="11:00", close="12:00")

        slots = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))

        assert [s.display_time for s in slots] == ["11:00", "11:30", "12:00"]

    def test_lead_time_ignored_for_other_days(self):
        """The lead instant only applies when generating for today."""
        now = pendulum.datetime(2024, 1, 8, 21, 50, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="11:00", close="22:00")

        slots = generator.generate_for_window(
            window,
            pendulum.datetime(2024, 1, 9, tz=TZ),
            min_lead=now.add(minutes=20)
        )

        assert len(slots) == 23
        assert slots[0].display_time == "11:00"

    def test_lead_time_inside_overnight_tail(self):
        """Late at night, today's overnight window continues after midnight."""
        now = pendulum.datetime(2024, 1, 5, 23, 50, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="20:00", close="02:00")

        slots = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))

        assert [s.display_time for s in slots] == ["00:30", "01:00", "01:30", "02:00"]
        assert all(s.is_next_day for s in slots)

    def test_safety_cap(self):
        """A zero-length window is overnight for 24 hours but capped at 48 slots."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        window = ResolvedTimeWindow(open="00:00", close="00:00")

        slots = generator.generate_for_window(window, pendulum.datetime(2024, 1, 5, tz=TZ))

        assert len(slots) == MAX_SLOTS_PER_WINDOW
        assert slots[-1].display_time == "23:30"

    def test_cadence_and_bounds(self):
        """Consecutive slots are 30 minutes apart and stay within the window."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        window = ResolvedTimeWindow(open="18:15", close="01:15")
        day = pendulum.datetime(2024, 1, 5, tz=TZ)

        slots = generator.generate_for_window(window, day)

        opens = pendulum.datetime(2024, 1, 5, 18, 15, tz=TZ)
        closes = pendulum.datetime(2024, 1, 6, 1, 15, tz=TZ)
        for earlier, later in zip(slots, slots[1:]):
            assert (later.instant - earlier.instant).total_seconds() == 30 * 60
        assert all(opens <= s.instant <= closes for s in slots)
        assert slots[-1].instant == closes

    def test_deterministic(self):
        """Same inputs give the same slots."""
        now = pendulum.datetime(2024, 1, 8, 12, 5, tz=TZ)
        generator = _generator(now)
        window = ResolvedTimeWindow(open="11:00", close="22:00")

        first = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))
        second = generator.generate_for_window(window, now, min_lead=now.add(minutes=20))

        assert first == second


class TestGenerateForDay:
    """Tests for merged slots across a day's windows."""

    def test_split_shifts_are_merged(self):
        """Lunch and dinner slots come back in one ordered list."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        windows = [
            ResolvedTimeWindow(open="17:00", close="18:00"),
            ResolvedTimeWindow(open="11:00", close="12:00"),
        ]

        slots = generator.generate_for_windows(windows, pendulum.datetime(2024, 1, 5, tz=TZ))

        assert [s.display_time for s in slots] == ["11:00", "11:30", "12:00", "17:00", "17:30", "18:00"]

    def test_overlapping_windows_are_deduplicated(self):
        """Instants covered by two windows appear once."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        windows = [
            ResolvedTimeWindow(open="11:00", close="14:00"),
            ResolvedTimeWindow(open="13:00", close="15:00"),
        ]

        slots = generator.generate_for_windows(windows, pendulum.datetime(2024, 1, 5, tz=TZ))

        instants = [s.instant for s in slots]
        assert len(slots) == 9  # 11:00 .. 15:00
        assert instants == sorted(set(instants))

    def test_closed_day(self):
        """A weekday without windows is reported as closed."""
        generator = _generator(pendulum.datetime(2024, 1, 1, 9, 0, tz=TZ))
        windows = [ServiceWindow(ServiceType.TAKEOUT, 1, 5, "11:00", "22:00")]

        day_slots = generator.generate_for_day(windows, ServiceType.TAKEOUT, pendulum.datetime(2024, 1, 7, tz=TZ))

        assert day_slots.is_closed_day
        assert not day_slots.is_past_cutoff
        assert day_slots.slots == []

    def test_too_late_today(self):
        """A window applying today but without remaining slots is past cutoff."""
        now = pendulum.datetime(2024, 1, 8, 21, 50, tz=TZ)
        generator = _generator(now)
        windows = [ServiceWindow(ServiceType.TAKEOUT, 1, 5, "11:00", "22:00")]

        day_slots = generator.generate_for_day(windows, ServiceType.TAKEOUT, now, min_lead=now.add(minutes=20))

        assert day_slots.is_past_cutoff
        assert not day_slots.is_closed_day

    def test_day_anchored_at_midnight(self):
        """The result's date is the start of the target day."""
        now = pendulum.datetime(2024, 1, 8, 15, 0, tz=TZ)
        generator = _generator(now)
        windows = [ServiceWindow(ServiceType.TAKEOUT, 1, 5, "11:00", "22:00")]

        day_slots = generator.generate_for_day(windows, ServiceType.TAKEOUT, now)

        assert day_slots.date == pendulum.datetime(2024, 1, 8, tz=TZ)
        assert day_slots.slots[0].display_time == "11:00"
