"""Tests for the shared absolute-time event schedule."""

import pytest

from tunescribe.output import EventSchedule, TimedEvent


class TestEventSchedule:
    """Tests for sorting and delta conversion."""

    def test_sorted_is_stable(self):
        schedule = EventSchedule()
        for time, name in [(10, "a"), (0, "b"), (10, "c"), (5, "d"), (0, "e")]:
            schedule.add(time, name)

        assert [e.payload for e in schedule.sorted()] == ["b", "e", "d", "a", "c"]
        assert len(schedule) == 5

    def test_deltas(self):
        schedule = EventSchedule()
        schedule.add(480, "off")
        schedule.add(0, "on")
        schedule.add(960, "end")

        assert list(schedule.deltas()) == [(0, "on"), (480, "off"), (480, "end")]

    def test_first_delta_counts_from_zero(self):
        schedule = EventSchedule()
        schedule.add(100, "x")
        assert list(schedule.deltas()) == [(100, "x")]

    def test_empty(self):
        assert list(EventSchedule().deltas()) == []

    def test_negative_time_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            EventSchedule().add(-1, "x")

    def test_timed_event_is_immutable(self):
        event = TimedEvent(3, b"\x90")
        with pytest.raises(AttributeError):
            event.time = 4
