from datetime import datetime, time

import pytest

from activebreak.reminders.cadence import (
    is_eligible_tick,
    is_minute_cadence,
    tolerance_minutes,
    window_anchor,
)
from activebreak.reminders.domain import EngineTuning

from tests.fakes import FakeRule


def at(hour, minute, day=2, second=0):
    return datetime(2025, 1, day, hour, minute, second)


class TestTolerance:
    @pytest.mark.parametrize(
        "interval, expected",
        [(1, 0), (4, 2), (5, 2), (6, 3), (60, 3), (1439, 3)],
    )
    def test_is_min_of_cap_and_half_interval(self, interval, expected):
        assert tolerance_minutes(interval, 3) == expected


class TestMinuteCadence:
    def test_five_minute_interval_boundary(self):
        """elapsed=7, 7 mod 5 = 2 <= tolerance 2."""
        rule = FakeRule(interval_minutes=5, window_start=time(8, 0))
        assert is_eligible_tick(rule, at(8, 7))

    def test_five_minute_interval_outside_tolerance(self):
        rule = FakeRule(interval_minutes=5, window_start=time(8, 0))
        assert not is_eligible_tick(rule, at(8, 8))

    def test_window_start_itself_is_eligible(self):
        rule = FakeRule(interval_minutes=60)
        assert is_eligible_tick(rule, at(8, 0))

    def test_before_window_start_is_not_eligible(self):
        rule = FakeRule(interval_minutes=1, window_start=time(8, 0))
        assert not is_eligible_tick(rule, at(7, 59))

    def test_hourly_rule_with_late_tick(self):
        rule = FakeRule(interval_minutes=60)
        assert is_eligible_tick(rule, at(9, 3))
        assert is_eligible_tick(rule, at(9, 3, second=59))
        assert not is_eligible_tick(rule, at(9, 4))
        assert not is_eligible_tick(rule, at(8, 30))

    def test_one_minute_interval_always_eligible(self):
        rule = FakeRule(interval_minutes=1)
        for minute in range(0, 60, 7):
            assert is_eligible_tick(rule, at(10, minute))

    def test_tolerance_cap_is_tunable(self):
        rule = FakeRule(interval_minutes=60)
        strict = EngineTuning(max_tolerance_minutes=0)
        assert is_eligible_tick(rule, at(9, 0), strict)
        assert not is_eligible_tick(rule, at(9, 1), strict)


class TestOvernightAnchor:
    def test_after_midnight_anchors_to_yesterdays_start(self):
        rule = FakeRule(interval_minutes=60, window_start=time(22, 0), window_end=time(6, 0))
        assert window_anchor(rule, at(1, 2, day=3)) == at(22, 0, day=2)

    def test_after_midnight_cadence_continues(self):
        rule = FakeRule(interval_minutes=60, window_start=time(22, 0), window_end=time(6, 0))
        # 22:00 -> 01:02 = 182 минуты, 182 % 60 = 2
        assert is_eligible_tick(rule, at(1, 2, day=3))
        assert not is_eligible_tick(rule, at(1, 30, day=3))

    def test_before_midnight_anchors_to_today(self):
        rule = FakeRule(interval_minutes=30, window_start=time(22, 0), window_end=time(6, 0))
        assert window_anchor(rule, at(23, 0)) == at(22, 0)
        assert is_eligible_tick(rule, at(23, 1))

    def test_same_day_window_never_looks_back(self):
        rule = FakeRule(interval_minutes=30, window_start=time(8, 0), window_end=time(20, 0))
        assert window_anchor(rule, at(7, 0)) == at(8, 0)


class TestDayCadence:
    def test_selected_by_interval_magnitude(self):
        assert is_minute_cadence(FakeRule(interval_minutes=1439))
        assert not is_minute_cadence(FakeRule(interval_minutes=1440))

    def test_every_other_day_from_creation(self):
        rule = FakeRule(
            interval_minutes=1440,
            interval_days=2,
            created_at=datetime(2025, 1, 1, 10, 0),
        )
        assert is_eligible_tick(rule, datetime(2025, 1, 1, 23, 0))
        assert is_eligible_tick(rule, datetime(2025, 1, 2, 9, 0))
        assert not is_eligible_tick(rule, datetime(2025, 1, 2, 10, 0))
        # 47 ч = одни целые сутки
        assert not is_eligible_tick(rule, datetime(2025, 1, 3, 9, 0))
        assert is_eligible_tick(rule, datetime(2025, 1, 3, 10, 0))

    def test_counts_whole_days_not_calendar_dates(self):
        rule = FakeRule(
            interval_minutes=1440,
            interval_days=2,
            created_at=datetime(2025, 1, 1, 23, 0),
        )
        # 33 ч после создания, хотя по календарю прошло два дня
        assert not is_eligible_tick(rule, datetime(2025, 1, 3, 8, 0))
        assert is_eligible_tick(rule, datetime(2025, 1, 3, 23, 0))

    def test_zero_days_means_every_day(self):
        rule = FakeRule(interval_minutes=2880, interval_days=0)
        assert is_eligible_tick(rule, datetime(2025, 1, 2, 9, 17))

    def test_created_in_future_is_not_eligible(self):
        rule = FakeRule(
            interval_minutes=1440,
            interval_days=3,
            created_at=datetime(2025, 2, 1, 8, 0),
        )
        assert not is_eligible_tick(rule, datetime(2025, 1, 20, 9, 0))

    def test_minute_offset_is_ignored_in_day_mode(self):
        rule = FakeRule(interval_minutes=1440, interval_days=1)
        assert is_eligible_tick(rule, datetime(2025, 1, 5, 13, 37))
