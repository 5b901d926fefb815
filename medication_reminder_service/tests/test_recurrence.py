"""Single-day reminder generation.

Test Organization:
- TestActiveWindow: start/end date gating for every schedule type
- TestDaily: first-time-only, weekday gating, malformed entries
- TestCustomAlarms: all entries, ordering, malformed entries
- TestInterval: window stepping, defaults, zero interval, last-taken anchor
- TestNoOpTypes: WEEKLY and AS_NEEDED
"""

from datetime import date, datetime, time

import pytest

from medreminder.schemas.models import Medication, Schedule
from medreminder.services.recurrence import (
    InvalidScheduleError,
    compute_day,
    compute_day_datetimes,
    is_active_on,
)

MONDAY = date(2024, 1, 15)
TUESDAY = date(2024, 1, 16)

ALL_TYPES = ["DAILY", "CUSTOM_ALARMS", "INTERVAL", "WEEKLY", "AS_NEEDED"]


def _schedule(kind: str, **fields) -> Schedule:
    base = {
        "id": 99,
        "medication_id": 1,
        "schedule_type": kind,
        "specific_times": ["08:00", "20:00"],
        "interval_hours": 4,
        "interval_minutes": 0,
    }
    base.update(fields)
    return Schedule(**base)


# =============================================================================
# ACTIVE WINDOW
# =============================================================================


class TestActiveWindow:
    """A medication outside its start/end dates never reminds."""

    @pytest.mark.parametrize("kind", ALL_TYPES)
    def test_before_start_is_empty(self, medication, kind):
        assert compute_day(medication, _schedule(kind), date(2023, 12, 31)) == []

    @pytest.mark.parametrize("kind", ALL_TYPES)
    def test_after_end_is_empty(self, medication, kind):
        assert compute_day(medication, _schedule(kind), date(2025, 1, 1)) == []

    def test_bounds_are_inclusive(self, medication, daily_schedule):
        assert compute_day(medication, daily_schedule, date(2024, 1, 1)) == [time(8, 0)]
        assert compute_day(medication, daily_schedule, date(2024, 12, 31)) == [time(8, 0)]

    def test_no_bounds_means_always_active(self, open_medication):
        assert is_active_on(open_medication, date(1999, 1, 1))
        assert is_active_on(open_medication, date(2099, 1, 1))

    def test_malformed_start_date_is_ignored(self, daily_schedule):
        med = Medication(id=1, start_date="2024-01-01", end_date="31/01/2024")
        assert compute_day(med, daily_schedule, date(2023, 6, 1)) == [time(8, 0)]
        assert compute_day(med, daily_schedule, date(2024, 2, 1)) == []


# =============================================================================
# DAILY
# =============================================================================


class TestDaily:
    def test_single_time_every_day(self, open_medication, daily_schedule):
        assert compute_day(open_medication, daily_schedule, MONDAY) == [time(8, 0)]
        assert compute_day_datetimes(open_medication, daily_schedule, MONDAY) == [datetime(2024, 1, 15, 8, 0)]

    def test_only_first_entry_by_list_order(self, open_medication):
        schedule = _schedule("DAILY", specific_times=["21:00", "07:00"])
        assert compute_day(open_medication, schedule, MONDAY) == [time(21, 0)]

    def test_weekday_included(self, open_medication):
        schedule = _schedule("DAILY", specific_times=["08:00"], days_of_week=[1, 3])
        assert compute_day(open_medication, schedule, MONDAY) == [time(8, 0)]

    def test_weekday_excluded(self, open_medication):
        schedule = _schedule("DAILY", specific_times=["08:00"], days_of_week=[1, 3])
        assert compute_day(open_medication, schedule, TUESDAY) == []

    def test_weekday_csv_from_storage(self, open_medication):
        schedule = _schedule("DAILY", specific_times="08:00", days_of_week="2,x,9")
        assert schedule.days_of_week == [2]
        assert compute_day(open_medication, schedule, TUESDAY) == [time(8, 0)]
        assert compute_day(open_medication, schedule, MONDAY) == []

    def test_malformed_first_entry_yields_nothing(self, open_medication):
        schedule = _schedule("DAILY", specific_times=["8am", "09:00"])
        assert compute_day(open_medication, schedule, MONDAY) == []

    @pytest.mark.parametrize("times", [",08:00", ["", "08:00"]])
    def test_blank_first_entry_yields_nothing(self, open_medication, times):
        schedule = _schedule("DAILY", specific_times=times)
        assert compute_day(open_medication, schedule, MONDAY) == []

    def test_no_times(self, open_medication):
        assert compute_day(open_medication, _schedule("DAILY", specific_times=[]), MONDAY) == []


# =============================================================================
# CUSTOM_ALARMS
# =============================================================================


class TestCustomAlarms:
    def test_all_entries_sorted(self, open_medication):
        schedule = _schedule("CUSTOM_ALARMS", specific_times=["21:00", "09:00"])
        assert compute_day(open_medication, schedule, MONDAY) == [time(9, 0), time(21, 0)]

    def test_duplicates_collapse(self, open_medication):
        schedule = _schedule("CUSTOM_ALARMS", specific_times=["09:00", "09:00", "13:30"])
        assert compute_day(open_medication, schedule, MONDAY) == [time(9, 0), time(13, 30)]

    def test_malformed_entries_skipped(self, open_medication):
        schedule = _schedule("CUSTOM_ALARMS", specific_times=["09:00", "25:00", "noon", "18:15:30"])
        assert compute_day(open_medication, schedule, MONDAY) == [time(9, 0), time(18, 15, 30)]

    def test_comma_joined_storage_string(self, open_medication):
        schedule = _schedule("CUSTOM_ALARMS", specific_times="20:00,08:00")
        assert compute_day(open_medication, schedule, MONDAY) == [time(8, 0), time(20, 0)]


# =============================================================================
# INTERVAL
# =============================================================================


class TestInterval:
    def test_every_eight_hours_in_window(self, medication, interval_schedule):
        assert compute_day(medication, interval_schedule, MONDAY) == [time(8, 0), time(16, 0)]

    def test_end_is_inclusive(self, open_medication):
        schedule = _schedule("INTERVAL", interval_hours=2, interval_start_time="08:00", interval_end_time="12:00")
        assert compute_day(open_medication, schedule, MONDAY) == [time(8, 0), time(10, 0), time(12, 0)]

    def test_default_window_is_whole_day(self, open_medication):
        schedule = _schedule("INTERVAL", interval_hours=8)
        assert compute_day(open_medication, schedule, MONDAY) == [time(0, 0), time(8, 0), time(16, 0)]

    def test_hours_and_minutes_combine(self, open_medication):
        schedule = _schedule(
            "INTERVAL", interval_hours=1, interval_minutes=30,
            interval_start_time="09:00", interval_end_time="12:00",
        )
        assert compute_day(open_medication, schedule, MONDAY) == [
            time(9, 0), time(10, 30), time(12, 0),
        ]

    @pytest.mark.parametrize("hours,minutes", [(0, 0), (None, None), (0, -5)])
    def test_non_positive_interval_is_empty(self, open_medication, hours, minutes):
        schedule = _schedule("INTERVAL", interval_hours=hours, interval_minutes=minutes)
        assert compute_day(open_medication, schedule, MONDAY) == []

    def test_one_minute_interval_stays_within_day(self, open_medication):
        schedule = _schedule("INTERVAL", interval_hours=0, interval_minutes=1)
        times = compute_day(open_medication, schedule, MONDAY)
        assert len(times) == 24 * 60
        assert times[0] == time(0, 0)
        assert times[-1] == time(23, 59)

    def test_late_start_does_not_wrap_past_midnight(self, open_medication):
        schedule = _schedule("INTERVAL", interval_hours=3, interval_start_time="22:00")
        assert compute_day(open_medication, schedule, MONDAY) == [time(22, 0)]

    def test_malformed_bounds_fall_back_to_day_edges(self, open_medication):
        schedule = _schedule(
            "INTERVAL", interval_hours=12, interval_start_time="xx", interval_end_time="99:99",
        )
        assert compute_day(open_medication, schedule, MONDAY) == [time(0, 0), time(12, 0)]

    def test_start_after_end_is_empty(self, open_medication):
        schedule = _schedule("INTERVAL", interval_hours=1, interval_start_time="20:00", interval_end_time="08:00")
        assert compute_day(open_medication, schedule, MONDAY) == []

    def test_last_taken_shifts_first_reminder(self, medication, interval_schedule):
        assert compute_day(medication, interval_schedule, MONDAY, last_taken_on=time(9, 30)) == [time(17, 30)]

    def test_last_taken_before_window_uses_window_start(self, medication, interval_schedule):
        assert compute_day(medication, interval_schedule, MONDAY, last_taken_on=time(0, 0)) == [
            time(8, 0), time(16, 0),
        ]

    def test_last_taken_pushes_past_window(self, medication, interval_schedule):
        assert compute_day(medication, interval_schedule, MONDAY, last_taken_on=time(15, 0)) == []

    def test_last_taken_ignored_for_other_types(self, open_medication, daily_schedule):
        assert compute_day(open_medication, daily_schedule, MONDAY, last_taken_on=time(9, 0)) == [time(8, 0)]


# =============================================================================
# NO-OP TYPES AND STRUCTURAL ERRORS
# =============================================================================


class TestNoOpTypes:
    def test_weekly_generates_nothing(self, open_medication):
        schedule = _schedule("WEEKLY", days_of_week=[1], specific_times=["08:00"])
        assert compute_day(open_medication, schedule, MONDAY) == []

    @pytest.mark.parametrize("day", [MONDAY, TUESDAY, date(2030, 6, 1)])
    def test_as_needed_generates_nothing(self, open_medication, day):
        assert compute_day(open_medication, _schedule("AS_NEEDED"), day) == []

    def test_missing_schedule_raises(self, medication):
        with pytest.raises(InvalidScheduleError):
            compute_day(medication, None, MONDAY)

    def test_missing_medication_raises(self, daily_schedule):
        with pytest.raises(InvalidScheduleError):
            compute_day(None, daily_schedule, MONDAY)
