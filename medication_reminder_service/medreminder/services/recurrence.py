# medreminder/services/recurrence.py
"""
Recurrence engine: one schedule + one calendar day -> reminder times.

Pure and stateless. The primary service and the companion device both call
these functions on the same schedule snapshot, so the output must depend on
nothing but the arguments.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional, Tuple

from medreminder.core.engine_config import INTERVAL_ITERATION_SLACK
from medreminder.core.logging_config import LOGGER
from medreminder.schemas.models import Medication, Schedule
from medreminder.utils.time_parse import (
    END_OF_DAY_SECONDS,
    SECONDS_PER_DAY,
    parse_storage_date,
    parse_time_of_day,
    seconds_of_day,
    time_from_seconds,
)

class InvalidScheduleError(ValueError):
    """Structurally impossible input (missing medication or schedule)."""

def active_window(medication: Medication) -> Tuple[Optional[date], Optional[date]]:
    return parse_storage_date(medication.start_date), parse_storage_date(medication.end_date)

def is_active_on(medication: Medication, target_date: date) -> bool:
    start, end = active_window(medication)
    if start is not None and target_date < start:
        return False
    if end is not None and target_date > end:
        return False
    return True

def _parsed_times(schedule: Schedule) -> List[time]:
    out: List[time] = []
    for raw in schedule.specific_times:
        t = parse_time_of_day(raw)
        if t is not None:
            out.append(t)
    return out

def _daily(schedule: Schedule, target_date: date) -> List[time]:
    if schedule.days_of_week and target_date.isoweekday() not in schedule.days_of_week:
        return []
    if not schedule.specific_times:
        return []
    # first entry by list order, not the earliest time
    first = parse_time_of_day(schedule.specific_times[0])
    return [first] if first is not None else []

def _custom_alarms(schedule: Schedule) -> List[time]:
    return _parsed_times(schedule)

def _window_bound(raw: Optional[str], default_seconds: int, label: str) -> int:
    if raw is None or not str(raw).strip():
        return default_seconds
    t = parse_time_of_day(raw)
    if t is None:
        LOGGER.warning("Interval %s %r unreadable; using %s", label, raw, time_from_seconds(default_seconds))
        return default_seconds
    return seconds_of_day(t)

def _interval(schedule: Schedule, last_taken_on: Optional[time] = None) -> List[time]:
    total_minutes = schedule.interval_total_minutes
    if total_minutes <= 0:
        LOGGER.warning(
            "Schedule %s: non-positive interval (%sh %sm), no reminders",
            schedule.id, schedule.interval_hours, schedule.interval_minutes,
        )
        return []

    step = total_minutes * 60
    window_start = _window_bound(schedule.interval_start_time, 0, "start")
    window_end = _window_bound(schedule.interval_end_time, END_OF_DAY_SECONDS, "end")

    first = window_start
    if last_taken_on is not None:
        after_taken = seconds_of_day(last_taken_on) + step
        if after_taken > window_end or after_taken >= SECONDS_PER_DAY:
            LOGGER.debug("Schedule %s: next dose after %s falls outside the window", schedule.id, last_taken_on)
            return []
        first = max(after_taken, window_start)

    ceiling = SECONDS_PER_DAY // step + INTERVAL_ITERATION_SLACK
    out: List[time] = []
    current = first
    # offsets only grow, so a time-of-day can never wrap past midnight here
    while current <= window_end and current < SECONDS_PER_DAY and len(out) < ceiling:
        out.append(time_from_seconds(current))
        current += step
    return out

def compute_day(
    medication: Medication,
    schedule: Schedule,
    target_date: date,
    last_taken_on: Optional[time] = None,
) -> List[time]:
    """
    Reminder times for a single day, ascending and distinct.

    `last_taken_on` only affects INTERVAL schedules: the day's first reminder
    is pushed to one interval after the dose actually taken.
    """
    if medication is None or schedule is None:
        raise InvalidScheduleError("medication and schedule are required")

    if not is_active_on(medication, target_date):
        return []

    kind = schedule.schedule_type
    if kind == "DAILY":
        times = _daily(schedule, target_date)
    elif kind == "CUSTOM_ALARMS":
        times = _custom_alarms(schedule)
    elif kind == "INTERVAL":
        times = _interval(schedule, last_taken_on)
    elif kind == "WEEKLY":
        # known gap: weekly schedules are accepted but never generate reminders
        LOGGER.debug("Schedule %s: WEEKLY generation not implemented", schedule.id)
        times = []
    elif kind == "AS_NEEDED":
        times = []
    else:
        raise InvalidScheduleError(f"unknown schedule type {kind!r}")

    result = sorted(set(times))
    LOGGER.debug(
        "compute_day med=%s schedule=%s type=%s date=%s -> %s",
        medication.id, schedule.id, kind, target_date, [t.isoformat() for t in result],
    )
    return result

def compute_day_datetimes(
    medication: Medication,
    schedule: Schedule,
    target_date: date,
    last_taken_on: Optional[time] = None,
) -> List[datetime]:
    return [datetime.combine(target_date, t) for t in compute_day(medication, schedule, target_date, last_taken_on)]
