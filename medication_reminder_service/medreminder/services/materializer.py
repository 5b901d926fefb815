from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, rrule

from medreminder.core.engine_config import DEFAULT_PLAN_MONTHS, REFRESH_DAYS_AHEAD
from medreminder.core.logging_config import LOGGER
from medreminder.schemas.models import Medication, ReminderInstant, Schedule
from medreminder.services.recurrence import active_window, compute_day

def _days(start: date, end: date) -> Iterable[date]:
    for dt in rrule(DAILY, dtstart=datetime.combine(start, time.min), until=datetime.combine(end, time.min)):
        yield dt.date()

def _clip_to_window(medication: Medication, start: date, end: date) -> Optional[Tuple[date, date]]:
    med_start, med_end = active_window(medication)
    if med_start is not None and end < med_start:
        return None
    if med_end is not None and start > med_end:
        return None
    if med_start is not None and start < med_start:
        start = med_start
    if med_end is not None and end > med_end:
        end = med_end
    return start, end

def compute_range(
    medication: Medication,
    schedule: Schedule,
    period_start: date,
    period_end: date,
    last_taken_at: Optional[datetime] = None,
) -> Dict[date, List[time]]:
    """
    Walk period_start..period_end (inclusive) and collect each day's times.
    Only days with at least one reminder appear in the result.
    """
    if period_start > period_end:
        return {}

    clipped = _clip_to_window(medication, period_start, period_end)
    if clipped is None:
        LOGGER.debug("compute_range med=%s: %s..%s outside active window", medication.id, period_start, period_end)
        return {}

    buckets: Dict[date, List[time]] = {}
    for day in _days(*clipped):
        taken_today = last_taken_at.time() if last_taken_at and last_taken_at.date() == day else None
        times = compute_day(medication, schedule, day, taken_today)
        if times:
            buckets.setdefault(day, []).extend(times)

    return {day: sorted(set(times)) for day, times in buckets.items()}

def compute_range_for_schedules(
    medication: Medication,
    schedules: List[Schedule],
    period_start: date,
    period_end: date,
) -> Dict[date, List[time]]:
    merged: Dict[date, set] = {}
    for schedule in schedules:
        for day, times in compute_range(medication, schedule, period_start, period_end).items():
            merged.setdefault(day, set()).update(times)
    return {day: sorted(merged[day]) for day in sorted(merged)}

def materialize_instants(
    medication: Medication,
    schedules: List[Schedule],
    period_start: date,
    period_end: date,
) -> List[ReminderInstant]:
    by_day = compute_range_for_schedules(medication, schedules, period_start, period_end)
    return [
        ReminderInstant(reminder_date=day, reminder_time=t)
        for day in sorted(by_day)
        for t in by_day[day]
    ]

def daily_refresh_window(today: date, days_ahead: int = REFRESH_DAYS_AHEAD) -> Tuple[date, date]:
    return today, today + relativedelta(days=days_ahead)

def medication_window(medication: Medication, today: date, months: int = DEFAULT_PLAN_MONTHS) -> Tuple[date, date]:
    """Whole-course window: medication start (or today) through its end (or start + N months)."""
    med_start, med_end = active_window(medication)
    start = med_start or today
    end = med_end or (start + relativedelta(months=months))
    return start, end
