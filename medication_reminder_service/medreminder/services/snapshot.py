# medreminder/services/snapshot.py
"""
Boundary encodings of schedules.

Storage rows keep lists as strings ("08:00,20:00", weekday CSV "1,3,5").
Companion sync items use camelCase keys, a JSON array of "HH:mm" times and
weekday names. Inside the service everything is a typed `Schedule`.
"""
import json
from typing import Any, Dict, List, Optional
from pydantic import ValidationError

from medreminder.core.logging_config import LOGGER
from medreminder.schemas.models import SCHEDULE_TYPES, Medication, Schedule
from medreminder.utils.time_parse import format_storage_date, parse_storage_date

WEEKDAY_NAMES = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]

def _known_type(raw: Any) -> Optional[str]:
    kind = str(raw or "").upper().strip()
    if kind not in SCHEDULE_TYPES:
        LOGGER.error("Unknown schedule type: %r", raw)
        return None
    return kind

def _build(data: Dict[str, Any]) -> Optional[Schedule]:
    try:
        return Schedule(**data)
    except ValidationError as e:
        LOGGER.error("Dropping unreadable schedule %s: %s", data.get("id"), e)
        return None

# ---- storage rows ----

def schedule_from_storage_row(row: Dict[str, Any]) -> Optional[Schedule]:
    kind = _known_type(row.get("schedule_type"))
    if kind is None:
        return None
    return _build({**row, "schedule_type": kind})

def schedule_to_storage_row(schedule: Schedule) -> Dict[str, Any]:
    row = schedule.model_dump()
    row["specific_times"] = ",".join(schedule.specific_times) or None
    row["days_of_week"] = ",".join(str(d) for d in schedule.days_of_week) or None
    return row

# ---- companion sync items ----

def _weekday_numbers(names: Any) -> List[int]:
    days: List[int] = []
    for name in names or []:
        key = str(name).upper().strip()
        if key in WEEKDAY_NAMES:
            days.append(WEEKDAY_NAMES.index(key) + 1)
        else:
            LOGGER.warning("Skipping unknown weekday name %r", name)
    return days

def schedule_to_sync_item(schedule: Schedule) -> Dict[str, Any]:
    return {
        "scheduleId": schedule.id,
        "scheduleType": schedule.schedule_type,
        "specificTimes": json.dumps(schedule.specific_times),
        "intervalHours": schedule.interval_hours,
        "intervalMinutes": schedule.interval_minutes,
        "intervalStartTime": schedule.interval_start_time,
        "intervalEndTime": schedule.interval_end_time,
        "dailyRepetitionDays": [WEEKDAY_NAMES[d - 1] for d in schedule.days_of_week],
    }

def schedule_from_sync_item(item: Dict[str, Any], medication_id: int) -> Optional[Schedule]:
    kind = _known_type(item.get("scheduleType"))
    if kind is None:
        return None
    return _build({
        "id": item.get("scheduleId"),
        "medication_id": medication_id,
        "schedule_type": kind,
        "specific_times": item.get("specificTimes"),
        "days_of_week": _weekday_numbers(item.get("dailyRepetitionDays")),
        "interval_hours": item.get("intervalHours"),
        "interval_minutes": item.get("intervalMinutes"),
        "interval_start_time": item.get("intervalStartTime"),
        "interval_end_time": item.get("intervalEndTime"),
    })

def medication_to_sync_item(medication: Medication, schedules: List[Schedule]) -> Dict[str, Any]:
    return {
        "medicationId": medication.id,
        "name": medication.name,
        "startDate": format_storage_date(parse_storage_date(medication.start_date)),
        "endDate": format_storage_date(parse_storage_date(medication.end_date)),
        "schedules": [schedule_to_sync_item(s) for s in schedules],
    }

def medication_from_sync_item(item: Dict[str, Any]) -> tuple[Medication, List[Schedule]]:
    medication = Medication(
        id=item["medicationId"],
        name=item.get("name"),
        start_date=item.get("startDate"),
        end_date=item.get("endDate"),
    )
    schedules = [
        s for s in (schedule_from_sync_item(raw, medication.id) for raw in item.get("schedules") or [])
        if s is not None
    ]
    return medication, schedules
