from datetime import date, datetime, time
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from medreminder.utils.time_parse import parse_weekdays, split_time_list

ScheduleType = Literal["DAILY", "CUSTOM_ALARMS", "INTERVAL", "WEEKLY", "AS_NEEDED"]
SCHEDULE_TYPES = ("DAILY", "CUSTOM_ALARMS", "INTERVAL", "WEEKLY", "AS_NEEDED")

class Medication(BaseModel):
    id: int
    name: Optional[str] = None
    start_date: Optional[str] = Field(default=None, description="dd/MM/yyyy, inclusive")
    end_date: Optional[str] = Field(default=None, description="dd/MM/yyyy, inclusive")

class Schedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    medication_id: int
    schedule_type: ScheduleType
    specific_times: List[str] = Field(default_factory=list, description="HH:mm entries; DAILY uses the first")
    days_of_week: List[int] = Field(default_factory=list, description="ISO weekdays, Mon=1..Sun=7")
    interval_hours: Optional[int] = None
    interval_minutes: Optional[int] = None
    interval_start_time: Optional[str] = None  # "HH:mm", default start of day
    interval_end_time: Optional[str] = None    # "HH:mm", default end of day

    # storage encodings ("08:00,20:00", "1,3,5") are accepted here and kept as lists
    @field_validator("specific_times", mode="before")
    @classmethod
    def _split_times(cls, v: Any) -> List[str]:
        return split_time_list(v)

    @field_validator("days_of_week", mode="before")
    @classmethod
    def _split_days(cls, v: Any) -> List[int]:
        return parse_weekdays(v)

    @property
    def interval_total_minutes(self) -> int:
        return (self.interval_hours or 0) * 60 + (self.interval_minutes or 0)

class ReminderInstant(BaseModel):
    model_config = ConfigDict(frozen=True)

    reminder_date: date
    reminder_time: time

    @property
    def at(self) -> datetime:
        return datetime.combine(self.reminder_date, self.reminder_time)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "ReminderInstant":
        return cls(reminder_date=dt.date(), reminder_time=dt.time())

class ReminderRecord(BaseModel):
    id: Optional[int] = None
    medication_id: int
    schedule_id: Optional[int] = None
    reminder_time: datetime
    is_taken: bool = False
    taken_at: Optional[datetime] = None

class ReconcileResult(BaseModel):
    to_insert: List[ReminderInstant] = Field(default_factory=list)
    to_delete: List[ReminderRecord] = Field(default_factory=list)
    unchanged: List[ReminderRecord] = Field(default_factory=list)

# ---- API payloads ----

class DayRequest(BaseModel):
    medication: Medication
    schedules: List[Schedule]
    target_date: date
    last_taken_on: Optional[str] = None  # "HH:mm", INTERVAL only

class DayResponse(BaseModel):
    medication_id: int
    target_date: date
    reminders: List[datetime]

class RangeRequest(BaseModel):
    medication: Medication
    schedules: List[Schedule]
    period_start: date
    period_end: date

class RangeResponse(BaseModel):
    medication_id: int
    period_start: date
    period_end: date
    reminders: Dict[date, List[time]]

class ReconcileRequest(RangeRequest):
    persisted: List[ReminderRecord] = Field(default_factory=list)

class RefreshRequest(BaseModel):
    medication: Medication
    schedules: List[Schedule]
    period_start: Optional[date] = None  # defaults to the medication's own window
    period_end: Optional[date] = None

class MarkTakenRequest(BaseModel):
    taken_at: Optional[datetime] = None

class SyncDecodeRequest(BaseModel):
    item: Dict[str, Any]  # medication sync item, camelCase, schedules nested
    period_start: date
    period_end: date
