"""Shared fixtures for the reminder engine tests."""

from datetime import date

import pytest

from medreminder.schemas.models import Medication, Schedule
from medreminder.services.reminder_store import REMINDER_STORE, ReminderStore

# 2024-01-15 is a Monday
MONDAY = date(2024, 1, 15)


@pytest.fixture
def medication() -> Medication:
    return Medication(id=1, name="Test Med", start_date="01/01/2024", end_date="31/12/2024")


@pytest.fixture
def open_medication() -> Medication:
    """No active-window bounds at all."""
    return Medication(id=2, name="Ongoing Med")


@pytest.fixture
def daily_schedule() -> Schedule:
    return Schedule(id=10, medication_id=1, schedule_type="DAILY", specific_times=["08:00"])


@pytest.fixture
def interval_schedule() -> Schedule:
    return Schedule(
        id=11,
        medication_id=1,
        schedule_type="INTERVAL",
        interval_hours=8,
        interval_minutes=0,
        interval_start_time="08:00",
        interval_end_time="22:00",
    )


@pytest.fixture
def store() -> ReminderStore:
    return ReminderStore()


@pytest.fixture
def clean_global_store():
    REMINDER_STORE.clear()
    yield REMINDER_STORE
    REMINDER_STORE.clear()
