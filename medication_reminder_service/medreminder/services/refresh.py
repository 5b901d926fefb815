from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
from medreminder.core.logging_config import LOGGER
from medreminder.schemas.models import Medication, ReconcileResult, Schedule
from medreminder.services.materializer import daily_refresh_window, materialize_instants, medication_window
from medreminder.services.reconciler import reconcile
from medreminder.services.reminder_store import ReminderStore

def refresh_medication(
    medication: Medication,
    schedules: List[Schedule],
    store: ReminderStore,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    today: Optional[date] = None,
) -> ReconcileResult:
    """Materialize -> reconcile -> apply, for one medication over one window."""
    if period_start is None or period_end is None:
        default_start, default_end = medication_window(medication, today or date.today())
        period_start = period_start or default_start
        period_end = period_end or default_end

    instants = materialize_instants(medication, schedules, period_start, period_end)
    result = reconcile(
        medication.id,
        instants,
        store.list_for_medication(medication.id),
        window=(period_start, period_end),
    )
    # a single schedule owns every new row; otherwise the origin is ambiguous
    schedule_id = schedules[0].id if len(schedules) == 1 else None
    store.apply(medication.id, result, schedule_id=schedule_id)
    return result

def daily_refresh(
    entries: Iterable[Tuple[Medication, List[Schedule]]],
    store: ReminderStore,
    today: Optional[date] = None,
) -> Dict[int, ReconcileResult]:
    start, end = daily_refresh_window(today or date.today())
    results: Dict[int, ReconcileResult] = {}
    for medication, schedules in entries:
        if not schedules:
            # still reconciled: untaken rows of removed schedules must go
            LOGGER.warning("No schedule found for medication %s", medication.id)
        results[medication.id] = refresh_medication(medication, schedules, store, start, end)
    return results
