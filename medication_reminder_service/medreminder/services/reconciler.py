# medreminder/services/reconciler.py
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Set, Tuple

from medreminder.core.logging_config import LOGGER
from medreminder.schemas.models import ReconcileResult, ReminderInstant, ReminderRecord

def _in_window(ts: datetime, window: Optional[Tuple[date, date]]) -> bool:
    if window is None:
        return True
    start, end = window
    return start <= ts.date() <= end

def reconcile(
    medication_id: int,
    instants: Iterable[ReminderInstant],
    persisted: Iterable[ReminderRecord],
    window: Optional[Tuple[date, date]] = None,
) -> ReconcileResult:
    """
    Diff freshly materialized instants against stored reminders of one medication.

    - to_insert: instants with no stored record at that exact timestamp
    - to_delete: untaken stored records whose timestamp was not materialized
    - unchanged: everything else; taken records always land here

    Records of other medications, or outside `window` (inclusive dates), are
    left untouched. Nothing is persisted here.
    """
    wanted: List[datetime] = sorted({i.at for i in instants if _in_window(i.at, window)})
    wanted_set: Set[datetime] = set(wanted)

    stored_times: Set[datetime] = set()
    to_delete: List[ReminderRecord] = []
    unchanged: List[ReminderRecord] = []

    for rec in persisted:
        if rec.medication_id != medication_id or not _in_window(rec.reminder_time, window):
            unchanged.append(rec)
            continue
        stored_times.add(rec.reminder_time)
        if rec.is_taken or rec.reminder_time in wanted_set:
            unchanged.append(rec)
        else:
            to_delete.append(rec)

    to_insert = [ReminderInstant.from_datetime(ts) for ts in wanted if ts not in stored_times]

    LOGGER.info(
        "reconcile med=%s insert=%d delete=%d unchanged=%d",
        medication_id, len(to_insert), len(to_delete), len(unchanged),
    )
    return ReconcileResult(to_insert=to_insert, to_delete=to_delete, unchanged=unchanged)
