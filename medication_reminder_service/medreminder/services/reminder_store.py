from datetime import datetime
from itertools import count
from typing import Dict, List, Optional
from medreminder.schemas.models import ReconcileResult, ReminderRecord

class ReminderStore:
    """In-memory stand-in for the persisted reminder table."""

    def __init__(self) -> None:
        self._records: Dict[int, ReminderRecord] = {}
        self._ids = count(1)

    def list_for_medication(self, medication_id: int) -> List[ReminderRecord]:
        recs = [r for r in self._records.values() if r.medication_id == medication_id]
        return sorted(recs, key=lambda r: r.reminder_time)

    def get(self, reminder_id: int) -> Optional[ReminderRecord]:
        return self._records.get(reminder_id)

    def apply(self, medication_id: int, result: ReconcileResult, schedule_id: Optional[int] = None) -> List[ReminderRecord]:
        for rec in result.to_delete:
            stored = self._records.get(rec.id) if rec.id is not None else None
            # taken history is never removed, even if a caller asks
            if stored is not None and not stored.is_taken:
                del self._records[rec.id]

        created: List[ReminderRecord] = []
        for inst in result.to_insert:
            rec = ReminderRecord(
                id=next(self._ids),
                medication_id=medication_id,
                schedule_id=schedule_id,
                reminder_time=inst.at,
            )
            self._records[rec.id] = rec
            created.append(rec)
        return created

    def mark_taken(self, reminder_id: int, taken_at: Optional[datetime] = None) -> Optional[ReminderRecord]:
        rec = self._records.get(reminder_id)
        if rec is None:
            return None
        if rec.is_taken:
            return rec
        updated = rec.model_copy(update={"is_taken": True, "taken_at": taken_at or datetime.now()})
        self._records[reminder_id] = updated
        return updated

    def clear(self) -> None:
        self._records.clear()
        self._ids = count(1)

REMINDER_STORE = ReminderStore()
