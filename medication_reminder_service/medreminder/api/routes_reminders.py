from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from medreminder.schemas.models import (
    DayRequest, DayResponse,
    RangeRequest, RangeResponse,
    ReconcileRequest, ReconcileResult,
    RefreshRequest, MarkTakenRequest,
    ReminderRecord,
)
from medreminder.services.materializer import compute_range_for_schedules, materialize_instants
from medreminder.services.reconciler import reconcile
from medreminder.services.recurrence import InvalidScheduleError, compute_day_datetimes
from medreminder.services.refresh import refresh_medication
from medreminder.services.reminder_store import REMINDER_STORE
from medreminder.services.security import require_internal_key
from medreminder.utils.time_parse import parse_time_of_day

router = APIRouter(prefix="/reminders", tags=["reminders"])

def _check_period(req: RangeRequest):
    if req.period_start > req.period_end:
        raise HTTPException(status_code=422, detail="period_start must not be after period_end")

@router.post("/day", response_model=DayResponse)
def reminders_for_day(req: DayRequest):
    last_taken = parse_time_of_day(req.last_taken_on) if req.last_taken_on else None
    found = set()
    try:
        for schedule in req.schedules:
            found.update(compute_day_datetimes(req.medication, schedule, req.target_date, last_taken))
    except InvalidScheduleError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return DayResponse(medication_id=req.medication.id, target_date=req.target_date, reminders=sorted(found))

@router.post("/range", response_model=RangeResponse)
def reminders_for_range(req: RangeRequest):
    _check_period(req)
    try:
        by_day = compute_range_for_schedules(req.medication, req.schedules, req.period_start, req.period_end)
    except InvalidScheduleError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return RangeResponse(
        medication_id=req.medication.id,
        period_start=req.period_start,
        period_end=req.period_end,
        reminders=by_day,
    )

@router.post("/reconcile", response_model=ReconcileResult)
def reconcile_reminders(req: ReconcileRequest):
    _check_period(req)
    instants = materialize_instants(req.medication, req.schedules, req.period_start, req.period_end)
    return reconcile(req.medication.id, instants, req.persisted, window=(req.period_start, req.period_end))

@router.post("/refresh", response_model=ReconcileResult, dependencies=[Depends(require_internal_key)])
def refresh(req: RefreshRequest):
    if req.period_start and req.period_end and req.period_start > req.period_end:
        raise HTTPException(status_code=422, detail="period_start must not be after period_end")
    return refresh_medication(req.medication, req.schedules, REMINDER_STORE, req.period_start, req.period_end)

@router.get("", response_model=List[ReminderRecord])
def list_reminders(medication_id: int):
    return REMINDER_STORE.list_for_medication(medication_id)

@router.post("/{reminder_id}/taken", response_model=ReminderRecord, dependencies=[Depends(require_internal_key)])
def mark_taken(reminder_id: int, req: MarkTakenRequest):
    rec = REMINDER_STORE.mark_taken(reminder_id, req.taken_at or datetime.now())
    if rec is None:
        raise HTTPException(status_code=404, detail="reminder_id not found")
    return rec
