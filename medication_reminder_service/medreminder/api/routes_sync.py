from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from medreminder.schemas.models import RangeResponse, SyncDecodeRequest
from medreminder.services.materializer import compute_range_for_schedules
from medreminder.services.snapshot import medication_from_sync_item

router = APIRouter(prefix="/sync", tags=["sync"])

@router.post("/schedules/decode", response_model=RangeResponse)
def decode_and_materialize(req: SyncDecodeRequest):
    """What the companion device would show for this snapshot."""
    if req.period_start > req.period_end:
        raise HTTPException(status_code=422, detail="period_start must not be after period_end")
    try:
        medication, schedules = medication_from_sync_item(req.item)
    except (KeyError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=f"Unreadable sync item: {e}")

    return RangeResponse(
        medication_id=medication.id,
        period_start=req.period_start,
        period_end=req.period_end,
        reminders=compute_range_for_schedules(medication, schedules, req.period_start, req.period_end),
    )
