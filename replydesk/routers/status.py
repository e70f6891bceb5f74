from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.records import RecordOut, StatusOut, StatusUpdate, StatusUpdateOut
from ..services import record_service
from .auth import get_current_user

router = APIRouter(prefix="/api/status", tags=["status"])


@router.get("", response_model=StatusOut)
def get_status(
    record_id: str | None = Query(None, alias="recordId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = record_service.get_record(db, record_id)
    record = record_service.sync_outcome(db, record)
    return StatusOut(record_id=str(record.id), outcome=record.outcome, reply=record.reply)


@router.post("", response_model=StatusUpdateOut)
def update_status(
    body: StatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not body.record_id or not body.outcome:
        raise ValueError("Record ID and outcome are required")

    record = record_service.update_outcome(db, body.record_id, body.outcome)
    return StatusUpdateOut(
        message="Status updated successfully",
        record_id=str(record.id),
        outcome=record.outcome,
        updated_record=RecordOut.model_validate(record),
    )
