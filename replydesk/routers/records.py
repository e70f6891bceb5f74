"""Record dashboard endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..models import User
from ..schemas.records import RecordOut, SeedResponse
from ..services import record_service, summary_service
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/records", tags=["records"])

SEED_BATCH = 13


@router.get("", response_model=List[RecordOut])
async def list_records(
    generate_summary: bool = Query(False, alias="generateSummary"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The officer's records, newest first. Seeds samples for a new officer."""
    records = record_service.ensure_records(db, user.id, get_settings().seed_sample_count)

    if generate_summary:
        done = await summary_service.summarize_pending(db, records)
        if done:
            logger.info(f"Generated {done} record summaries")
            records = record_service.list_records_for_officer(db, user.id)

    return records


@router.post("", response_model=SeedResponse)
def seed_records(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    records = record_service.seed_records(db, user.id, SEED_BATCH)
    return SeedResponse(message="Records saved!", count=len(records))


@router.get("/{record_id}", response_model=RecordOut)
def get_record(
    record_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return record_service.get_record(db, record_id)
