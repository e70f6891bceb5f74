import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.records import SummaryRequest
from ..services import summary_service
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/summary", tags=["summary"])


@router.post("")
async def summarize_records(
    body: SummaryRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        done = await summary_service.summarize_pending(db, body.records)
    except Exception as exc:
        logger.error(f"Error processing records: {str(exc)}")
        return JSONResponse(status_code=500, content={"error": "Failed to process records"})
    return {"message": "Records processed successfully", "summarised": done}
