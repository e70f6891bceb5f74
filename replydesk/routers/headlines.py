import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.headlines import DailyRunOut, HeadlineOut
from ..services import headline_service
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/headlines", tags=["headlines"])


@router.get("", response_model=List[HeadlineOut])
def list_headlines(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return headline_service.list_headlines(db)


@router.delete("")
def delete_headlines(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    deleted = headline_service.delete_headlines(db)
    return {"message": "Headlines deleted", "deleted": deleted}


@router.post("", status_code=201)
async def regenerate_headlines(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        headlines = await headline_service.regenerate_headlines(db)
    except Exception as exc:
        logger.error(f"Error saving headlines: {str(exc)}")
        return JSONResponse(status_code=500, content={"error": "Failed to save headlines"})
    return {"message": "Headlines saved successfully", "count": len(headlines)}


@router.post("/daily", response_model=DailyRunOut)
async def daily_processing(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Summarise new records and refresh headlines once per day."""
    return await headline_service.run_daily_processing(db)
