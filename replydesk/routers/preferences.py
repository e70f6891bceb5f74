from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.preferences import PreferencesIn, PreferencesOut, SignedEmail
from ..services import preferences_service, record_service
from .auth import get_current_user

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesOut | None)
def get_preferences(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return preferences_service.get_preferences(db, user.id)


@router.post("")
def save_preferences(
    body: PreferencesIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    preferences_service.save_preferences(db, user.id, body.model_dump())
    return "Preferences saved successfully."


@router.get("/signature", response_model=SignedEmail)
def signed_email(
    record_id: str | None = Query(None, alias="recordId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The record's draft wrapped in the officer's greeting and signature."""
    record = record_service.get_record(db, record_id)
    prefs = preferences_service.get_preferences(db, user.id)
    return SignedEmail(record_id=str(record.id), body=preferences_service.compose_email(record, prefs))
