from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.records import DocumentOut, RelatedEmail
from ..services import record_service
from .auth import get_current_user

router = APIRouter(prefix="/api/document", tags=["document"])


@router.get("", response_model=DocumentOut)
def get_references(
    record_id: str | None = Query(None, alias="recordId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Reasoning, knowledge base chunks and similar past emails behind a draft."""
    record = record_service.get_record(db, record_id)
    if not isinstance(record.related_emails, list):
        return DocumentOut()

    related = record_service.related_email_details(db, record.related_emails)
    return DocumentOut(
        reasoning=record.reasoning,
        relevant_chunks=record.relevant_chunks if isinstance(record.relevant_chunks, list) else [],
        related_emails=[RelatedEmail.model_validate(r) for r in related],
    )
