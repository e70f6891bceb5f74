"""Draft editing and AI draft generation."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import engine, get_db
from ..exceptions import GenerationError, RecordNotFoundError, ReplyDeskError
from ..lib.editor_content import has_content
from ..models import User
from ..schemas.records import EditorRequest, EditorResponse, RecordOut
from ..services import draft_service, faq_service, record_service
from ..services.embedding_client import get_embedding_client
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/editor", tags=["editor"])


def get_chunk_finder():
    """Vector search over the FAQ knowledge base for a record message."""
    settings = get_settings()

    def find(message: str):
        return faq_service.find_relevant_chunks(
            engine,
            get_embedding_client(),
            message,
            threshold=settings.faq_similarity_threshold,
            top_k=settings.faq_top_k,
        )

    return find


@router.get("", response_model=RecordOut)
def get_editor_record(
    record_id: str | None = Query(None, alias="recordId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return record_service.get_record(db, record_id)


@router.post("", response_model=EditorResponse)
async def save_or_generate(
    body: EditorRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    find_chunks=Depends(get_chunk_finder),
):
    record = record_service.get_record(db, body.record_id)
    response = EditorResponse(email_data=RecordOut.model_validate(record))

    if body.draft is not None:
        try:
            if has_content(body.draft):
                record_service.update_draft(db, record.id, body.draft)
                response.editor_state = body.draft
                response.has_draft = True
            else:
                record_service.delete_draft(db, record.id)
                response.has_draft = False
        except ReplyDeskError:
            raise
        except Exception as exc:
            db.rollback()
            logger.error(f"Error updating draft: {str(exc)}")
            return JSONResponse(status_code=500, content={"error": "Failed to update draft"})

    if body.generate_draft:
        try:
            generated = await draft_service.generate_draft(db, record.id, user.id, find_chunks)
        except RecordNotFoundError:
            raise
        except GenerationError as exc:
            db.rollback()
            logger.error(f"Error generating/saving draft: {str(exc)}")
            return JSONResponse(status_code=500, content={"error": "Failed to generate/save draft"})
        except Exception as exc:
            db.rollback()
            logger.error(f"Error handling similar emails: {str(exc)}")
            return JSONResponse(status_code=500, content={"error": "Failed to process similar emails"})

        response.email_data = RecordOut.model_validate(generated.record)
        response.reasoning = generated.reasoning
        response.generated_draft = generated.draft_text
        response.editor_state = generated.document
        response.has_draft = True

    return response


@router.delete("")
def delete_draft(
    record_id: str | None = Query(None, alias="recordId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = record_service.get_record(db, record_id)
    if record.action_officer_1 != user.id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    record_service.delete_draft(db, record.id)
    return {"success": True, "message": "Draft deleted successfully"}
