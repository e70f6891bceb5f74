"""Knowledge base and pgvector diagnostics."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import engine, get_db
from ..models import User
from ..services import faq_service
from .auth import get_current_user
from .faq import get_embedder

router = APIRouter(prefix="/api/diagnostics", tags=["diagnostics"])


@router.get("/check-faq-chunks")
def check_faq_chunks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return faq_service.faq_chunk_report(db)


@router.get("/check-vector")
def check_vector(user: User = Depends(get_current_user)):
    return faq_service.vector_setup_report(engine)


@router.get("/test-embeddings")
def test_embeddings(
    faq_id: str | None = Query(None, alias="faqId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    embedder=Depends(get_embedder),
):
    if not faq_id:
        raise HTTPException(status_code=400, detail="faqId is required")
    if embedder is None:
        raise HTTPException(status_code=503, detail="Embeddings are not configured")

    report = faq_service.embedding_self_test(db, engine, embedder, faq_id)
    if report is None:
        raise HTTPException(status_code=404, detail=f"FAQ chunk not found: {faq_id}")
    return report
