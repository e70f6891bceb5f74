"""FAQ knowledge base upload and search."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..config import get_settings
from ..database import engine, get_db
from ..exceptions import ConfigurationError
from ..models import User
from ..services import faq_service
from ..services.embedding_client import get_embedding_client
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["faq"])


def get_embedder():
    """Embedding client, or None when no OpenAI key is configured."""
    try:
        return get_embedding_client()
    except ConfigurationError as exc:
        logger.warning(str(exc))
        return None


@router.post("/api/csv-chunks")
async def upload_csv_chunks(
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    embedder=Depends(get_embedder),
):
    """Import FAQ chunks from a CSV with id, category, section, heading and content columns."""
    if file is None:
        raise HTTPException(status_code=400, detail="No CSV file provided")

    try:
        items = faq_service.parse_faq_csv(await file.read())
        stored = await run_in_threadpool(
            faq_service.import_faq_chunks,
            db,
            items,
            embedder,
            get_settings().embedding_batch_size,
        )
    except Exception as exc:
        db.rollback()
        logger.error(f"Error processing CSV: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process CSV file", "details": str(exc)},
        )

    return {
        "success": True,
        "message": f"Successfully processed {stored} FAQ items with embeddings",
        "totalRows": len(items),
    }


@router.get("/api/faq/search")
def search_faq(
    q: str = Query(..., min_length=1),
    limit: int = Query(5, ge=1, le=50),
    mode: Literal["vector", "text"] = "vector",
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    embedder=Depends(get_embedder),
):
    if mode == "text" or embedder is None:
        return {
            "mode": "text",
            "results": [faq_service.chunk_to_dict(c) for c in faq_service.search_chunks_text(db, q, limit)],
        }

    try:
        results = faq_service.find_relevant_chunks(
            engine,
            embedder,
            q,
            threshold=get_settings().faq_similarity_threshold,
            top_k=limit,
        )
    except Exception as exc:
        logger.warning(f"Vector search unavailable, falling back to text search: {exc}")
        return {
            "mode": "text",
            "results": [faq_service.chunk_to_dict(c) for c in faq_service.search_chunks_text(db, q, limit)],
        }
    return {"mode": "vector", "results": results}
