"""AI reply drafting for a single feedback record."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..config import get_settings
from ..exceptions import GenerationError
from ..lib.editor_content import split_reasoning_and_draft, text_to_document
from ..lib.similarity import rank_similar
from ..models import Record
from . import record_service
from .ai_service_factory import AIServiceFactory
from .prompts import draft_prompt

logger = logging.getLogger(__name__)

# (message) -> [{heading, content, similarity}]
ChunkFinder = Callable[[str], List[Dict[str, Any]]]


@dataclass
class GeneratedDraft:
    record: Record
    draft_text: str
    reasoning: str
    document: Dict[str, Any]
    relevant_chunks: List[Dict[str, Any]] = field(default_factory=list)
    related_ids: List[str] = field(default_factory=list)


async def _relevant_chunks(record: Record, find_chunks: Optional[ChunkFinder]) -> List[Dict[str, Any]]:
    existing = record.relevant_chunks if isinstance(record.relevant_chunks, list) else []
    if existing or find_chunks is None:
        return list(existing)
    try:
        return await run_in_threadpool(find_chunks, record.message)
    except Exception as exc:
        # Drafting still goes ahead without knowledge base context
        logger.error(f"Error finding relevant chunks for {record.id}: {str(exc)}")
        return []


def similar_replied_emails(db: Session, record: Record, officer_id: UUID, limit: int):
    """Top matches among the officer's other records, and the replied ones among them."""
    others = [
        r for r in record_service.list_records_for_officer(db, officer_id) if r.id != record.id
    ]
    matches = rank_similar(record.message, others, text_of=lambda r: r.message, limit=limit)
    examples = [
        {"message": m.item.message, "reply": m.item.reply, "similarity": m.similarity}
        for m in matches
        if m.item.reply is not None
    ]
    return matches, examples


async def generate_draft(
    db: Session,
    record_id: Any,
    officer_id: UUID,
    find_chunks: Optional[ChunkFinder] = None,
) -> GeneratedDraft:
    settings = get_settings()
    record = record_service.get_record(db, record_id)

    chunks = await _relevant_chunks(record, find_chunks)

    matches, examples = similar_replied_emails(db, record, officer_id, settings.related_email_limit)
    related_ids = [str(m.item.id) for m in matches]
    record_service.save_references(db, record.id, chunks, related_ids)

    try:
        reply = await AIServiceFactory.generate_response(draft_prompt(record.message, chunks, examples))
        reasoning, draft_text = split_reasoning_and_draft(reply)
        document = text_to_document(draft_text)
        record = record_service.save_draft_and_reasoning(db, record.id, document, reasoning)
    except Exception as exc:
        raise GenerationError(f"Draft generation failed: {exc}") from exc

    logger.info(
        "Generated draft",
        extra={"record_id": str(record.id), "chunks": len(chunks), "examples": len(examples)},
    )

    return GeneratedDraft(
        record=record,
        draft_text=draft_text,
        reasoning=reasoning,
        document=document,
        relevant_chunks=chunks,
        related_ids=related_ids,
    )
