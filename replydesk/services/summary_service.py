"""One-line summaries and evergreen topic tags for feedback records."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..lib.llm_json import first_json_object
from ..models import Record
from . import record_service
from .ai_service_factory import AIServiceFactory
from .prompts import EVERGREEN_TOPICS, summary_prompt

logger = logging.getLogger(__name__)


def parse_summary_reply(reply: str, topics: Sequence[str] = EVERGREEN_TOPICS) -> Tuple[str, List[str]]:
    """Read ``{"summary", "evergreen_topics"}`` from a model reply.

    Topics outside the known list are dropped; an unreadable reply gives
    empty values.
    """
    parsed = first_json_object(reply)
    if parsed is None:
        logger.warning("Summary reply contained no JSON object")
        return "", []

    summary = parsed.get("summary") or ""
    raw_topics = parsed.get("evergreen_topics") or []
    if not isinstance(summary, str):
        summary = str(summary)
    if not isinstance(raw_topics, list):
        raw_topics = []

    allowed = set(topics)
    kept = []
    for topic in raw_topics:
        if topic in allowed and topic not in kept:
            kept.append(topic)
    return summary.strip(), kept


async def summarize(message: str) -> Tuple[str, List[str]]:
    reply = await AIServiceFactory.generate_response(summary_prompt(message))
    return parse_summary_reply(reply)


async def summarize_record(db: Session, record_id, message: str) -> Optional[Record]:
    summary, topics = await summarize(message)
    return record_service.update_summary(db, record_id, summary, topics)


async def summarize_pending(db: Session, items: Iterable) -> int:
    """Summarise every item with a blank summary; failures are logged and skipped.

    ``items`` may be Record rows or objects with ``id``, ``message`` and ``summary``.
    """
    done = 0
    for item in items:
        if (item.summary or "").strip():
            continue
        try:
            await summarize_record(db, item.id, item.message)
            done += 1
        except Exception as exc:
            db.rollback()
            logger.error(f"Failed to summarise record {item.id}: {str(exc)}")
    return done
