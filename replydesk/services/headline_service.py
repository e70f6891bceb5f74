"""Headline generation over aggregated feedback summaries."""

import json
import logging
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..lib.llm_json import parse_json_reply
from ..models import Headline, HeadlineType, Record, utcnow
from . import record_service
from .ai_service_factory import AIServiceFactory
from .prompts import EVERGREEN_TOPICS, evergreen_prompt, headlines_prompt
from .summary_service import summarize_pending

logger = logging.getLogger(__name__)

TRENDS_PER_TOPIC = 3


def list_headlines(db: Session) -> List[Headline]:
    stmt = select(Headline).order_by(Headline.type, Headline.date_processed.desc())
    return list(db.execute(stmt).scalars())


def delete_headlines(db: Session) -> int:
    result = db.execute(delete(Headline))
    db.commit()
    return result.rowcount or 0


def replace_headlines(db: Session, headlines: Sequence[Headline]) -> int:
    """Swap the stored headlines for ``headlines`` in one transaction."""
    try:
        db.execute(delete(Headline))
        db.add_all(headlines)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return len(headlines)


def _summaries(records: Sequence[Record]) -> List[str]:
    return [r.summary for r in records if r.summary and r.summary.strip()]


def _as_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if value in (None, ""):
        return []
    return [str(value)]


def headlines_from_reply(reply: str, headline_type: HeadlineType, now: datetime) -> List[Headline]:
    """Build Headline rows from a JSON array reply; an unreadable reply gives none."""
    try:
        parsed = parse_json_reply(reply)
    except json.JSONDecodeError as exc:
        logger.error(f"Failed to parse {headline_type.value} headlines: {exc}")
        return []
    if not isinstance(parsed, list):
        logger.error(f"Expected a JSON array of {headline_type.value} headlines")
        return []

    headlines = []
    for entry in parsed:
        if not isinstance(entry, dict) or not entry.get("title"):
            continue
        match_percent = entry.get("match_percent")
        headlines.append(
            Headline(
                title=str(entry["title"]),
                match_percent="" if match_percent is None else str(match_percent),
                desc=entry.get("desc") or "",
                entities=", ".join(_as_list(entry.get("entities"))),
                examples=" | ".join(_as_list(entry.get("examples"))),
                category=entry.get("category") or "",
                date_processed=now,
                type=headline_type.value,
                topic=entry.get("topic"),
                score=None if entry.get("score") is None else str(entry["score"]),
            )
        )
    return headlines


def trends_from_reply(reply: str, topic: str, now: datetime) -> List[Headline]:
    try:
        parsed = parse_json_reply(reply)
    except json.JSONDecodeError as exc:
        logger.error(f"Failed to parse trends for topic {topic!r}: {exc}")
        return []
    if not isinstance(parsed, list):
        return []

    trends = []
    for entry in parsed:
        if not isinstance(entry, dict) or not entry.get("headline") or not entry.get("desc"):
            logger.warning(f"Skipping trend without headline or description for topic {topic!r}")
            continue
        examples = _as_list(entry.get("examples"))
        trends.append(
            Headline(
                title=str(entry["headline"]),
                match_percent="N/A",
                desc=str(entry["desc"]),
                entities="",
                examples=" | ".join(examples) if examples else "No examples",
                category="Evergreen",
                date_processed=now,
                type=HeadlineType.EVERGREEN.value,
                topic=topic,
                score=None if entry.get("score") is None else str(entry["score"]),
            )
        )
    return trends[:TRENDS_PER_TOPIC]


async def _generate_headlines(
    records: Sequence[Record], headline_type: HeadlineType, now: datetime
) -> List[Headline]:
    summaries = _summaries(records)
    if not summaries:
        logger.info(f"No feedback summaries for {headline_type.value} headlines")
        return []
    try:
        reply = await AIServiceFactory.generate_response(headlines_prompt(summaries))
    except Exception as exc:
        logger.error(f"Error generating {headline_type.value} headlines: {str(exc)}")
        return []
    return headlines_from_reply(reply, headline_type, now)


async def _generate_evergreen(records: Sequence[Record], now: datetime) -> List[Headline]:
    trends: List[Headline] = []
    for topic in EVERGREEN_TOPICS:
        tagged = [
            r for r in records if isinstance(r.evergreen_topics, list) and topic in r.evergreen_topics
        ]
        summaries = _summaries(tagged)
        if not summaries:
            continue
        try:
            reply = await AIServiceFactory.generate_response(evergreen_prompt(topic, summaries))
        except Exception as exc:
            logger.error(f"Error generating trends for topic {topic!r}: {str(exc)}")
            continue
        trends.extend(trends_from_reply(reply, topic, now))
    return trends


async def regenerate_headlines(db: Session, now: Optional[datetime] = None) -> List[Headline]:
    """Rebuild today, overall and evergreen headlines and replace the stored set."""
    now = now or utcnow()
    records = record_service.all_records(db)
    recent = record_service.records_since(db, now - timedelta(days=1))

    headlines = (
        await _generate_headlines(recent, HeadlineType.TODAY, now)
        + await _generate_headlines(records, HeadlineType.OVERALL, now)
        + await _generate_evergreen(records, now)
    )
    replace_headlines(db, headlines)
    logger.info(f"Saved {len(headlines)} headlines")
    return headlines


def headlines_are_stale(db: Session, now: Optional[datetime] = None) -> bool:
    """True when there are no headlines or any predates today's midnight (UTC)."""
    now = now or utcnow()
    midnight = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
    total = db.execute(select(func.count()).select_from(Headline)).scalar_one()
    if total == 0:
        return True
    stale = db.execute(
        select(func.count()).select_from(Headline).where(Headline.date_processed < midnight)
    ).scalar_one()
    return stale > 0


async def run_daily_processing(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Summarise unsummarised records, then refresh headlines if they are stale."""
    summarised = await summarize_pending(db, record_service.records_without_summary(db))
    regenerated = False
    if headlines_are_stale(db, now):
        await regenerate_headlines(db, now)
        regenerated = True
    return {
        "summarised": summarised,
        "regenerated": regenerated,
        "headlines": len(list_headlines(db)),
    }
