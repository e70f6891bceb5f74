"""Queries and updates on feedback records."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..exceptions import RecordNotFoundError, ValidationError
from ..models import Outcome, Record
from .sample_records import generate_sample_records

logger = logging.getLogger(__name__)

VALID_OUTCOMES = [outcome.value for outcome in Outcome]


def parse_record_id(value: Optional[Any]) -> UUID:
    if value is None or value == "":
        raise ValidationError("Record ID is required")
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"Invalid record ID: {value}")


def get_record(db: Session, record_id: Any) -> Record:
    record = db.get(Record, parse_record_id(record_id))
    if record is None:
        raise RecordNotFoundError(record_id)
    return record


def list_records_for_officer(db: Session, officer_id: UUID) -> List[Record]:
    stmt = (
        select(Record)
        .where(Record.action_officer_1 == officer_id)
        .order_by(Record.creation_date.desc())
    )
    return list(db.execute(stmt).scalars())


def count_records_for_officer(db: Session, officer_id: UUID) -> int:
    stmt = select(func.count()).select_from(Record).where(Record.action_officer_1 == officer_id)
    return db.execute(stmt).scalar_one()


def seed_records(db: Session, officer_id: UUID, count: int) -> List[Record]:
    records = generate_sample_records(officer_id, count)
    db.add_all(records)
    db.commit()
    logger.info(f"Seeded {len(records)} sample records", extra={"officer_id": str(officer_id)})
    return records


def ensure_records(db: Session, officer_id: UUID, seed_count: int) -> List[Record]:
    """The officer's records, seeding samples first when there are none."""
    if count_records_for_officer(db, officer_id) == 0:
        seed_records(db, officer_id, seed_count)
    return list_records_for_officer(db, officer_id)


def all_records(db: Session) -> List[Record]:
    return list(db.execute(select(Record).order_by(Record.creation_date.desc())).scalars())


def records_since(db: Session, since: datetime) -> List[Record]:
    stmt = select(Record).where(Record.creation_date >= since).order_by(Record.creation_date.desc())
    return list(db.execute(stmt).scalars())


def records_without_summary(db: Session, officer_id: Optional[UUID] = None) -> List[Record]:
    stmt = select(Record).where((Record.summary.is_(None)) | (Record.summary == ""))
    if officer_id is not None:
        stmt = stmt.where(Record.action_officer_1 == officer_id)
    return list(db.execute(stmt).scalars())


def effective_outcome(record: Record) -> str:
    """A record that has been replied to is always Replied."""
    if record.reply:
        return Outcome.REPLIED.value
    return record.outcome or Outcome.OPEN.value


def sync_outcome(db: Session, record: Record) -> Record:
    expected = effective_outcome(record)
    if record.outcome != expected:
        logger.info(f"Correcting outcome of {record.id} from {record.outcome} to {expected}")
        record.outcome = expected
        db.commit()
    return record


def update_outcome(db: Session, record_id: Any, outcome: str) -> Record:
    if outcome not in VALID_OUTCOMES:
        raise ValidationError(
            f"Invalid outcome value. Must be one of: {', '.join(VALID_OUTCOMES)}"
        )
    record = get_record(db, record_id)
    record.outcome = Outcome.REPLIED.value if record.reply else outcome
    db.commit()
    return record


def update_draft(db: Session, record_id: Any, draft: Dict[str, Any]) -> Record:
    record = get_record(db, record_id)
    record.draft = draft
    db.commit()
    return record


def delete_draft(db: Session, record_id: Any) -> Record:
    record = get_record(db, record_id)
    record.draft = None
    # Dropping a draft reopens the case unless it was already replied to
    record.outcome = Outcome.REPLIED.value if record.reply else Outcome.OPEN.value
    db.commit()
    return record


def save_draft_and_reasoning(
    db: Session, record_id: Any, draft: Dict[str, Any], reasoning: str
) -> Record:
    record = get_record(db, record_id)
    record.draft = draft
    record.reasoning = reasoning
    record.outcome = Outcome.REPLIED.value if record.reply else Outcome.DRAFT.value
    db.commit()
    return record


def save_references(
    db: Session, record_id: Any, relevant_chunks: Sequence[Dict[str, Any]], related_ids: Sequence[Any]
) -> Record:
    record = get_record(db, record_id)
    record.relevant_chunks = list(relevant_chunks)
    record.related_emails = [str(item) for item in related_ids]
    db.commit()
    return record


def update_summary(db: Session, record_id: Any, summary: str, topics: Sequence[str]) -> Record:
    record = get_record(db, record_id)
    record.summary = summary
    record.evergreen_topics = list(topics)
    db.commit()
    return record


def related_email_details(db: Session, ids: Sequence[Any]) -> List[Record]:
    """Records for ``ids`` in the given order, skipping ones that no longer exist."""
    wanted = []
    for item in ids:
        try:
            wanted.append(parse_record_id(item))
        except ValidationError:
            logger.warning(f"Skipping malformed related email id: {item}")
    if not wanted:
        return []
    found = {r.id: r for r in db.execute(select(Record).where(Record.id.in_(wanted))).scalars()}
    return [found[record_id] for record_id in wanted if record_id in found]

