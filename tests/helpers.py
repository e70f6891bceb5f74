"""Builders shared by unit and contract tests."""

from datetime import datetime, timedelta, timezone

from replydesk.models import Record


def make_record(db, officer_id, message="I have a question about the plot near my block.", **fields):
    fields.setdefault("creation_date", datetime.now(timezone.utc))
    fields.setdefault("relevant_chunks", [])
    fields.setdefault("related_emails", [])
    fields.setdefault("evergreen_topics", [])
    record = Record(message=message, action_officer_1=officer_id, **fields)
    db.add(record)
    db.commit()
    return record


def days_ago(days):
    return datetime.now(timezone.utc) - timedelta(days=days)
