"""Officer signature preferences and outgoing email composition."""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..lib.editor_content import document_paragraphs, parse_stored_draft
from ..models import Preferences, Record

logger = logging.getLogger(__name__)

FIELDS = (
    "always_retrieve_drafts",
    "greetings",
    "closing",
    "name",
    "role",
    "position",
    "department",
    "telephone",
    "links",
    "closing_message",
    "confidentiality_message",
)


def get_preferences(db: Session, user_id: UUID) -> Optional[Preferences]:
    return db.execute(
        select(Preferences).where(Preferences.user_id == user_id)
    ).scalar_one_or_none()


def save_preferences(db: Session, user_id: UUID, values: Dict[str, Any]) -> Preferences:
    """Create or update the officer's preferences. Name and role are mandatory."""
    if not (values.get("name") or "").strip() or not (values.get("role") or "").strip():
        raise ValidationError("Name and Role are required.")

    prefs = get_preferences(db, user_id)
    if prefs is None:
        prefs = Preferences(user_id=user_id)
        db.add(prefs)

    for field in FIELDS:
        if field in values:
            setattr(prefs, field, values[field])
    if prefs.always_retrieve_drafts is None:
        prefs.always_retrieve_drafts = False

    db.commit()
    db.refresh(prefs)
    logger.info("Saved preferences", extra={"officer_id": str(user_id)})
    return prefs


def _signature_lines(prefs: Preferences) -> List[str]:
    lines = [prefs.name, prefs.position or prefs.role, prefs.department, prefs.telephone]
    for link in prefs.links or []:
        if isinstance(link, dict) and link.get("url"):
            label = link.get("type")
            lines.append(f"{label}: {link['url']}" if label else link["url"])
    return [line for line in lines if line]


def compose_email(record: Record, prefs: Optional[Preferences]) -> str:
    """The reply as it would be sent: greeting, draft, closing and signature block."""
    paragraphs = [p for p in document_paragraphs(parse_stored_draft(record.draft)) if p.strip()]
    if prefs is None:
        return "\n\n".join(paragraphs)

    blocks: List[str] = []
    if prefs.greetings:
        blocks.append(prefs.greetings)
    blocks.extend(paragraphs)
    if prefs.closing_message:
        blocks.append(prefs.closing_message)

    signature = _signature_lines(prefs)
    if prefs.closing:
        signature.insert(0, prefs.closing)
    if signature:
        blocks.append("\n".join(signature))

    if prefs.confidentiality_message:
        blocks.append(prefs.confidentiality_message)
    return "\n\n".join(blocks)
