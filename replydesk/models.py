"""
SQLAlchemy models for ReplyDesk
Feedback records, FAQ knowledge base, headlines and officer preferences
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from uuid import uuid4

from sqlalchemy import (
    Column,
    String,
    Boolean,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    Uuid,
    Index,
)
from sqlalchemy.dialects.postgresql import JSONB
from pgvector.sqlalchemy import Vector
from sqlalchemy.orm import DeclarativeBase, relationship, validates

from .config import get_settings

# JSONB on Postgres, plain JSON elsewhere (tests run on SQLite)
JSONType = JSON().with_variant(JSONB(), "postgresql")

EMBEDDING_DIMENSIONS = get_settings().embedding_dimensions


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models using SQLAlchemy 2.0 style"""

    pass


class Outcome(str, PyEnum):
    OPEN = "Open"
    DRAFT = "Draft"
    VETTED = "Vetted"
    REPLIED = "Replied"


class HeadlineType(str, PyEnum):
    TODAY = "today"
    OVERALL = "overall"
    EVERGREEN = "evergreen"


class User(Base):
    """Officer account"""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    email = Column(String(64), unique=True, nullable=False, index=True)
    password = Column(String(128), nullable=True)

    preferences = relationship(
        "Preferences", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class Record(Base):
    """A citizen feedback case and its reply workflow state"""

    __tablename__ = "records"

    id = Column(Uuid, primary_key=True, default=uuid4)
    message = Column(Text, nullable=False)
    section_code = Column(String(64))
    action_officer_1 = Column(Uuid, nullable=False, index=True)
    action_officer_2 = Column(String(128))
    creation_officer = Column(String(128))
    case_type = Column(String(64))
    channel = Column(String(64))
    category = Column(String(128))
    subcategory = Column(String(128))
    outcome = Column(String(16), nullable=False, default=Outcome.OPEN.value)
    reply_date = Column(DateTime(timezone=True))
    reply = Column(Text)
    planning_area = Column(String(128))
    location = Column(Text)
    location_x = Column(String(32))
    location_y = Column(String(32))
    draft = Column(JSONType)
    summary = Column(Text)
    reasoning = Column(Text)
    creation_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    receive_date = Column(DateTime(timezone=True))
    relevant_chunks = Column(JSONType, default=list)
    related_emails = Column(JSONType, default=list)
    evergreen_topics = Column(JSONType, default=list)

    __table_args__ = (
        Index("idx_records_officer_created", "action_officer_1", "creation_date"),
    )

    @validates("outcome")
    def validate_outcome(self, key, value):
        if value not in {o.value for o in Outcome}:
            raise ValueError(f"Invalid outcome: {value}")
        return value


class FAQChunk(Base):
    """Knowledge base snippet with its embedding"""

    __tablename__ = "faq_chunks"

    id = Column(Uuid, primary_key=True, default=uuid4)
    faq_id = Column(String(50), nullable=False, index=True)
    category = Column(String(100))
    section = Column(String(100))
    heading = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=True)


class Headline(Base):
    """AI generated theme over aggregated feedback"""

    __tablename__ = "headlines"

    id = Column(Uuid, primary_key=True, default=uuid4)
    title = Column(Text, nullable=False)
    match_percent = Column(String(16))
    desc = Column(Text)
    entities = Column(Text)
    examples = Column(Text)
    category = Column(String(128))
    date_processed = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    type = Column(String(16), nullable=False, default=HeadlineType.OVERALL.value)
    topic = Column(String(128))
    score = Column(String(16))

    @validates("type")
    def validate_type(self, key, value):
        if value not in {t.value for t in HeadlineType}:
            raise ValueError(f"Invalid headline type: {value}")
        return value


class Preferences(Base):
    """Per-officer reply signature preferences"""

    __tablename__ = "preferences"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    always_retrieve_drafts = Column(Boolean, default=False, nullable=False)
    greetings = Column(Text)
    closing = Column(Text)
    name = Column(String(128), nullable=False)
    role = Column(String(128), nullable=False)
    position = Column(String(128))
    department = Column(String(128))
    telephone = Column(String(64))
    links = Column(JSONType, default=list)
    closing_message = Column(Text)
    confidentiality_message = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="preferences")
