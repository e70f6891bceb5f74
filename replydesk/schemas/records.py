"""Pydantic schemas for feedback records, status and drafts."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from ..lib.editor_content import parse_stored_draft
from .base import CamelModel


class RecordOut(CamelModel):
    """A feedback record as returned to the dashboard and editor."""

    id: UUID
    message: str
    section_code: Optional[str] = None
    action_officer_1: str = "-"
    action_officer_2: Optional[str] = None
    creation_officer: Optional[str] = None
    case_type: Optional[str] = None
    channel: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    outcome: str = "Open"
    reply_date: Optional[datetime] = None
    reply: Optional[str] = None
    planning_area: Optional[str] = None
    location: Optional[str] = None
    location_x: Optional[str] = None
    location_y: Optional[str] = None
    draft: Optional[Dict[str, Any]] = None
    summary: Optional[str] = None
    reasoning: Optional[str] = None
    creation_date: Optional[datetime] = None
    receive_date: Optional[datetime] = None
    relevant_chunks: List[Dict[str, Any]] = Field(default_factory=list)
    related_emails: List[str] = Field(default_factory=list)
    evergreen_topics: List[str] = Field(default_factory=list)

    @field_validator("action_officer_1", mode="before")
    @classmethod
    def officer_or_dash(cls, v):
        return str(v) if v else "-"

    @field_validator("draft", mode="before")
    @classmethod
    def parse_draft(cls, v):
        return parse_stored_draft(v)

    @field_validator("relevant_chunks", "evergreen_topics", mode="before")
    @classmethod
    def list_or_empty(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("related_emails", mode="before")
    @classmethod
    def ids_as_strings(cls, v):
        return [str(item) for item in v] if isinstance(v, list) else []


class SeedResponse(CamelModel):
    message: str
    count: int


class StatusUpdate(CamelModel):
    record_id: Optional[str] = None
    outcome: Optional[str] = None


class StatusOut(CamelModel):
    success: bool = True
    record_id: str
    outcome: str
    reply: Optional[str] = None


class StatusUpdateOut(CamelModel):
    success: bool = True
    message: str
    record_id: str
    outcome: str
    updated_record: RecordOut


class EditorRequest(CamelModel):
    record_id: Optional[str] = None
    generate_draft: bool = False
    draft: Optional[Dict[str, Any]] = None


class EditorResponse(CamelModel):
    email_data: RecordOut
    editor_state: Optional[Dict[str, Any]] = None
    generated_draft: Optional[str] = None
    has_draft: bool = False
    reasoning: Optional[str] = None


class RelatedEmail(CamelModel):
    id: UUID
    message: str
    draft: Optional[Dict[str, Any]] = None
    reply: Optional[str] = None
    category: Optional[str] = None
    creation_date: Optional[datetime] = None

    @field_validator("draft", mode="before")
    @classmethod
    def parse_draft(cls, v):
        return parse_stored_draft(v)


class DocumentOut(CamelModel):
    reasoning: Optional[str] = None
    relevant_chunks: List[Dict[str, Any]] = Field(default_factory=list)
    related_emails: List[RelatedEmail] = Field(default_factory=list)


class SummaryItem(CamelModel):
    id: str
    message: str
    summary: Optional[str] = None


class SummaryRequest(CamelModel):
    records: List[SummaryItem] = Field(default_factory=list)
