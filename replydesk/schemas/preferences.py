"""Pydantic schemas for officer preferences."""

import json
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import CamelModel


class SignatureLink(CamelModel):
    type: str = ""
    url: str = ""


def _coerce_links(v):
    if isinstance(v, str):
        try:
            v = json.loads(v)
        except json.JSONDecodeError:
            return []
    return v if isinstance(v, list) else []


class PreferencesIn(CamelModel):
    """Body of POST /api/preferences. Name and role are checked by the handler."""

    always_retrieve_drafts: bool = False
    greetings: Optional[str] = None
    closing: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    telephone: Optional[str] = None
    links: List[SignatureLink] = Field(default_factory=list)
    closing_message: Optional[str] = None
    confidentiality_message: Optional[str] = None

    @field_validator("links", mode="before")
    @classmethod
    def parse_links(cls, v):
        return _coerce_links(v)


class PreferencesOut(PreferencesIn):
    id: UUID
    user_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SignedEmail(CamelModel):
    record_id: str
    body: str
