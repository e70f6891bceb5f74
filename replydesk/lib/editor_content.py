"""Conversions between plain text drafts and the editor's JSON document."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Tuple

PLACEHOLDER_DRAFT = "Draft in progress..."

_REASONING_RE = re.compile(r"Reasoning:\s*(.*?)\s*Draft:", re.DOTALL)
_DRAFT_RE = re.compile(r"Draft:\s*(.*)", re.DOTALL)


def text_to_document(text: Optional[str]) -> Dict[str, Any]:
    """Build an editor document with one paragraph per blank-line separated block."""
    body = text or PLACEHOLDER_DRAFT
    return {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": paragraph}]}
            for paragraph in body.split("\n\n")
        ],
    }


def _node_text(node: Dict[str, Any]) -> str:
    if node.get("type") == "text":
        return node.get("text") or ""
    if node.get("type") == "hardBreak":
        return "\n"
    return "".join(_node_text(child) for child in node.get("content") or [])


def document_paragraphs(document: Optional[Dict[str, Any]]) -> List[str]:
    if not document:
        return []
    return [_node_text(node) for node in document.get("content") or []]


def has_content(document: Optional[Dict[str, Any]]) -> bool:
    """True when any top-level node carries non-blank text."""
    if not document:
        return False
    for node in document.get("content") or []:
        for child in node.get("content") or []:
            if (child.get("text") or "").strip():
                return True
    return False


def parse_stored_draft(value: Any) -> Optional[Dict[str, Any]]:
    """Drafts saved by older clients may be JSON strings."""
    if value is None or isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def clean_model_output(text: str) -> str:
    """Strip stream framing and stray quotes from a generated reply."""
    cleaned = re.sub(r'^0:"|"$', "", text)
    cleaned = cleaned.replace('\n0:"', "\n")
    cleaned = cleaned.replace("\\n", "\n")
    cleaned = cleaned.replace('"', "")
    return cleaned.strip()


def split_reasoning_and_draft(text: str) -> Tuple[str, str]:
    cleaned = clean_model_output(text)
    reasoning_match = _REASONING_RE.search(cleaned)
    draft_match = _DRAFT_RE.search(cleaned)
    reasoning = reasoning_match.group(1).strip() if reasoning_match else ""
    draft = draft_match.group(1).strip() if draft_match else ""
    return reasoning, draft
