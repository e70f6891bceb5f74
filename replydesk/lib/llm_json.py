"""Helpers for pulling JSON out of model replies."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, Optional

_FENCE_START = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_END = re.compile(r"\n?```\s*$")
_OBJECT_BLOCK = re.compile(r"\{.*?\}", re.DOTALL)


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    cleaned = _FENCE_START.sub("", cleaned)
    cleaned = _FENCE_END.sub("", cleaned)
    return cleaned.strip()


def parse_json_reply(text: str) -> Any:
    """Parse a reply that should be pure JSON, possibly wrapped in a markdown fence.

    Raises ``json.JSONDecodeError`` when it is not.
    """
    return json.loads(strip_code_fences(text))


def _object_candidates(text: str) -> Iterator[str]:
    # Shortest blocks first, then the greedy span for nested objects
    yield from _OBJECT_BLOCK.findall(text)
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        yield text[start : end + 1]


def first_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the first ``{...}`` block in ``text`` that parses as an object."""
    for block in _object_candidates(text or ""):
        try:
            parsed = json.loads(block)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
