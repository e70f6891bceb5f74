"""Inline editor assistance: continue, improve, shorten, lengthen, fix and free-form commands."""

import re
from typing import AsyncGenerator, Optional

from ..exceptions import ValidationError
from .ai_service_factory import AIServiceFactory
from .prompts import ASSIST_INSTRUCTIONS, ASSISTANT_ROLE, WRITING_RULES, assist_user_message

OPTIONS = tuple(ASSIST_INSTRUCTIONS)

_TAG = re.compile(r"<[^>]*>")
_PREAMBLE = "Please only change the text in your response. Do not add any commentary. "


def strip_html(text: str) -> str:
    return _TAG.sub("", text or "")


def build_prompt(option: str, prompt: str, command: Optional[str] = None) -> tuple:
    """Return ``(system_prompt, user_message)`` for an assistant option."""
    if option not in ASSIST_INSTRUCTIONS:
        raise ValidationError(f"Unknown option: {option}. Expected one of: {', '.join(OPTIONS)}")
    if option == "zap" and not (command or "").strip():
        raise ValidationError("The zap option needs a command")

    text = _PREAMBLE + strip_html(prompt)
    system = f"{ASSISTANT_ROLE} {WRITING_RULES}\n{ASSIST_INSTRUCTIONS[option]}"
    return system, assist_user_message(option, text, command)


async def stream_assist(option: str, prompt: str, command: Optional[str] = None) -> AsyncGenerator[str, None]:
    system, message = build_prompt(option, prompt, command)
    async for chunk in AIServiceFactory.generate_streaming_response(message, system_prompt=system):
        yield chunk
