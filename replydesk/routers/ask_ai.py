"""Streaming writing assistant for the draft editor."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from ..models import User
from ..services import writing_assistant
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ask-ai", tags=["ask-ai"])


class AssistRequest(BaseModel):
    prompt: str = ""
    option: str
    command: Optional[str] = None


@router.post("")
async def ask_ai(body: AssistRequest, user: User = Depends(get_current_user)):
    # Validate before the response starts so errors become a 400, not a broken stream
    writing_assistant.build_prompt(body.option, body.prompt, body.command)

    async def stream():
        try:
            async for chunk in writing_assistant.stream_assist(body.option, body.prompt, body.command):
                yield chunk
        except Exception as exc:
            logger.error(f"Writing assistant stream failed: {str(exc)}")
            raise

    return StreamingResponse(stream(), media_type="text/plain; charset=utf-8")
