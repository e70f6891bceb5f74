"""Gemini drafting through its OpenAI compatibility endpoint."""

from typing import Optional

from ..config import get_settings
from .chat_completion import ChatCompletionService


class GeminiService(ChatCompletionService):
    provider_name = "gemini"
    base_url = "https://generativelanguage.googleapis.com/v1beta/openai/"
    default_model = "gemini-2.0-flash"

    def __init__(self, api_key: Optional[str] = None):
        api_key = api_key or get_settings().gemini_api_key
        if not api_key:
            raise ValueError("Gemini API key not configured")
        super().__init__(api_key)
