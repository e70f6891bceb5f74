"""OpenAI chat completions, used when Gemini is not configured or not selected."""

from typing import Optional

from ..config import get_settings
from .chat_completion import ChatCompletionService


class OpenAIService(ChatCompletionService):
    provider_name = "openai"
    default_model = "gpt-4o"

    def __init__(self, api_key: Optional[str] = None):
        api_key = api_key or get_settings().openai_api_key
        if not api_key:
            raise ValueError("OpenAI API key not configured")
        super().__init__(api_key)
