"""
Shared chat completion client for the text generation providers.

Every request here is a single prompt under a system prompt; nothing keeps
conversation state between calls.
"""

import logging
from typing import AsyncGenerator, List, Optional

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an assistant to public officers at a planning authority. "
    "Follow the instructions in each request exactly."
)


class ChatCompletionService:
    """Chat completions over an OpenAI-compatible endpoint"""

    provider_name = "openai"
    base_url: Optional[str] = None
    default_model = "gpt-4o"

    def __init__(self, api_key: str):
        self.client = AsyncOpenAI(api_key=api_key, base_url=self.base_url)

    @staticmethod
    def build_messages(prompt: str, system_prompt: Optional[str] = None) -> List[dict]:
        return [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    async def generate_response(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        system_prompt: Optional[str] = None,
    ) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=model or self.default_model,
                messages=self.build_messages(prompt, system_prompt),
                temperature=temperature,
                max_tokens=max_tokens,
                stream=False,
            )
            return response.choices[0].message.content or ""

        except Exception as e:
            logger.error(f"{self.provider_name} API error: {str(e)}")
            raise

    async def generate_streaming_response(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        system_prompt: Optional[str] = None,
    ) -> AsyncGenerator[str, None]:
        try:
            stream = await self.client.chat.completions.create(
                model=model or self.default_model,
                messages=self.build_messages(prompt, system_prompt),
                temperature=temperature,
                max_tokens=max_tokens,
                stream=True,
            )

            async for chunk in stream:
                if chunk.choices and chunk.choices[0].delta.content:
                    yield chunk.choices[0].delta.content

        except Exception as e:
            logger.error(f"{self.provider_name} streaming error: {str(e)}")
            raise
