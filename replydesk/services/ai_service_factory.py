"""
AI Service Factory for unified access to different AI providers
Manages OpenAI and Gemini services through a common interface
"""

import logging
from typing import AsyncGenerator, Dict, Optional, Union

from ..ai_config import AIProvider, DEFAULT_MODELS, PROVIDER_KEY_SETTINGS, PROVIDER_MODELS
from ..config import get_settings
from .chat_completion import ChatCompletionService
from .gemini_service import GeminiService
from .openai_service import OpenAIService

logger = logging.getLogger(__name__)

SERVICE_CLASSES = {
    AIProvider.OPENAI: OpenAIService,
    AIProvider.GEMINI: GeminiService,
}


class AIServiceFactory:
    """Factory for creating and managing AI service instances"""

    _services: Dict[AIProvider, ChatCompletionService] = {}

    @classmethod
    def get_service(cls, provider: Union[AIProvider, str]) -> ChatCompletionService:
        """Get or create the service for a provider"""

        provider = AIProvider(provider)
        if provider not in cls._services:
            cls._services[provider] = SERVICE_CLASSES[provider]()
        return cls._services[provider]

    @classmethod
    def reset(cls) -> None:
        cls._services = {}

    @classmethod
    async def generate_response(
        cls,
        prompt: str,
        provider: Optional[Union[AIProvider, str]] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Generate a response using the specified (or configured) provider"""
        settings = get_settings()
        provider = provider or cls.get_provider_from_environment()
        service = cls.get_service(provider)

        return await service.generate_response(
            prompt=prompt,
            model=model or cls.get_default_model(provider),
            temperature=settings.temperature if temperature is None else temperature,
            max_tokens=max_tokens or settings.max_tokens,
            system_prompt=system_prompt,
        )

    @classmethod
    async def generate_streaming_response(
        cls,
        prompt: str,
        provider: Optional[Union[AIProvider, str]] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> AsyncGenerator[str, None]:
        """Generate a streaming response using the specified (or configured) provider"""
        settings = get_settings()
        provider = provider or cls.get_provider_from_environment()
        service = cls.get_service(provider)

        async for chunk in service.generate_streaming_response(
            prompt=prompt,
            model=model or cls.get_default_model(provider),
            temperature=settings.temperature if temperature is None else temperature,
            max_tokens=max_tokens or settings.max_tokens,
            system_prompt=system_prompt,
        ):
            yield chunk

    @classmethod
    def get_default_model(cls, provider: Union[AIProvider, str]) -> str:
        """Configured model when it belongs to the provider, else the provider default"""

        provider = AIProvider(provider)
        configured = get_settings().default_model
        if configured in PROVIDER_MODELS[provider]:
            return configured
        return DEFAULT_MODELS[provider]

    @classmethod
    def get_provider_from_environment(cls) -> AIProvider:
        """Configured provider, or the other one when only its key is set"""

        settings = get_settings()
        default_provider = settings.default_ai_provider

        try:
            provider = AIProvider(default_provider)
        except ValueError:
            logger.warning(
                f"Invalid default provider: {default_provider}, using Gemini"
            )
            provider = AIProvider.GEMINI

        if getattr(settings, PROVIDER_KEY_SETTINGS[provider]):
            return provider

        for fallback in AIProvider:
            if getattr(settings, PROVIDER_KEY_SETTINGS[fallback]):
                logger.warning(
                    f"No API key for {provider.value}, using {fallback.value} instead"
                )
                return fallback
        return provider
