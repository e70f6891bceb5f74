"""
AI configuration models for provider selection
"""

from enum import Enum


class AIProvider(str, Enum):
    """Supported AI providers"""

    OPENAI = "openai"
    GEMINI = "gemini"


class AIModel(str, Enum):
    """Available AI models"""

    # OpenAI models
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"

    # Gemini models (via OpenAI compatibility)
    GEMINI_20_FLASH = "gemini-2.0-flash"
    GEMINI_15_PRO = "gemini-1.5-pro"
    GEMINI_15_FLASH = "gemini-1.5-flash"


PROVIDER_MODELS = {
    AIProvider.OPENAI: [AIModel.GPT_4O.value, AIModel.GPT_4O_MINI.value],
    AIProvider.GEMINI: [
        AIModel.GEMINI_20_FLASH.value,
        AIModel.GEMINI_15_PRO.value,
        AIModel.GEMINI_15_FLASH.value,
    ],
}

DEFAULT_MODELS = {
    AIProvider.OPENAI: AIModel.GPT_4O.value,
    AIProvider.GEMINI: AIModel.GEMINI_20_FLASH.value,
}


# Settings attribute holding each provider's API key
PROVIDER_KEY_SETTINGS = {
    AIProvider.OPENAI: "openai_api_key",
    AIProvider.GEMINI: "gemini_api_key",
}
