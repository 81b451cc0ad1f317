"""
Language model adapters for blog generation and translation.
"""
from typing import Optional

from app.core.config import Settings, settings as default_settings
from app.services.llm.base import (
    LLMProvider,
    LLMError,
    LLMResponseError,
    clean_text,
    parse_json_object,
)


def create_llm_provider(config: Optional[Settings] = None) -> LLMProvider:
    """Build the provider selected by `LLM_PROVIDER`."""
    config = config or default_settings
    provider = config.LLM_PROVIDER.lower()

    if provider == "openai":
        from app.services.llm.openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=config.OPENAI_API_KEY,
            model=config.OPENAI_MODEL,
            translation_model=config.OPENAI_TRANSLATION_MODEL,
        )
    if provider == "gemini":
        from app.services.llm.gemini_provider import GeminiProvider
        return GeminiProvider(api_key=config.GEMINI_API_KEY, model=config.GEMINI_MODEL)

    raise ValueError(f"Unknown LLM provider: {config.LLM_PROVIDER}")


__all__ = [
    "LLMProvider",
    "LLMError",
    "LLMResponseError",
    "clean_text",
    "parse_json_object",
    "create_llm_provider",
]
