"""
Blog generation, translation and job services.
"""

from app.services.exceptions import SlugGenerationError, TranslationError
from app.services.llm import LLMProvider, LLMError, LLMResponseError, create_llm_provider

__all__ = [
    "SlugGenerationError",
    "TranslationError",
    "LLMProvider",
    "LLMError",
    "LLMResponseError",
    "create_llm_provider",
]
