# app/services/llm/gemini_provider.py
"""
Gemini adapter using structured output.

Blog drafts and translations are requested with `response_mime_type`
application/json and an explicit response schema, so the reply is parsed
with a plain `json.loads` instead of text slicing.
"""
import json
import logging
from typing import Any, Optional

import google.generativeai as genai

from app.services.llm.base import LLMProvider, LLMError, LLMResponseError, clean_text
from app.services.llm import prompts

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-1.5-flash"):
        if api_key:
            genai.configure(api_key=api_key)
        self.model = model

    def _model(self, system_instruction: str, generation_config: genai.GenerationConfig):
        return genai.GenerativeModel(
            model_name=self.model,
            system_instruction=system_instruction,
            generation_config=generation_config,
        )

    async def _generate(self, model, prompt: str) -> str:
        try:
            response = await model.generate_content_async(prompt)
        except Exception as e:
            raise LLMError(f"Gemini request failed: {e}") from e

        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.debug(f"Gemini usage: {usage}")

        try:
            text = response.text
        except ValueError as e:
            # Raised by the SDK when the candidate was blocked or has no parts
            raise LLMError(f"Gemini returned no text: {e}") from e
        if not text or not text.strip():
            raise LLMError("Gemini returned an empty response")
        return text

    async def _generate_json(self, system_instruction: str, schema: dict, prompt: str) -> dict:
        model = self._model(
            system_instruction,
            genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=schema,
                temperature=0.8,
                top_p=0.9,
            ),
        )
        text = await self._generate(model, prompt)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LLMResponseError(f"Invalid JSON from Gemini: {e}", text) from e
        if not isinstance(data, dict):
            raise LLMResponseError("Gemini output is not a JSON object", text)
        return data

    async def generate_blog(self, title: str, cta_type: Optional[str]) -> dict:
        prompt = prompts.GEMINI_BLOG_PROMPT_TEMPLATE.format(title=title, cta_type=cta_type or "")
        return await self._generate_json(
            prompts.BLOG_SYSTEM_INSTRUCTION, prompts.BLOG_RESPONSE_SCHEMA, prompt
        )

    async def generate_slug(self, existing_slug: str) -> str:
        model = self._model(
            prompts.SLUG_SYSTEM_INSTRUCTION,
            genai.GenerationConfig(response_mime_type="text/plain", temperature=0.9, top_p=0.9),
        )
        text = await self._generate(model, prompts.SLUG_PROMPT_TEMPLATE.format(slug=existing_slug))
        return clean_text(text)

    async def translate_blog(self, payload: dict[str, Any], language: str) -> dict:
        return await self._generate_json(
            prompts.TRANSLATION_SYSTEM_INSTRUCTION.format(language=language),
            prompts.TRANSLATION_RESPONSE_SCHEMA,
            json.dumps(payload, ensure_ascii=False),
        )
