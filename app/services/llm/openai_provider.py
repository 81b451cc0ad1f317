# app/services/llm/openai_provider.py
"""
OpenAI chat-completion adapter.

Blog drafts come back as free text and are decoded with `parse_json_object`.
Translations are done one field group at a time: plain text, HTML and JSON
sub-objects each get their own instructions.
"""
import json
import logging
from typing import Any, Optional

from app.services.llm.base import LLMProvider, LLMError, clean_text, parse_json_object
from app.services.llm import prompts

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "subtitle", "overview", "callToAction")
HTML_FIELDS = ("introduction", "content", "content1", "content2", "conclusion")
JSON_FIELDS = ("SEO", "author")


class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        translation_model: str = "gpt-4o-mini",
        client=None,
    ):
        self.model = model
        self.translation_model = translation_model
        if client is None:
            from openai import AsyncOpenAI
            client = AsyncOpenAI(api_key=api_key)
        self.client = client

    async def _complete(self, model: str, system: str, user: str, **kwargs) -> str:
        try:
            completion = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **kwargs,
            )
        except Exception as e:
            raise LLMError(f"OpenAI request failed: {e}") from e

        if not completion.choices or not completion.choices[0].message.content:
            raise LLMError("OpenAI returned an empty message")
        return completion.choices[0].message.content.strip()

    async def generate_blog(self, title: str, cta_type: Optional[str]) -> dict:
        prompt = prompts.BLOG_PROMPT_TEMPLATE.format(title=title, cta_type=cta_type or "the reader")
        raw = await self._complete(self.model, prompts.BLOG_SYSTEM_INSTRUCTION, prompt)
        return parse_json_object(raw)

    async def generate_slug(self, existing_slug: str) -> str:
        raw = await self._complete(
            self.model,
            prompts.SLUG_SYSTEM_INSTRUCTION,
            prompts.SLUG_PROMPT_TEMPLATE.format(slug=existing_slug),
            temperature=0.9,
        )
        return clean_text(raw)

    async def translate_text(self, value: str, language: str) -> str:
        raw = await self._complete(
            self.translation_model,
            prompts.TEXT_TRANSLATION_SYSTEM,
            prompts.FIELD_TRANSLATION_PROMPT.format(kind="Text", value=value, language=language),
        )
        return clean_text(raw)

    async def translate_html(self, value: str, language: str) -> str:
        # Newlines are kept: they are significant inside <pre> blocks
        return await self._complete(
            self.translation_model,
            prompts.HTML_TRANSLATION_SYSTEM,
            prompts.FIELD_TRANSLATION_PROMPT.format(kind="HTML", value=value, language=language),
        )

    async def translate_json(self, value: Any, language: str) -> dict:
        raw = await self._complete(
            self.translation_model,
            prompts.JSON_TRANSLATION_SYSTEM,
            prompts.FIELD_TRANSLATION_PROMPT.format(
                kind="JSON", value=json.dumps(value, ensure_ascii=False), language=language
            ),
        )
        return parse_json_object(raw)

    async def translate_blog(self, payload: dict[str, Any], language: str) -> dict:
        groups = (
            (TEXT_FIELDS, self.translate_text),
            (HTML_FIELDS, self.translate_html),
            (JSON_FIELDS, self.translate_json),
        )
        translated: dict[str, Any] = {}
        for fields, translate in groups:
            for field in fields:
                if field not in payload:
                    continue
                value = payload[field]
                # Empty values are carried over untranslated
                translated[field] = await translate(value, language) if value else value
        return translated
