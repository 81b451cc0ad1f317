# app/services/llm/base.py
"""
Provider-neutral interface for the language model calls the blog pipeline makes,
plus the one place where free-form model output is decoded into JSON.
"""
import json
import re
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)

# C0/C1 control characters and backticks (markdown fences) never belong in the payload
_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F`]")
# Valid JSON escapes are captured and kept; any other backslash is dropped
_STRAY_BACKSLASH = re.compile(r'(\\["\\/bfnrt]|\\u[0-9a-fA-F]{4})|\\')


class LLMError(Exception):
    """Raised when a language model call fails."""


class LLMResponseError(LLMError):
    """Raised when model output cannot be decoded into the expected shape."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


def clean_text(text: str) -> str:
    """Remove control characters and backticks from model output."""
    return _CONTROL_CHARS.sub("", text).strip()


def parse_json_object(raw: Optional[str]) -> dict:
    """
    Decode the JSON object embedded in free-form model output.

    Takes everything from the first `{` to the last `}`, strips control
    characters and stray backslashes, and parses the result.

    Raises:
        LLMResponseError: output is empty, holds no object, or is not valid JSON
    """
    if not raw:
        raise LLMResponseError("Empty response from model", raw)

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        raise LLMResponseError("No JSON object found in model output", raw)

    candidate = _CONTROL_CHARS.sub("", raw[start:end + 1])
    candidate = _STRAY_BACKSLASH.sub(r"\1", candidate)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Invalid JSON in model output: {e}", raw) from e

    if not isinstance(data, dict):
        raise LLMResponseError("Model output is not a JSON object", raw)
    return data


class LLMProvider(ABC):
    """Language model operations used by the generation and translation services."""

    name: str = "base"

    @abstractmethod
    async def generate_blog(self, title: str, cta_type: Optional[str]) -> dict:
        """Draft a blog for `title`; returns the decoded JSON object."""

    @abstractmethod
    async def generate_slug(self, existing_slug: str) -> str:
        """Suggest a replacement for a slug that is already taken."""

    @abstractmethod
    async def translate_blog(self, payload: dict[str, Any], language: str) -> dict:
        """Translate the blog fields in `payload` into the two-letter `language`."""
