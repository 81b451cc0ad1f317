# app/services/slug_service.py
"""
Unique slug resolution for generated blogs.
"""
import logging
from typing import Optional
from sqlmodel import Session

from app.core.config import settings
from app.crud.blog import slugify, slug_exists
from app.models.blog import Blog
from app.services.exceptions import SlugGenerationError
from app.services.llm import LLMProvider, LLMError

logger = logging.getLogger(__name__)


async def resolve_unique_slug(
    db: Session,
    provider: LLMProvider,
    slug: str,
    llm_attempts: Optional[int] = None,
    max_suffix: Optional[int] = None
) -> str:
    """
    Return `slug` if no blog uses it, otherwise a free alternative.

    1. Ask the model for a new slug up to `llm_attempts` times
    2. Fall back to `<slug>-1` ... `<slug>-<max_suffix>`

    Raises:
        SlugGenerationError: every candidate is taken
    """
    llm_attempts = settings.SLUG_LLM_ATTEMPTS if llm_attempts is None else llm_attempts
    max_suffix = settings.SLUG_MAX_SUFFIX if max_suffix is None else max_suffix

    base = slugify(slug)
    if not base:
        raise SlugGenerationError(f"Cannot build a slug from {slug!r}")
    if not slug_exists(db, Blog, base):
        return base

    logger.info(f"Slug '{base}' already exists, looking for an alternative")
    tried = {base}

    for attempt in range(1, llm_attempts + 1):
        try:
            candidate = slugify(await provider.generate_slug(base))
        except LLMError as e:
            logger.warning(f"Slug attempt {attempt} failed: {e}")
            continue

        if not candidate or candidate in tried:
            continue
        tried.add(candidate)
        if not slug_exists(db, Blog, candidate):
            return candidate

    for i in range(1, max_suffix + 1):
        candidate = f"{base}-{i}"
        if candidate not in tried and not slug_exists(db, Blog, candidate):
            return candidate

    raise SlugGenerationError(
        f"No free slug for '{base}' after {llm_attempts} model attempts and {max_suffix} suffixes"
    )
