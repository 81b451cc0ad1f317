# app/services/blog_translator.py
"""
Translation of a blog's source-language Content and BlogTranslation into
another language, stored as new rows on the same Blog.
"""
import logging
from typing import Optional

from pydantic import ValidationError
from sqlmodel import Session

from app.core.config import settings
from app.core.sitemap import add_to_sitemap, blog_url
from app.models.blog import Blog, BlogTranslation, Content
from app.schemas.generation import TranslatedBlog
from app.services.exceptions import TranslationError
from app.services.llm import LLMProvider, LLMError

logger = logging.getLogger(__name__)


def build_translation_payload(content: Content, translation: BlogTranslation) -> dict:
    """Collect the translatable fields of a blog, keyed as the model sees them."""
    return {
        "title": translation.title,
        "subtitle": translation.subtitle,
        "overview": translation.overview,
        "author": translation.author,
        "introduction": content.introduction,
        "content": content.content,
        "content1": content.content1,
        "content2": content.content2,
        "callToAction": content.cta,
        "SEO": content.seo,
        "conclusion": content.conclusion,
    }


async def translate_payload(
    provider: LLMProvider,
    payload: dict,
    language: str,
    max_attempts: int = 3,
    blog_id: Optional[int] = None
) -> TranslatedBlog:
    """
    Translate `payload`, retrying failed or malformed responses immediately.

    Raises:
        TranslationError: every attempt failed
    """
    last_error: Optional[Exception] = None
    for attempt in range(1, max_attempts + 1):
        try:
            data = await provider.translate_blog(payload, language)
            return TranslatedBlog.model_validate(data)
        except (LLMError, ValidationError) as e:
            last_error = e
            logger.warning(f"Retry attempt {attempt} failed for language {language}: {e}")

    raise TranslationError(
        f"Translation to '{language}' failed after {max_attempts} attempts: {last_error}",
        blog_id=blog_id,
        language=language,
    )


async def translate_blog(
    db: Session,
    provider: LLMProvider,
    blog_id: int,
    language: str,
    max_attempts: Optional[int] = None
) -> Optional[Content]:
    """
    Translate a blog into `language` and persist the new Content/BlogTranslation pair.

    Returns:
        The new Content row, or None when there was nothing to translate
        (blog or source rows missing, or the language already exists)

    Raises:
        TranslationError: the model did not produce a usable translation
    """
    max_attempts = settings.TRANSLATION_MAX_ATTEMPTS if max_attempts is None else max_attempts
    source_language = settings.SOURCE_LANGUAGE
    language = language.lower()

    blog = db.get(Blog, blog_id)
    if not blog:
        logger.error(f"Blog with id:{blog_id} not found before translation")
        return None

    if language == source_language:
        logger.warning(f"Blog id:{blog_id} is already written in '{language}'")
        return None

    source_content = blog.get_content(source_language)
    if not source_content:
        logger.error(f"Content for blog_id:{blog_id} not found before translation")
        return None

    source_translation = blog.get_translation(source_language)
    if not source_translation:
        logger.error(f"BlogTranslation for blog_id:{blog_id} not found before translation")
        return None

    if blog.get_content(language) or blog.get_translation(language):
        logger.info(f"Blog id:{blog_id} already has a '{language}' translation, skipping")
        return None

    payload = build_translation_payload(source_content, source_translation)
    translated = await translate_payload(provider, payload, language, max_attempts, blog_id)

    content = Content(
        language=language,
        introduction=translated.introduction,
        content=translated.content,
        content1=translated.content1,
        content2=translated.content2,
        conclusion=translated.conclusion,
        seo=translated.seo if translated.seo is not None else source_content.seo,
        cta=translated.call_to_action,
        cta_link=source_content.cta_link,
        cta_type=source_content.cta_type,
    )
    translation = BlogTranslation(
        language=language,
        title=translated.title,
        subtitle=translated.subtitle,
        overview=translated.overview,
        author=translated.author if translated.author is not None else source_translation.author,
    )

    try:
        blog.contents.append(content)
        blog.translations.append(translation)
        db.add(blog)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(content)

    try:
        await add_to_sitemap(blog_url(blog.slug, language))
    except OSError as e:
        logger.error(f"Error updating sitemap for blog id:{blog_id}: {e}")

    logger.info(f"Translated: {blog.slug} to {language}")
    return content
