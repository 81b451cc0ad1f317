# app/services/generation_service.py
"""
Generate-and-save pipeline: draft a blog with the language model, store it
with its taxonomy in one transaction, then publish side effects and
translations.
"""
import logging
from typing import Optional, Sequence

import httpx
from sqlmodel import Session

from app.core.config import settings
from app.core.email import send_generation_failure_email, send_generation_success_email
from app.core.sitemap import add_to_sitemap, blog_url
from app.crud.blog import blog_crud
from app.models.blog import Blog, BlogStatus, Category, SubCategory
from app.schemas.generation import GeneratedBlog
from app.services.blog_generator import generate_blog_post
from app.services.blog_translator import translate_blog
from app.services.exceptions import TranslationError
from app.services.llm import LLMProvider
from app.services.slug_service import resolve_unique_slug
from app.services.unsplash import UnsplashClient

logger = logging.getLogger(__name__)


def get_image_client() -> Optional[UnsplashClient]:
    """Unsplash client when an access key is configured."""
    if not settings.UNSPLASH_ACCESS_KEY:
        return None
    return UnsplashClient(settings.UNSPLASH_ACCESS_KEY, size=settings.UNSPLASH_IMAGE_SIZE)


def save_generated_blog(
    db: Session,
    generated: GeneratedBlog,
    slug: str,
    cta_type: Optional[str] = None,
    cta_link: Optional[str] = None,
    main_image=None
) -> Blog:
    """
    Persist a draft as a published blog in a single transaction.

    Tags, category and subcategory are matched by slug and created when
    missing; the blog gets its source-language Content and BlogTranslation.
    Everything is rolled back if any write fails.
    """
    try:
        tags = blog_crud.get_or_create_tags(db, generated.tags)
        category = blog_crud.get_or_create_term(db, Category, generated.category)
        subcategory = None
        if generated.subcategory:
            subcategory = blog_crud.get_or_create_term(db, SubCategory, generated.subcategory)

        blog = blog_crud.build_blog(
            db,
            slug=slug,
            language=settings.SOURCE_LANGUAGE,
            title=generated.title,
            subtitle=generated.subtitle,
            overview=generated.overview,
            author=generated.author.model_dump() if generated.author else None,
            introduction=generated.introduction,
            content=generated.content,
            content1=generated.content1,
            content2=generated.content2,
            conclusion=generated.conclusion,
            seo=generated.seo.model_dump(),
            cta=generated.call_to_action,
            cta_link=cta_link or "",
            cta_type=cta_type or "",
            category=category,
            subcategory=subcategory,
            tags=tags,
            main_image=main_image,
            main_image_prompt=generated.image_prompt,
            status=BlogStatus.published,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(blog)
    return blog


async def generate_and_save_blog(
    db: Session,
    provider: LLMProvider,
    title: str,
    cta_type: Optional[str] = None,
    cta_link: Optional[str] = None,
    main_image=None,
    languages: Optional[Sequence[str]] = None,
    image_client: Optional[UnsplashClient] = None
) -> Optional[Blog]:
    """
    Generate a blog for `title`, save it and translate it.

    Args:
        db: Database session
        provider: Language model adapter
        title: Topic of the blog
        cta_type: Kind of call to action the blog should end with
        cta_link: Link attached to the call to action
        main_image: Main image reference; looked up on Unsplash when missing
        languages: Translation targets (defaults to TRANSLATION_LANGUAGES)
        image_client: Unsplash client used when no main image is given

    Returns:
        The saved Blog, or None when generation failed

    Raises:
        SlugGenerationError: no free slug could be found
    """
    languages = settings.TRANSLATION_LANGUAGES if languages is None else languages

    generated = await generate_blog_post(provider, title, cta_type)
    if generated is None:
        logger.error(f"Failed: {title}")
        await send_generation_failure_email(title, "The model did not return a usable blog")
        return None

    if not main_image and image_client and generated.image_prompt:
        try:
            main_image = await image_client.find_image(generated.image_prompt)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning(f"Could not fetch main image for '{title}': {e}")

    slug = await resolve_unique_slug(db, provider, generated.slug or generated.title)
    blog = save_generated_blog(db, generated, slug, cta_type, cta_link, main_image)

    url = blog_url(blog.slug, settings.SOURCE_LANGUAGE)
    try:
        await add_to_sitemap(url)
    except OSError as e:
        logger.error(f"Error updating sitemap for blog id:{blog.id}: {e}")
    logger.info(f"Generated: {blog.slug}")

    for language in languages:
        try:
            await translate_blog(db, provider, blog.id, language)
        except TranslationError as e:
            logger.error(f"Failed translation process for blog id:{blog.id} language:{language}: {e}")

    await send_generation_success_email(title, url)
    db.refresh(blog)
    return blog
