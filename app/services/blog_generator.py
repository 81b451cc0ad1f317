# app/services/blog_generator.py
import logging
from typing import Optional

from pydantic import ValidationError

from app.schemas.generation import GeneratedBlog
from app.services.llm import LLMProvider, LLMError, LLMResponseError

logger = logging.getLogger(__name__)


async def generate_blog_post(
    provider: LLMProvider,
    title: str,
    cta_type: Optional[str] = None
) -> Optional[GeneratedBlog]:
    """
    Draft an SEO-friendly blog for `title`.

    Returns:
        The validated draft, or None when the model call failed or its
        output did not match the expected shape
    """
    try:
        data = await provider.generate_blog(title, cta_type)
        return GeneratedBlog.model_validate(data)
    except LLMResponseError as e:
        logger.error(f"Error parsing {provider.name} output for '{title}': {e}")
        if e.raw:
            logger.debug(f"Raw model output: {e.raw[:1000]}")
        return None
    except LLMError as e:
        logger.error(f"Error during {provider.name} API call for '{title}': {e}")
        return None
    except ValidationError as e:
        logger.error(f"Generated blog for '{title}' does not match schema: {e.error_count()} errors")
        logger.debug(str(e))
        return None
